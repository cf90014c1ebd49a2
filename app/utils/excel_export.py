from __future__ import annotations
from typing import Any, Callable, Iterable, Sequence, Tuple
from io import BytesIO
from datetime import datetime

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.styles import Font, PatternFill

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (header, getter) pairs
Column = Tuple[str, Callable[[Any], Any]]

ROSTER_COLUMNS: Sequence[Column] = (
    ("Student ID", lambda s: s.id),
    ("Name", lambda s: s.name),
    ("Email", lambda s: s.email),
    ("Enrolled At", lambda s: s.enrolled_at),
)


def _cell(value: Any) -> Any:
    # openpyxl rejects tz-aware datetimes
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M:%S")
    return value


def table_to_xlsx_bytes(items: Iterable[Any], columns: Sequence[Column], sheet_name: str) -> bytes:
    """
    One header row, then one row per item. The header is written even
    when there are no items, so an empty roster is still a valid table.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name[:31]

    headers = [h for h, _ in columns]
    ws.append(headers)
    for cell in ws[1]:
        cell.font = Font(bold=True)
        cell.fill = PatternFill("solid", fgColor="DDEBF7")
    ws.freeze_panes = "A2"

    widths = [len(h) for h in headers]
    for item in items:
        values = [_cell(get(item)) for _, get in columns]
        ws.append(values)
        for i, v in enumerate(values):
            if v is not None:
                widths[i] = max(widths[i], len(str(v)))

    for i, w in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(i)].width = min(w + 2, 60)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


def make_filename(prefix: str) -> str:
    return f"{prefix}_{datetime.now():%Y%m%d_%H%M%S}.xlsx"
