import pandas as pd


def to_str(v):
    if v is None or pd.isna(v):
        return None
    s = str(v).strip()
    return None if s == "" or s.lower() == "nan" else s


def to_int(v):
    if v is None or pd.isna(v):
        return None
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return None


def to_float(v):
    if v is None or pd.isna(v):
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


def read_course_rows(fileobj) -> list[dict]:
    """
    Read the first sheet of an .xlsx upload into course field dicts.

    Expected headers: Title, Description, Duration, Price, Content
    (case-insensitive, any order). Rows without a title are dropped.
    """
    df = pd.read_excel(fileobj)
    df.columns = [str(c).strip().lower() for c in df.columns]

    rows = []
    for _, row in df.iterrows():
        title = to_str(row.get("title"))
        if not title:
            continue
        rows.append({
            "title": title,
            "description": to_str(row.get("description")),
            "duration": to_int(row.get("duration")) or 0,
            "price": to_float(row.get("price")) or 0.0,
            "content": to_str(row.get("content")),
        })
    return rows
