import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# libraries that are chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "passlib", "multipart")


def _handler(handler: logging.Handler, level: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: str | None = None, log_dir: str | None = None):
    """
    Console plus a rotating file at <LOG_DIR>/app.log.
    Safe to call more than once; handlers are only attached the first time.
    """
    level = (level or settings.LOG_LEVEL).upper()
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    path = Path(log_dir or settings.LOG_DIR)
    path.mkdir(parents=True, exist_ok=True)

    root.addHandler(_handler(logging.StreamHandler(), level))
    root.addHandler(_handler(
        RotatingFileHandler(path / "app.log", maxBytes=5 * 1024 * 1024, backupCount=5, encoding="utf-8"),
        level,
    ))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
