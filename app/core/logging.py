"""Logging setup, applied once from the application lifespan.

SQLAlchemy and uvicorn get their own levels so SQL echo can be silenced
without hiding application logs.
"""
import logging
import sys
from typing import Dict, List

from app.config import settings

_CATEGORY_MAP: Dict[str, List[str]] = {
    "LOG_LEVEL_SQL": ["sqlalchemy.engine", "sqlalchemy.pool"],
    "LOG_LEVEL": ["uvicorn", "uvicorn.access", "uvicorn.error"],
}


def setup_logging() -> None:
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.LOG_LEVEL))

    # uvicorn installs its own handlers; tests and scripts do not
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        level = _parse_level(getattr(settings, settings_field, "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s sql=%s", settings.LOG_LEVEL, settings.LOG_LEVEL_SQL
    )


def _parse_level(raw: str) -> int:
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
