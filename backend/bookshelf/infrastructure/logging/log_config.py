"""Logging levels for the bookshelf API, read from Settings.

``log_level`` sets the root level. SQL echo, uvicorn and the rating and
bookmark services each get their own level on top of it.
"""

import logging
import sys

from bookshelf.config import get_settings

# Settings field -> loggers it controls
_LEVEL_FIELDS: dict[str, tuple[str, ...]] = {
    "log_level_sql": ("sqlalchemy.engine", "aiosqlite"),
    "log_level_uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "log_level_ratings": ("bookshelf.application.services",),
}


def setup_logging() -> None:
    settings = get_settings()
    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
        root.addHandler(handler)

    for field_name, logger_names in _LEVEL_FIELDS.items():
        level = _parse_level(getattr(settings, field_name))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
