"""Structured Logging - JSON formatter and one-shot logging setup.

Invariants:
    - Every record carries timestamp, level, logger name, and message
    - Roulette context (catalog_type, store_key, resource, ...) surfaced when present
    - Calling setup_logging twice never duplicates the root handler
    - httpx request lines and SQLAlchemy engine chatter stay at WARNING

Design Decisions:
    - setup_logging called from the lifespan; tests rely on pytest's caplog instead
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "catalog_type", "store_key", "resource", "status_code",
    "error_code", "member_count", "path",
)

_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine")

_HANDLER_NAME = "splaroulette"


class JSONFormatter(logging.Formatter):
    """One JSON object per line, UTF-8 kept readable for Japanese catalog names."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: record.__dict__[key]
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application's root handler."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
