"""Structured Logging — one JSON object per ledger event.

Invariants:
    - Every line carries the record's own timestamp, level, logger and message
    - Ledger context (entity, entity_id, user_id, role, operation, item_count,
      total_amount, error_code, path) is copied from `extra=` when present
    - Money and ids keep their exact text form (Decimal/UUID → str); counts stay ints
    - setup_logging is idempotent: re-running it replaces the ledger handler

Design Decisions:
    - Stdlib logging with a local formatter, no logging library
    - SQLAlchemy engine chatter capped at WARNING unless the root level is DEBUG
"""

import json
import logging
from datetime import datetime, timezone

LEDGER_CONTEXT_KEYS = (
    "entity", "entity_id", "operation", "user_id", "role",
    "item_count", "total_amount", "error_code", "path",
)
_HANDLER_NAME = "zakat_ledger"
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


class JSONFormatter(logging.Formatter):
    """Render a record and its ledger context as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in LEDGER_CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the ledger handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))
    return handler
