"""Structured Logging — one dashboard handler on the root logger.

Invariants:
    - Every JSON line carries ts, level, logger, msg
    - Pipeline context (invoice_id, operation, rowcount, error_code, path, fields)
      is copied from the record's `extra=` only when set
    - setup_logging installs exactly one dashboard handler, however often it runs

Design Decisions:
    - Timestamp comes from record.created, so it reflects when the event was
      logged rather than when the handler got to it
    - LOG_FORMAT "text" selects a single-line human format for local runs; any
      other value means JSON
    - Handlers installed by others (pytest caplog, uvicorn) are left untouched
"""

import json
import logging
from datetime import datetime, timezone

INVOICE_CONTEXT_KEYS = (
    "invoice_id", "operation", "rowcount", "error_code", "path", "fields",
)

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

_HANDLER_NAME = "invoice_dashboard"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        entry.update(invoice_context(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def invoice_context(record: logging.LogRecord) -> dict:
    """Pipeline fields attached to a record via `extra=`."""
    return {
        key: getattr(record, key)
        for key in INVOICE_CONTEXT_KEYS
        if getattr(record, key, None) is not None
    }


def build_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt.lower() == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the dashboard handler and set the root level."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    handler = build_handler(fmt)
    root.addHandler(handler)
    root.setLevel(_LEVELS.get(level.upper(), logging.INFO))
    return handler
