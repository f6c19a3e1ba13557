"""Structured JSON logger for graphsync.

Each record is a single-line JSON object, ready for log aggregation
without extra parsing.  The reconcilers only log field names and counts,
never entity values.

The ``graphsync.reconcile`` logger is created at ``WARNING``, so a default
install only reports rejected rules.  Per-call summaries are ``DEBUG``
records; lower the level to see them::

    logging.getLogger("graphsync.reconcile").setLevel(logging.DEBUG)

Typical structured output::

    {"ts": "2026-10-19T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "graphsync.reconcile", "message": "set reconciliation planned",
     "local": 3, "remote": 3, "to_create": 1, "to_delete": 1}

Usage::

    from graphsync.observability import get_logger

    log = get_logger("graphsync.reconcile", level=logging.WARNING)
    log.debug("planned", extra={"extra_fields": {"to_create": 2}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Guaranteed keys: ``ts`` (ISO-8601 UTC), ``level``, ``logger`` and
    ``message``.  Fields passed via ``extra={"extra_fields": {...}}`` are
    merged into the top-level object; ``exception`` and ``stack_info`` are
    added when present on the record.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra_fields: dict[str, Any] | None = getattr(
            record, "extra_fields", None
        )
        if extra_fields is not None:
            log_entry.update(extra_fields)

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_entry, default=str)


# One handler per logger name, so repeated get_logger calls never stack
# handlers.
_configured_loggers: set[str] = set()


def get_logger(
    name: str = "graphsync",
    *,
    level: int | str = logging.DEBUG,
    stream: Any | None = None,
) -> logging.Logger:
    """Get or create a structured JSON logger.

    Parameters
    ----------
    name:
        Logger name.  Defaults to ``"graphsync"``.
    level:
        Minimum log level, as an ``int`` or a case-insensitive level name.
        Only applied the first time *name* is configured.
    stream:
        Output stream for the handler.  Defaults to ``sys.stderr``.

    Returns
    -------
    logging.Logger
        A logger with a :class:`StructuredFormatter` handler attached.
        Repeated calls with the same *name* return the same logger and do
        **not** add duplicate handlers.
    """
    logger = logging.getLogger(name)

    if name not in _configured_loggers:
        resolved_level = (
            logging.getLevelName(level.upper())
            if isinstance(level, str)
            else level
        )
        logger.setLevel(resolved_level)

        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

        logger.propagate = False

        _configured_loggers.add(name)

    return logger
