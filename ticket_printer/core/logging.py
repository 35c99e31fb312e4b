"""
Logging utilities for Ticket Printer.

- RequestIdFilter attaches request_id and path (when in a Flask request context)
- JsonFormatter for structured logs when TICKETPRINTER_JSON_LOGS=true
- configure_logging() initializes root logging with journald or console, and
  integrates with Flask's logger
"""

from __future__ import annotations

import logging
import os


class RequestIdFilter(logging.Filter):
    """
    Attach request-scoped metadata (request_id, path) to log records.
    Safely degrades outside of a Flask request context.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        try:
            from flask import g, has_request_context, request  # lazy import

            record.request_id = g.request_id if has_request_context() and hasattr(g, "request_id") else "-"
            record.path = request.path if has_request_context() else "-"
        except Exception:
            record.request_id = "-"
            record.path = "-"
        return True


class JsonFormatter(logging.Formatter):
    """
    Minimal JSON formatter that includes timestamp, level, logger, message, request_id, and path.
    """

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        from json import dumps

        base = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }
        path = getattr(record, "path", None)
        if path is not None:
            base["path"] = path
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return dumps(base, ensure_ascii=False)


def _json_logs_enabled() -> bool:
    return os.environ.get("TICKETPRINTER_JSON_LOGS", "false").lower() in ("1", "true", "yes")


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure root logging for the application.

    Behavior:
    - Sets root logger to ``level`` (INFO by default)
    - Clears any existing handlers to avoid duplicates on reload
    - Chooses JSON or plain formatter based on TICKETPRINTER_JSON_LOGS
    - Prefer systemd's JournalHandler, fallback to StreamHandler
    - Adds RequestIdFilter so formatters can reference %(request_id)s
    - Ensures Flask app logger propagates to root (no separate handlers)

    Returns the configured root logger.
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate logs in dev reloads or repeated factory calls
    root.handlers = []

    formatter: logging.Formatter
    if _json_logs_enabled():
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter("[%(asctime)s] %(levelname)s %(request_id)s %(name)s: %(message)s")

    # Prefer systemd journal when available
    try:
        from systemd.journal import JournalHandler  # type: ignore

        handler: logging.Handler = JournalHandler(SYSLOG_IDENTIFIER="ticket-printer")
        handler.setFormatter(formatter)
    except Exception:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)

    flask_logger = logging.getLogger("flask.app")
    flask_logger.handlers = []
    flask_logger.propagate = True

    return root


__all__ = ["JsonFormatter", "RequestIdFilter", "configure_logging"]
