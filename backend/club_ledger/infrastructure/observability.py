"""Structured Logging — ledger context fields on every log line, JSON or text.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Ledger context passed via `extra=` (LEDGER_FIELDS) is rendered by both
      formatters: JSON keys in production, a trailing [k=v ...] block in text
    - setup_logging is idempotent: calling it again swaps the handler, it
      never stacks a second one

Design Decisions:
    - Formatters on the standard logging module: services log with plain
      logger.info(..., extra={...}) and stay unaware of the output format
    - SQLAlchemy engine chatter is capped at WARNING unless the root level is DEBUG
"""

import logging
import json
from datetime import datetime, timezone

LEDGER_FIELDS = (
    "track", "date_key", "member_id", "mutation", "record_key",
    "applied", "error_code", "path",
)

_HANDLER_NAME = "club_ledger"
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def ledger_context(record: logging.LogRecord) -> dict:
    """LEDGER_FIELDS present on a record, in declaration order."""
    context = {}
    for key in LEDGER_FIELDS:
        val = record.__dict__.get(key)
        if val is not None:
            context[key] = getattr(val, "value", val)
    return context


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **ledger_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines for development, ledger context appended."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = ledger_context(record)
        if not context:
            return line
        fields = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{fields}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the club ledger handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(root_level)
    quiet_level = root_level if root_level <= logging.DEBUG else max(root_level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
