"""Structured logging for term-stats.

``configure_logging`` reads ``Settings.log_level`` and ``Settings.log_json``.
Records are stamped at emit time with the bound statistic fields (collection,
term) and with the ids of the active OpenTelemetry span, if any.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import sys
from typing import Any

from opentelemetry import trace
import orjson

from term_stats.config import Settings
from term_stats.observability.context import current_log_fields


PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys() | {"message", "asctime"})


class StatisticContextFilter(logging.Filter):
    """Copy bound log fields and span ids onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in current_log_fields().items():
            setattr(record, key, value)
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record; non-standard record attributes become keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return orjson.dumps(entry, default=_to_json).decode()


def _to_json(value: Any) -> Any:
    # Common-word sets and registry keys are the usual non-JSON extras.
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def configure_logging(settings: Settings | None = None, *, logger_levels: dict[str, str] | None = None) -> None:
    """Install one stdout handler on the root logger according to ``settings``.

    Args:
        settings: Source of ``log_level`` and ``log_json``; loaded from the environment when omitted
        logger_levels: Per-logger level overrides (logger name -> level string)
    """
    settings = settings or Settings()
    root = logging.getLogger()
    root.setLevel(settings.log_level.upper())

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(StatisticContextFilter())
    handler.setFormatter(JsonFormatter() if settings.log_json else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)

    for name, level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(level.upper())
