"""Observability helpers: structured logging, Prometheus metrics and tracing spans."""

from term_stats.observability.context import bind_log_fields, current_log_fields
from term_stats.observability.logging import JsonFormatter, StatisticContextFilter, configure_logging
from term_stats.observability.metrics import (
    CACHE_LOOKUPS,
    DF_ENUMERATION_LATENCY,
    SCORES_TOTAL,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from term_stats.observability.tracing import create_span, get_tracer


__all__ = [
    "CACHE_LOOKUPS",
    "DF_ENUMERATION_LATENCY",
    "SCORES_TOTAL",
    "JsonFormatter",
    "StatisticContextFilter",
    "bind_log_fields",
    "configure_logging",
    "create_span",
    "current_log_fields",
    "get_metrics",
    "get_metrics_content_type",
    "get_tracer",
    "track_latency",
]
