"""Prometheus metrics for cache efficiency and scoring volume."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


CACHE_LOOKUPS = Counter(
    "term_stats_cache_lookups_total",
    "Statistics cache lookups",
    ["family", "outcome"],
)

SCORES_TOTAL = Counter(
    "term_stats_scores_total",
    "Scores returned by the TF-IDF scorer",
    ["outcome"],
)

DF_ENUMERATION_LATENCY = Histogram(
    "term_stats_df_enumeration_seconds",
    "Time spent enumerating a collection to compute document frequency",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        target = histogram.labels(**labels) if labels else histogram
        target.observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
