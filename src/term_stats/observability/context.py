"""Fields describing the statistic being computed, attached to log records.

The fields live in a ``ContextVar`` so concurrent threads and tasks scoring
different collections never see each other's values.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from types import MappingProxyType


_EMPTY: Mapping[str, str] = MappingProxyType({})
_log_fields: ContextVar[Mapping[str, str]] = ContextVar("term_stats_log_fields", default=_EMPTY)


def current_log_fields() -> Mapping[str, str]:
    """Fields bound in the current execution context."""
    return _log_fields.get()


@contextmanager
def bind_log_fields(**fields: object) -> Iterator[None]:
    """Bind ``fields`` for the duration of the block, on top of any outer binding."""
    merged = {**_log_fields.get(), **{key: str(value) for key, value in fields.items()}}
    token = _log_fields.set(MappingProxyType(merged))
    try:
        yield
    finally:
        _log_fields.reset(token)
