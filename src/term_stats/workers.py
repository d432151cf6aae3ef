"""Registry of interchangeable workers, keyed by category and method name.

Statistics implementations share one entry point, ``score(entity, options)``,
so callers can select one by name at configuration time and invoke it without
knowing the concrete class.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from term_stats.errors import UnknownWorkerError
from term_stats.tfidf import TfIdfScorer


@runtime_checkable
class StatisticsWorker(Protocol):
    """Interface shared by every worker of the ``statistics`` category."""

    def score(self, entity: Any, options: Mapping[str, Any] | None = None) -> float: ...


@dataclass(frozen=True)
class WorkerKey:
    """Category/method pair a worker is registered under."""

    category: str
    method: str

    def __str__(self) -> str:
        return f"{self.category}/{self.method}"


class WorkerRegistry:
    """Central registry mapping operation names to worker instances.

    Usage:
        registry = WorkerRegistry()
        registry.register("statistics", "tf_idf", TfIdfScorer())

        worker = registry.get("statistics", "tf_idf")
        worker.score(query, {"precision": 2})
    """

    def __init__(self) -> None:
        self._workers: dict[WorkerKey, StatisticsWorker] = {}

    def register(self, category: str, method: str, worker: StatisticsWorker) -> None:
        """Register ``worker`` under ``category``/``method``, replacing any previous one."""
        if not isinstance(worker, StatisticsWorker):
            raise TypeError(f"{type(worker).__name__} does not implement score(entity, options)")
        self._workers[WorkerKey(category, method)] = worker

    def get(self, category: str, method: str) -> StatisticsWorker:
        """Return the worker registered under ``category``/``method``.

        Raises:
            UnknownWorkerError: Nothing is registered under that pair
        """
        worker = self._workers.get(WorkerKey(category, method))
        if worker is None:
            raise UnknownWorkerError(category, method)
        return worker

    def lookup(self, method: str) -> WorkerKey | None:
        """Find the category that provides ``method``, if any."""
        return next((key for key in self._workers if key.method == method), None)

    def methods(self, category: str) -> list[str]:
        """List registered method names for a category."""
        return sorted(key.method for key in self._workers if key.category == category)

    def __len__(self) -> int:
        return len(self._workers)

    def __contains__(self, key: tuple[str, str]) -> bool:
        category, method = key
        return WorkerKey(category, method) in self._workers


def default_workers() -> WorkerRegistry:
    """Build a registry with the built-in statistics workers."""
    registry = WorkerRegistry()
    scorer = TfIdfScorer()
    registry.register(scorer.category, scorer.method, scorer)
    return registry
