"""Memoized collection statistics for TF-IDF scoring.

A ``StatisticsCache`` belongs to exactly one collection. Entries are computed
lazily on first access and are never invalidated: once a count is stored it is
returned verbatim even if the underlying document changes afterwards. Call
``clear()`` to drop everything after mutating a collection.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
import logging
import threading
import time
import weakref

from term_stats.errors import StatisticsTimeoutError
from term_stats.models import CollectionView, DocumentView, occurrence_count
from term_stats.observability.context import bind_log_fields
from term_stats.observability.metrics import CACHE_LOOKUPS, DF_ENUMERATION_LATENCY, track_latency
from term_stats.observability.tracing import create_span


logger = logging.getLogger(__name__)

DOCUMENT_COUNT = "document_count"
DOCUMENT_FREQUENCY = "document_frequency"
TERM_FREQUENCY = "term_frequency"
WORD_COUNT = "word_count"


class StatisticsCache:
    """Per-collection memo of document count, document/term frequency and word count.

    All population happens under one re-entrant lock, so concurrent misses on
    the same key compute the value once and later callers read the stored
    result.

    The cache refers to its collection weakly when the collection supports
    weak references, so it never keeps the collection alive on its own.
    """

    def __init__(self, collection: CollectionView, *, df_timeout_seconds: float | None = None) -> None:
        try:
            self._collection_ref: Callable[[], CollectionView | None] = weakref.ref(collection)
        except TypeError:
            # Objects without weak-reference support are held strongly.
            self._collection_ref = lambda: collection
        self.df_timeout_seconds = df_timeout_seconds
        self._lock = threading.RLock()
        self._document_count: int | None = None
        self._document_frequency: dict[str, int] = {}
        self._term_frequency: dict[str, dict[str, int]] = {}
        self._word_count: dict[str, int] = {}
        self._lookups: Counter[tuple[str, str]] = Counter()

    @property
    def collection(self) -> CollectionView:
        collection = self._collection_ref()
        if collection is None:
            raise ReferenceError("The collection owning this statistics cache no longer exists")
        return collection

    def _record(self, family: str, hit: bool) -> None:
        outcome = "hit" if hit else "miss"
        self._lookups[(family, outcome)] += 1
        CACHE_LOOKUPS.labels(family=family, outcome=outcome).inc()

    def document_count(self) -> int:
        """Number of documents in the collection, read once."""
        with self._lock:
            if self._document_count is not None:
                self._record(DOCUMENT_COUNT, hit=True)
                return self._document_count
            self._record(DOCUMENT_COUNT, hit=False)
            self._document_count = self.collection.document_count
            return self._document_count

    def term_frequency(self, document: DocumentView, term: str) -> int:
        """Occurrences of ``term`` in ``document``; a missing term counts as 0."""
        with self._lock:
            per_document = self._term_frequency.setdefault(document.id, {})
            cached = per_document.get(term)
            if cached is not None:
                self._record(TERM_FREQUENCY, hit=True)
                return cached
            self._record(TERM_FREQUENCY, hit=False)
            count = occurrence_count(document.token_registry.get(term))
            per_document[term] = count
            return count

    def document_frequency(self, term: str) -> int:
        """Number of documents in the collection containing ``term`` at least once.

        A miss enumerates the whole collection and fills the term-frequency
        entry of every visited document as a byproduct.

        Raises:
            StatisticsTimeoutError: Enumeration exceeded ``df_timeout_seconds``
        """
        with self._lock:
            cached = self._document_frequency.get(term)
            if cached is not None:
                self._record(DOCUMENT_FREQUENCY, hit=True)
                return cached
            self._record(DOCUMENT_FREQUENCY, hit=False)

            collection_id = str(self.collection.id)
            attributes = {"term_stats.collection": collection_id, "term_stats.term": term}
            with bind_log_fields(collection=collection_id, term=term):
                with create_span("term_stats.document_frequency", attributes=attributes), track_latency(
                    DF_ENUMERATION_LATENCY
                ):
                    df = self._enumerate(term)

                self._document_frequency[term] = df
                logger.debug("Computed document frequency %d", df)
            return df

    def _enumerate(self, term: str) -> int:
        deadline = None
        if self.df_timeout_seconds is not None:
            deadline = time.monotonic() + self.df_timeout_seconds

        df = 0
        for document in self.collection.documents():
            if self.term_frequency(document, term) > 0:
                df += 1
            if deadline is not None and time.monotonic() > deadline:
                raise StatisticsTimeoutError(
                    f"Document frequency of '{term}' in collection {self.collection.id} "
                    f"exceeded {self.df_timeout_seconds}s"
                )
        return df

    def word_count(self, document: DocumentView) -> int:
        """Total words of ``document``, read once."""
        with self._lock:
            cached = self._word_count.get(document.id)
            if cached is not None:
                self._record(WORD_COUNT, hit=True)
                return cached
            self._record(WORD_COUNT, hit=False)
            count = document.word_count
            self._word_count[document.id] = count
            return count

    def stats(self) -> dict[str, dict[str, int]]:
        """Hit/miss counters per statistic family."""
        with self._lock:
            result: dict[str, dict[str, int]] = {}
            for (family, outcome), count in self._lookups.items():
                result.setdefault(family, {"hit": 0, "miss": 0})[outcome] = count
            return result

    def clear(self) -> None:
        """Drop every cached entry; the next lookups recompute from the collection."""
        with self._lock:
            self._document_count = None
            self._document_frequency.clear()
            self._term_frequency.clear()
            self._word_count.clear()
        logger.debug("Cleared statistics cache for collection %s", self.collection.id)
