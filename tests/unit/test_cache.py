"""Unit tests for per-collection statistics caching."""

from __future__ import annotations

from collections.abc import Iterator
import gc
import threading
import time

import pytest

from term_stats.cache import StatisticsCache
from term_stats.errors import StatisticsTimeoutError
from term_stats.models import DocumentView, InMemoryCollection, InMemoryDocument


pytestmark = pytest.mark.unit


class CountingCollection(InMemoryCollection):
    """Collection that records how often it is enumerated."""

    def __init__(self, collection_id: str, documents: list[DocumentView], delay: float = 0.0) -> None:
        super().__init__(id=collection_id, _documents=list(documents))
        self.enumerations = 0
        self.delay = delay

    def documents(self) -> Iterator[DocumentView]:
        self.enumerations += 1
        for document in super().documents():
            if self.delay:
                time.sleep(self.delay)
            yield document


@pytest.fixture
def counting(animals: InMemoryCollection) -> CountingCollection:
    return CountingCollection("animals", list(animals.documents()))


def test_document_frequency_counts_documents_with_positive_occurrences(animals):
    cache = StatisticsCache(animals)
    assert cache.document_frequency("dog") == 2
    assert cache.document_frequency("cat") == 1
    assert cache.document_frequency("zebra") == 0


def test_document_frequency_fills_term_frequency_of_every_document(animals):
    cache = StatisticsCache(animals)
    cache.document_frequency("dog")

    assert cache.stats()["term_frequency"] == {"hit": 0, "miss": 3}
    assert cache.term_frequency(animals.get("doc1"), "dog") == 1
    assert cache.term_frequency(animals.get("doc3"), "dog") == 0
    assert cache.stats()["term_frequency"] == {"hit": 2, "miss": 3}


def test_document_frequency_enumerates_once(counting):
    cache = StatisticsCache(counting)
    for _ in range(3):
        assert cache.document_frequency("cat") == 1
    assert counting.enumerations == 1
    assert cache.stats()["document_frequency"] == {"hit": 2, "miss": 1}


def test_document_count_and_word_count_are_read_once(animals):
    cache = StatisticsCache(animals)
    doc1 = animals.get("doc1")

    assert cache.document_count() == 3
    assert cache.word_count(doc1) == 3

    animals.add(InMemoryDocument.from_counts("doc4", {"cat": 1}))
    doc1.word_count = 10

    assert cache.document_count() == 3
    assert cache.word_count(doc1) == 3


def test_term_frequency_accepts_occurrence_lists():
    document = InMemoryDocument(id="d", token_registry={"cat": ["tok-1", "tok-2", "tok-3"]}, word_count=3)
    collection = InMemoryCollection.of("c", [document])
    cache = StatisticsCache(collection)
    assert cache.term_frequency(document, "cat") == 3
    assert cache.term_frequency(document, "dog") == 0


def test_populated_entries_ignore_content_changes(animals):
    cache = StatisticsCache(animals)
    assert cache.document_frequency("bird") == 1

    animals.get("doc1").token_registry["bird"] = 4
    assert cache.document_frequency("bird") == 1

    cache.clear()
    assert cache.document_frequency("bird") == 2


def test_concurrent_misses_compute_once(animals):
    collection = CountingCollection("slow", list(animals.documents()), delay=0.01)
    cache = StatisticsCache(collection)
    barrier = threading.Barrier(8)
    results: list[int] = []

    def worker() -> None:
        barrier.wait()
        results.append(cache.document_frequency("dog"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [2] * 8
    assert collection.enumerations == 1


def test_enumeration_deadline(animals):
    collection = CountingCollection("slow", list(animals.documents()), delay=0.05)
    cache = StatisticsCache(collection, df_timeout_seconds=0.01)

    with pytest.raises(StatisticsTimeoutError, match="fish"):
        cache.document_frequency("fish")
    assert "document_frequency" in cache.stats()

    cache.df_timeout_seconds = None
    assert cache.document_frequency("fish") == 1
    assert collection.enumerations == 2


def test_cache_does_not_keep_its_collection_alive():
    collection = InMemoryCollection.of("gone", [InMemoryDocument.from_counts("d1", {"cat": 1})])
    cache = StatisticsCache(collection)
    assert cache.document_count() == 1

    del collection
    gc.collect()

    assert cache.document_count() == 1
    with pytest.raises(ReferenceError):
        cache.document_frequency("cat")
