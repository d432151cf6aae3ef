"""Shared test fixtures and configuration."""

import os

import pytest


# Scoring defaults pinned for every test run regardless of the developer's shell
TEST_ENV = {
    "TERM_STATS_DEFAULT_TF": "natural",
    "TERM_STATS_DEFAULT_IDF": "logarithm",
    "TERM_STATS_REMOVE_COMMON_WORDS": "true",
    "TERM_STATS_PRECISION": "4",
    "TERM_STATS_NORMALIZE_WORD_COUNT": "false",
    "TERM_STATS_LOG_LEVEL": "info",
    "TERM_STATS_LOG_JSON": "true",
}


for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("TERM_STATS_DF_TIMEOUT_SECONDS", None)

from term_stats.algorithms import AlgorithmRegistry
from term_stats.config import Settings
from term_stats.languages import LanguageResources
from term_stats.models import InMemoryCollection, InMemoryDocument
from term_stats.tfidf import TfIdfScorer


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset scoring environment variables before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("TERM_STATS_DF_TIMEOUT_SECONDS", raising=False)


@pytest.fixture
def animals() -> InMemoryCollection:
    """Three documents: {cat:2, dog:1}, {dog:1, bird:1}, {fish:3}."""
    return InMemoryCollection.of(
        "animals",
        [
            InMemoryDocument.from_counts("doc1", {"cat": 2, "dog": 1}, word_count=3),
            InMemoryDocument.from_counts("doc2", {"dog": 1, "bird": 1}, word_count=2),
            InMemoryDocument.from_counts("doc3", {"fish": 3}, word_count=3),
        ],
    )


@pytest.fixture
def registry() -> AlgorithmRegistry:
    return AlgorithmRegistry.with_builtins()


@pytest.fixture
def scorer(registry: AlgorithmRegistry) -> TfIdfScorer:
    """Scorer isolated from the process-wide algorithm and language registries."""
    return TfIdfScorer(settings=Settings(), registry=registry, languages=LanguageResources.with_builtins())
