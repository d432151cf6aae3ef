"""
Term statistics for relevance scoring.

This package provides a pure-Python TF-IDF scoring stack:
- algorithms: Named TF and IDF weighting functions
- cache: Per-collection memoized counts
- tfidf: The scoring engine
- models: Document/collection views and in-memory adapters
- languages: Common-word lists per language
- workers: Category/method registry of interchangeable statistics workers
"""

from term_stats.algorithms import AlgorithmRegistry, default_registry, register, resolve
from term_stats.cache import StatisticsCache
from term_stats.config import Settings
from term_stats.errors import (
    ConfigurationError,
    InvalidOptionsError,
    MissingCollectionError,
    StatisticsTimeoutError,
    UnknownAlgorithmError,
    UnknownWorkerError,
)
from term_stats.languages import LanguageResources
from term_stats.models import CollectionView, DocumentView, InMemoryCollection, InMemoryDocument, TermQuery
from term_stats.tfidf import TfIdfOptions, TfIdfScorer
from term_stats.workers import StatisticsWorker, WorkerRegistry, default_workers


__all__ = [
    "AlgorithmRegistry",
    "CollectionView",
    "ConfigurationError",
    "DocumentView",
    "InMemoryCollection",
    "InMemoryDocument",
    "InvalidOptionsError",
    "LanguageResources",
    "MissingCollectionError",
    "Settings",
    "StatisticsCache",
    "StatisticsTimeoutError",
    "StatisticsWorker",
    "TermQuery",
    "TfIdfOptions",
    "TfIdfScorer",
    "UnknownAlgorithmError",
    "UnknownWorkerError",
    "WorkerRegistry",
    "default_registry",
    "default_workers",
    "register",
    "resolve",
]
