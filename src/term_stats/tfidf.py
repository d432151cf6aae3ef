"""TF-IDF weight of a term occurring in a document of a collection.

The weight multiplies a transform of how often the term occurs in the document
(TF) by a transform of how rare it is across the collection (IDF). Both
transforms are looked up by name in an ``AlgorithmRegistry``.

Statistics are memoized per collection instance: the scorer keeps one
``StatisticsCache`` for every collection it has seen, keyed by object identity
and released together with the collection itself.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import logging
import threading
from typing import Any
import weakref

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from term_stats.algorithms import AlgorithmRegistry, default_registry
from term_stats.cache import StatisticsCache
from term_stats.config import Settings
from term_stats.errors import InvalidOptionsError, MissingCollectionError
from term_stats.languages import LanguageResources, default_resources
from term_stats.models import CollectionView, DocumentView, TermQuery
from term_stats.observability.metrics import SCORES_TOTAL


logger = logging.getLogger(__name__)

# Options that select a weighting function. "normalization" is a historical
# key: word-count normalization is actually switched on by
# "normalize_word_count", so passing "normalization" resolves against a
# family the registry does not know and fails.
ALGORITHM_OPTIONS = ("tf", "idf", "normalization")

# Normalized terms this short always score 0.
MIN_TERM_LENGTH = 3

_BOOL = TypeAdapter(bool)


class TfIdfOptions(BaseModel):
    """Validated per-call scoring options."""

    model_config = ConfigDict(extra="forbid")

    tf: str = "natural"
    idf: str = "logarithm"
    remove_common_words: bool = True
    precision: int = Field(default=4, ge=0)
    normalize_word_count: bool = False
    normalization: Any = None


class TfIdfScorer:
    """Score term occurrences against collection statistics.

    Usage:
        scorer = TfIdfScorer()
        collection = InMemoryCollection.of("c1", documents)
        scorer.score(collection.query("cat", "doc1"), {"tf": "logarithm"})
    """

    category = "statistics"
    method = "tf_idf"

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        registry: AlgorithmRegistry | None = None,
        languages: LanguageResources | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.registry = registry or default_registry
        self.languages = languages or default_resources
        self._caches: dict[int, StatisticsCache] = {}
        self._caches_lock = threading.Lock()
        self._common_words: dict[str, frozenset[str]] = {}
        self._common_words_lock = threading.Lock()

    def cache_for(self, collection: CollectionView) -> StatisticsCache:
        """Return the statistics cache attached to ``collection``, creating it on first use.

        Caches are keyed by ``id(collection)`` so collections need not be
        hashable. The entry is dropped when the collection is garbage collected.
        """
        key = id(collection)
        with self._caches_lock:
            cache = self._caches.get(key)
            if cache is None:
                cache = StatisticsCache(collection, df_timeout_seconds=self.settings.df_timeout_seconds)
                self._caches[key] = cache
                try:
                    weakref.finalize(collection, self._release_cache, key)
                except TypeError:
                    # The cache holds such a collection strongly, so its id stays unique.
                    logger.debug("Collection %s does not support weak references", collection.id)
                logger.debug("Attached statistics cache to collection %s", collection.id)
            return cache

    def _release_cache(self, key: int) -> None:
        with self._caches_lock:
            self._caches.pop(key, None)

    def common_words(self, language: str | None) -> frozenset[str] | None:
        """Common words for ``language``; a defined list is looked up once and reused."""
        if not language:
            return None
        key = language.lower()
        with self._common_words_lock:
            cached = self._common_words.get(key)
            if cached is not None:
                return cached
            words = self.languages.common_words(key)
            if words is not None:
                self._common_words[key] = words
            return words

    def score(self, entity: TermQuery, options: Mapping[str, Any] | None = None) -> float:
        """Return the rounded, absolute TF-IDF weight of ``entity``.

        Args:
            entity: Term value, language, owning document and collection
            options: Overrides for ``tf``, ``idf``, ``remove_common_words``,
                ``precision`` and ``normalize_word_count``

        Raises:
            UnknownAlgorithmError: A requested weighting function is not registered
            MissingCollectionError: The query has no document, no collection or an empty collection
            InvalidOptionsError: An option has an invalid value or is unknown
        """
        raw_options = dict(options or {})
        defaults = self.settings.scoring_defaults()
        term = entity.normalized_value

        remove_common = self._flag(raw_options, defaults, "remove_common_words")
        common = self.common_words(entity.language)
        if common is not None and remove_common and term in common:
            SCORES_TOTAL.labels(outcome="common_word").inc()
            return 0.0

        if len(term) < MIN_TERM_LENGTH:
            SCORES_TOTAL.labels(outcome="short_term").inc()
            return 0.0

        resolved = self._resolve_options({**defaults, **raw_options})
        functions = {
            name: self.registry.resolve(name, value)
            for name, value in self._algorithm_options(resolved).items()
        }

        document = entity.document
        collection = entity.collection
        if document is None or collection is None:
            raise MissingCollectionError()

        cache = self.cache_for(collection)
        n = float(cache.document_count())
        if n == 0:
            raise MissingCollectionError()
        df = float(cache.document_frequency(term))
        f = float(cache.term_frequency(document, term))

        tf_value = float(functions["tf"](f))
        if resolved.normalize_word_count:
            wc = cache.word_count(document)
            tf_value = tf_value / wc if wc else 0.0

        idf_value = functions["idf"](n, df)
        # The absolute value hides a negative IDF (term in most documents).
        tf_idf = abs(tf_value * idf_value)
        SCORES_TOTAL.labels(outcome="computed").inc()
        return round(tf_idf, resolved.precision)

    def score_terms(
        self,
        document: DocumentView,
        collection: CollectionView,
        terms: Iterable[str],
        options: Mapping[str, Any] | None = None,
        *,
        language: str | None = None,
    ) -> dict[str, float]:
        """Score several terms of one document; duplicate terms are scored once."""
        scores: dict[str, float] = {}
        for value in terms:
            if value in scores:
                continue
            query = TermQuery(value=value, language=language, document=document, collection=collection)
            scores[value] = self.score(query, options)
        return scores

    def _flag(self, raw_options: dict[str, Any], defaults: dict[str, Any], name: str) -> bool:
        try:
            return _BOOL.validate_python(raw_options.get(name, defaults[name]))
        except ValidationError as exc:
            raise InvalidOptionsError(f"Invalid tf_idf option {name!r}: {exc}") from exc

    def _resolve_options(self, merged: dict[str, Any]) -> TfIdfOptions:
        try:
            return TfIdfOptions.model_validate(merged)
        except ValidationError as exc:
            raise InvalidOptionsError(f"Invalid tf_idf options: {exc}") from exc

    def _algorithm_options(self, resolved: TfIdfOptions) -> dict[str, str]:
        selected: dict[str, str] = {}
        for name in ALGORITHM_OPTIONS:
            value = getattr(resolved, name)
            if value is not None:
                selected[name] = str(value)
        return selected
