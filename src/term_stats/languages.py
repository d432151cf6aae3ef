"""Common-word lists per language.

The scorer only needs a membership test, so a provider returns a frozen set
of lowercase words for a language or ``None`` when the language has no list.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import threading


logger = logging.getLogger(__name__)


ENGLISH_COMMON_WORDS = (
    "a",
    "about",
    "after",
    "all",
    "also",
    "an",
    "and",
    "any",
    "are",
    "as",
    "at",
    "be",
    "because",
    "been",
    "but",
    "by",
    "can",
    "could",
    "do",
    "for",
    "from",
    "had",
    "has",
    "have",
    "he",
    "her",
    "him",
    "his",
    "how",
    "if",
    "in",
    "into",
    "is",
    "it",
    "its",
    "more",
    "no",
    "not",
    "of",
    "on",
    "one",
    "or",
    "other",
    "our",
    "out",
    "she",
    "should",
    "so",
    "some",
    "such",
    "than",
    "that",
    "the",
    "their",
    "them",
    "then",
    "there",
    "these",
    "they",
    "this",
    "to",
    "was",
    "we",
    "were",
    "what",
    "when",
    "which",
    "who",
    "will",
    "with",
    "would",
    "you",
    "your",
)


class LanguageResources:
    """Registry of common-word lists keyed by language identifier.

    Language identifiers are matched case-insensitively. Registering a list
    for a language that already has one replaces it.
    """

    def __init__(self, common_words: dict[str, Iterable[str]] | None = None) -> None:
        self._common_words: dict[str, frozenset[str]] = {}
        self._lock = threading.Lock()
        for language, words in (common_words or {}).items():
            self.register(language, words)

    @classmethod
    def with_builtins(cls) -> LanguageResources:
        return cls({"english": ENGLISH_COMMON_WORDS, "en": ENGLISH_COMMON_WORDS})

    def register(self, language: str, words: Iterable[str]) -> None:
        """Register the common words for ``language``."""
        with self._lock:
            self._common_words[language.lower()] = frozenset(word.lower() for word in words)
        logger.debug("Registered common words for %s", language)

    def common_words(self, language: str | None) -> frozenset[str] | None:
        """Return the common-word set for ``language`` or None when undefined."""
        if not language:
            return None
        return self._common_words.get(language.lower())

    def languages(self) -> list[str]:
        return sorted(self._common_words)


default_resources = LanguageResources.with_builtins()
