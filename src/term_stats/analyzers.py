"""Turn raw text into the term counts an in-memory document carries.

The scorer itself never tokenizes; it only reads token registries. Keys are
always lowercased because the scorer looks terms up by their lowercased value.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
import re


WORD_PATTERN = re.compile(r"[\w']+", re.UNICODE)


def tokenize(text: str) -> list[str]:
    """Split ``text`` into lowercased words. Common words are kept."""
    return [match.group(0).lower() for match in WORD_PATTERN.finditer(text)]


def count_terms(terms: Iterable[str]) -> Counter[str]:
    """Build a lowercased term -> occurrence count registry, skipping empty terms."""
    return Counter(term.lower() for term in terms if term)
