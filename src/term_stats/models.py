"""Read-only views the scorer needs from the document model, plus in-memory adapters."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sized
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from term_stats.analyzers import count_terms, tokenize


@runtime_checkable
class DocumentView(Protocol):
    """What the scorer reads from a document.

    ``token_registry`` maps a normalized (lowercased) term value either to an
    occurrence count or to a sized collection of occurrences.
    """

    @property
    def id(self) -> str: ...

    @property
    def word_count(self) -> int: ...

    @property
    def token_registry(self) -> Mapping[str, int | Sized]: ...


@runtime_checkable
class CollectionView(Protocol):
    """What the scorer reads from a collection."""

    @property
    def id(self) -> str: ...

    @property
    def document_count(self) -> int: ...

    def documents(self) -> Iterable[DocumentView]: ...


@dataclass(frozen=True)
class TermQuery:
    """A term occurrence to score, constructed per call."""

    value: str
    language: str | None = None
    document: DocumentView | None = None
    collection: CollectionView | None = None

    @property
    def normalized_value(self) -> str:
        return self.value.lower()


def occurrence_count(entry: int | Sized | None) -> int:
    """Return the number of occurrences stored in a token registry entry."""
    if entry is None:
        return 0
    if isinstance(entry, int):
        return entry
    return len(entry)


@dataclass(eq=False)
class InMemoryDocument:
    """Document whose token registry is already materialized in memory."""

    id: str
    token_registry: dict[str, int | Sized] = field(default_factory=dict)
    word_count: int = 0

    @classmethod
    def from_text(
        cls, doc_id: str, text: str, *, tokenizer: Callable[[str], Iterable[str]] | None = None
    ) -> InMemoryDocument:
        """Split ``text`` into terms and build the lowercased token registry and word count."""
        terms = list((tokenizer or tokenize)(text))
        return cls(id=doc_id, token_registry=dict(count_terms(terms)), word_count=len(terms))

    @classmethod
    def from_counts(cls, doc_id: str, counts: Mapping[str, int], *, word_count: int | None = None) -> InMemoryDocument:
        registry = {term.lower(): count for term, count in counts.items()}
        total = word_count if word_count is not None else sum(registry.values())
        return cls(id=doc_id, token_registry=registry, word_count=total)


@dataclass(eq=False)
class InMemoryCollection:
    """Ordered collection of in-memory documents.

    Instances compare by identity: two collections with the same id and
    documents are still distinct.
    """

    id: str
    _documents: list[DocumentView] = field(default_factory=list)

    @classmethod
    def of(cls, collection_id: str, documents: Iterable[DocumentView]) -> InMemoryCollection:
        return cls(id=collection_id, _documents=list(documents))

    def add(self, document: DocumentView) -> None:
        self._documents.append(document)

    @property
    def document_count(self) -> int:
        return len(self._documents)

    def documents(self) -> Iterator[DocumentView]:
        return iter(list(self._documents))

    def get(self, doc_id: str) -> DocumentView | None:
        return next((doc for doc in self._documents if doc.id == doc_id), None)

    def query(self, value: str, doc_id: str, *, language: str | None = None) -> TermQuery:
        """Build a term query for ``value`` inside the document ``doc_id``."""
        return TermQuery(value=value, language=language, document=self.get(doc_id), collection=self)
