from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..corpus.build import iter_documents
from ..corpus.types import Collection, Document

_SEARCH_RECORDS_CACHE: dict[tuple[int, str | None], tuple[Sequence[Collection], list[SearchRecord]]] = {}


@dataclass(frozen=True)
class SearchRecord:
    """One searchable document paired with its lowercase search key."""

    document: Document
    key: str


def clear_search_cache() -> None:
    _SEARCH_RECORDS_CACHE.clear()


def search_key(document: Document) -> str:
    parts = (
        document.number or "",
        document.english_title or "",
        document.pali_title or "",
        document.collection_code,
    )
    return " ".join(parts).lower()


def _flatten_walk(collections: Sequence[Collection], scope: str | None) -> list[SearchRecord]:
    records: list[SearchRecord] = []
    for collection in collections:
        if scope is not None and collection.code != scope:
            continue
        for document in iter_documents(collection):
            if document.is_valid:
                records.append(SearchRecord(document, search_key(document)))
    return records


def flatten_documents(collections: Sequence[Collection], scope: str | None = None) -> list[SearchRecord]:
    """Return valid documents under ``scope`` in depth-first source order.

    ``scope`` is a collection code; ``None`` flattens the whole forest. Results
    are cached per scope for the most recently flattened forest only; a new
    forest object (for example after a metadata reload) evicts the old one.
    """
    cache_key = (id(collections), scope)
    cached = _SEARCH_RECORDS_CACHE.get(cache_key)
    if cached is not None and cached[0] is collections:
        return list(cached[1])

    stale = [key for key, (forest, _records) in _SEARCH_RECORDS_CACHE.items() if forest is not collections]
    for key in stale:
        del _SEARCH_RECORDS_CACHE[key]

    records = _flatten_walk(collections, scope)
    _SEARCH_RECORDS_CACHE[cache_key] = (collections, records)
    return list(records)


def search(collections: Sequence[Collection], scope: str | None, query: str) -> list[Document] | None:
    """Filter documents whose search key contains ``query`` as a substring.

    Returns ``None`` for an empty or whitespace-only query without touching
    the tree. Otherwise results keep flattening order; there is no scoring.
    """
    if not query or not query.strip():
        return None
    needle = query.lower()
    return [record.document for record in flatten_documents(collections, scope) if needle in record.key]


def format_result(document: Document) -> str:
    return document.display
