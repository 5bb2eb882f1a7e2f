"""Corpus metadata tree: datatypes, construction, and the cached store."""

from __future__ import annotations

from .build import DEFAULT_COLLECTION_CODES, build_collections, iter_documents
from .errors import DataSourceError
from .store import MetadataStore, clear_metadata_stores, get_metadata_store
from .types import UNKNOWN, Collection, Division, Document, DocumentContainer, Subdivision, format_display

__all__ = [
    "Collection",
    "DEFAULT_COLLECTION_CODES",
    "DataSourceError",
    "Division",
    "Document",
    "DocumentContainer",
    "MetadataStore",
    "Subdivision",
    "UNKNOWN",
    "build_collections",
    "clear_metadata_stores",
    "format_display",
    "get_metadata_store",
    "iter_documents",
]
