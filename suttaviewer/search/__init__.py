"""Search facade for sutta lookup across the corpus tree.

Exposes flattening, substring filtering, and result formatting helpers.
"""

from __future__ import annotations

from .fuzzy import (
    SearchRecord,
    clear_search_cache,
    flatten_documents,
    format_result,
    search,
    search_key,
)

__all__ = [
    "SearchRecord",
    "clear_search_cache",
    "flatten_documents",
    "format_result",
    "search",
    "search_key",
]
