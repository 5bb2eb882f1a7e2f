"""Metadata store: loads the corpus index once and caches the tree.

The whole file is read in one ``with`` block and decoded; either the full tree
loads or ``DataSourceError`` is raised. Failures are not cached, so a later
invocation reads the file again.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from .build import DEFAULT_COLLECTION_CODES, build_collections
from .errors import DataSourceError
from .types import Collection

logger = logging.getLogger(__name__)

_STORES: dict[tuple[Path, tuple[str, ...]], MetadataStore] = {}


class MetadataStore:
    """Read-only, process-lifetime cache of one metadata file."""

    def __init__(
        self,
        path: Path,
        collection_codes: Iterable[str] = DEFAULT_COLLECTION_CODES,
    ) -> None:
        self.path = path
        self.collection_codes = tuple(collection_codes)
        self._collections: tuple[Collection, ...] | None = None

    @property
    def loaded(self) -> bool:
        return self._collections is not None

    def load(self) -> tuple[Collection, ...]:
        """Return the corpus forest, reading and parsing the file on first use."""
        if self._collections is not None:
            return self._collections

        try:
            with self.path.open("r", encoding="utf-8") as handle:
                content = handle.read()
        except OSError as exc:
            raise DataSourceError(f"Could not open metadata file: {self.path} ({exc.strerror or exc})") from exc

        try:
            raw = json.loads(content)
        except json.JSONDecodeError as exc:
            raise DataSourceError(f"Could not parse metadata file: {self.path} ({exc.msg}, line {exc.lineno})") from exc

        collections = build_collections(
            raw,
            base_dir=self.path.parent,
            collection_codes=self.collection_codes,
        )
        logger.info("Loaded %d collections from %s", len(collections), self.path)
        self._collections = collections
        return collections

    def clear_cache(self) -> None:
        self._collections = None


def get_metadata_store(
    path: Path,
    collection_codes: Iterable[str] = DEFAULT_COLLECTION_CODES,
) -> MetadataStore:
    """Return the shared store for ``path``, creating it on first request."""
    try:
        resolved = path.expanduser().resolve()
    except OSError:
        resolved = path
    codes = tuple(collection_codes)
    key = (resolved, codes)
    store = _STORES.get(key)
    if store is None:
        store = MetadataStore(resolved, codes)
        _STORES[key] = store
    return store


def clear_metadata_stores() -> None:
    _STORES.clear()
