"""Navigator driver: runs the picker chain against an editor surface."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Sequence

from ..corpus.errors import DataSourceError
from ..corpus.types import Collection, Document
from ..editor import EditorError, EditorSurface, report
from ..search import format_result, search
from .listing import ListingEntry
from .session import Moved, NavigationSession, OpenDocument, RunSearch, SessionRegistry

logger = logging.getLogger(__name__)

SEARCH_PROMPT = "Search Suttas (e.g., King): "
RESULTS_PROMPT = "Select Sutta"


def _entry_label(entry: ListingEntry) -> str:
    return entry.label


class Navigator:
    """Hierarchical sutta picker bound to one surface.

    ``load_collections`` is usually ``MetadataStore.load``; it is called on
    every run and is expected to cache.
    """

    def __init__(
        self,
        surface: EditorSurface,
        load_collections: Callable[[], Sequence[Collection]],
        registry: SessionRegistry | None = None,
    ) -> None:
        self.surface = surface
        self.load_collections = load_collections
        self.registry = registry if registry is not None else SessionRegistry()

    def _load(self) -> Sequence[Collection] | None:
        try:
            return self.load_collections()
        except DataSourceError as exc:
            report(self.surface, str(exc), logging.ERROR)
            return None

    def open_document(self, document: Document) -> bool:
        assert document.path is not None
        logger.info("Opening %s", document.path)
        try:
            self.surface.open_file(document.path)
        except EditorError as exc:
            report(self.surface, str(exc), logging.ERROR)
            return False
        return True

    def run(self, session_key: Hashable = "default") -> Document | None:
        """Drive the picker chain until a document opens or a prompt is dismissed.

        Returns the opened document, or ``None`` when the user cancelled or the
        metadata could not be loaded. The session keeps its state either way.
        """
        collections = self._load()
        if collections is None:
            return None
        session = self.registry.get(session_key, collections)
        return self.run_session(session)

    def run_session(self, session: NavigationSession) -> Document | None:
        while True:
            listing = session.listing()
            if listing.is_empty_document_listing:
                context = listing.state.context
                name = context.display_name if context is not None else "this listing"
                report(self.surface, f"No readable suttas found in {name}", logging.WARNING)

            choice = self.surface.show_list(list(listing.entries), listing.prompt, _entry_label)
            if choice is None:
                return None

            effect = session.select(choice)
            if isinstance(effect, Moved):
                continue
            if isinstance(effect, RunSearch):
                return self.run_search(session.collections, effect.scope)
            if isinstance(effect, OpenDocument):
                return effect.document if self.open_document(effect.document) else None

    def run_search(self, collections: Sequence[Collection], scope: str | None) -> Document | None:
        """Prompt for a query, list matches, and open the chosen sutta.

        Never touches navigation history; dismissing either prompt just returns.
        """
        query = self.surface.prompt_text(SEARCH_PROMPT)
        if query is None or not query.strip():
            return None

        matches = search(collections, scope, query)
        if not matches:
            where = f" in {scope}" if scope is not None else ""
            report(self.surface, f"No suttas match {query!r}{where}", logging.INFO)
            return None

        choice = self.surface.show_list(matches, RESULTS_PROMPT, format_result)
        if choice is None:
            return None
        return choice if self.open_document(choice) else None

    def search_corpus(self, scope: str | None = None) -> Document | None:
        """Entry point for the standalone search binding."""
        collections = self._load()
        if collections is None:
            return None
        return self.run_search(collections, scope)
