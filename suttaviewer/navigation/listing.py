"""Picker listings: synthetic back/search rows plus one row per real child."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from ..corpus.types import Collection, Division, Document, Subdivision
from .states import Level, NavState, parent_state, scope_for

SEARCH_ALL_LABEL = "Search All Suttas"


class EntryKind(enum.Enum):
    BACK = "back"
    SEARCH = "search"
    CHILD = "child"
    DOCUMENT = "document"


@dataclass(frozen=True)
class ListingEntry:
    """One selectable row; ``target`` is the tree node or search scope it acts on."""

    kind: EntryKind
    label: str
    target: object = None


@dataclass(frozen=True)
class Listing:
    state: NavState
    prompt: str
    entries: tuple[ListingEntry, ...]

    @property
    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]

    @property
    def document_entries(self) -> list[ListingEntry]:
        return [entry for entry in self.entries if entry.kind is EntryKind.DOCUMENT]

    @property
    def is_empty_document_listing(self) -> bool:
        return self.state.level is Level.DOCUMENT and not self.document_entries


def _search_entry(state: NavState) -> ListingEntry:
    scope = scope_for(state)
    if scope is None:
        return ListingEntry(EntryKind.SEARCH, SEARCH_ALL_LABEL, None)
    return ListingEntry(EntryKind.SEARCH, f"Search {scope} Suttas", scope)


def _back_entry(state: NavState) -> ListingEntry:
    parent_level = parent_state(state).level
    return ListingEntry(EntryKind.BACK, f".. [Back to {parent_level.label}]")


def _prompt(state: NavState) -> str:
    if state.level is Level.COLLECTION:
        return "Select Nikaya or Search"
    return f"Select {state.level.label} ({scope_for(state)}) or Search"


def _document_entries(documents: Sequence[Document]) -> list[ListingEntry]:
    return [
        ListingEntry(EntryKind.DOCUMENT, document.display, document)
        for document in documents
        if document.is_valid
    ]


def _child_entries(collections: Sequence[Collection], state: NavState) -> list[ListingEntry]:
    context = state.context
    if state.level is Level.COLLECTION:
        return [ListingEntry(EntryKind.CHILD, collection.display_name, collection) for collection in collections]
    if state.level is Level.DIVISION and isinstance(context, Collection):
        return [ListingEntry(EntryKind.CHILD, division.display_name, division) for division in context.divisions]
    if state.level is Level.SUBDIVISION and isinstance(context, Division):
        return [
            ListingEntry(EntryKind.CHILD, subdivision.display_name, subdivision)
            for subdivision in context.subdivisions
        ]
    if state.level is Level.DOCUMENT and isinstance(context, (Collection, Division, Subdivision)):
        return _document_entries(context.documents)
    return []


def build_listing(collections: Sequence[Collection], state: NavState) -> Listing:
    """Build the rows shown for ``state`` in display order.

    Order is back (below the top level), search, then children in source
    order. Invalid documents are skipped.
    """
    entries: list[ListingEntry] = []
    if state.level is not Level.COLLECTION:
        entries.append(_back_entry(state))
    entries.append(_search_entry(state))
    entries.extend(_child_entries(collections, state))
    return Listing(state=state, prompt=_prompt(state), entries=tuple(entries))
