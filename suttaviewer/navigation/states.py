"""Navigation primitives: picker levels, states, and per-session history.

This module has no UI concerns. A ``NavState`` pairs a level with the exact
tree node it lists, and ``NavHistory`` records the states a session descended
from so back-navigation re-enters them unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from ..corpus.types import Collection, Division, DocumentContainer, Subdivision

MAX_NAV_HISTORY = 64


class Level(enum.Enum):
    COLLECTION = "Nikaya"
    DIVISION = "Division"
    SUBDIVISION = "Subdivision"
    DOCUMENT = "Sutta"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class NavState:
    """One picker level and the node whose children it lists."""

    level: Level
    context: DocumentContainer | None = None

    @property
    def collection(self) -> Collection | None:
        if self.context is None:
            return None
        return self.context.collection


ROOT_STATE = NavState(Level.COLLECTION)


def descend_state(node: DocumentContainer) -> NavState:
    """Return the state entered when ``node`` is picked from its parent listing.

    Levels without children collapse: a collection with no divisions and a
    division with no subdivisions list their documents directly.
    """
    if isinstance(node, Collection):
        if node.divisions:
            return NavState(Level.DIVISION, node)
        return NavState(Level.DOCUMENT, node)
    if isinstance(node, Division):
        if node.subdivisions:
            return NavState(Level.SUBDIVISION, node)
        return NavState(Level.DOCUMENT, node)
    return NavState(Level.DOCUMENT, node)


def parent_state(state: NavState) -> NavState:
    """Compute the listing above ``state`` from stamped back-references."""
    context = state.context
    if state.level is Level.COLLECTION or context is None:
        return ROOT_STATE
    if isinstance(context, Collection):
        return ROOT_STATE
    if isinstance(context, Subdivision):
        if state.level is Level.DOCUMENT and context.division is not None:
            return NavState(Level.SUBDIVISION, context.division)
        return ROOT_STATE
    if isinstance(context, Division):
        if state.level is Level.SUBDIVISION or state.level is Level.DOCUMENT:
            if context.collection is not None:
                return descend_state(context.collection)
    return ROOT_STATE


def scope_for(state: NavState) -> str | None:
    """Search scope for a state: ``None`` at the top, else its collection code."""
    collection = state.collection
    return collection.code if collection is not None else None


class NavHistory:
    """Bounded stack of states a session descended from."""

    def __init__(self, max_entries: int = MAX_NAV_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.stack: list[NavState] = []

    def push(self, state: NavState) -> None:
        self.stack.append(state)
        overflow = len(self.stack) - self.max_entries
        if overflow > 0:
            del self.stack[:overflow]

    def pop(self) -> NavState | None:
        if not self.stack:
            return None
        return self.stack.pop()

    def clear(self) -> None:
        self.stack.clear()

    def __len__(self) -> int:
        return len(self.stack)
