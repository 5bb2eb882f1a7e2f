"""Per-session picker state machine.

A session owns its current state and history; selecting an entry returns an
effect for the driver to carry out. Search and document picks never change
the session state, so the session stays where the user left it.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Sequence
from dataclasses import dataclass

from ..corpus.types import Collection, Document
from .listing import EntryKind, Listing, ListingEntry, build_listing
from .states import ROOT_STATE, NavHistory, NavState, descend_state, parent_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Moved:
    """The session entered ``state``; the driver should show the next listing."""

    state: NavState


@dataclass(frozen=True)
class RunSearch:
    scope: str | None


@dataclass(frozen=True)
class OpenDocument:
    document: Document


Effect = Moved | RunSearch | OpenDocument


class NavigationSession:
    """Picker chain state for one browsing session."""

    def __init__(self, collections: Sequence[Collection], state: NavState = ROOT_STATE) -> None:
        self.collections = collections
        self.state = state
        self.history = NavHistory()

    def listing(self) -> Listing:
        return build_listing(self.collections, self.state)

    def enter(self, state: NavState) -> None:
        self.history.push(self.state)
        self.state = state

    def back(self) -> NavState:
        """Re-enter the previous state without recording the current one."""
        previous = self.history.pop()
        self.state = previous if previous is not None else parent_state(self.state)
        return self.state

    def select(self, entry: ListingEntry) -> Effect:
        if entry.kind is EntryKind.BACK:
            return Moved(self.back())
        if entry.kind is EntryKind.SEARCH:
            return RunSearch(entry.target if isinstance(entry.target, str) else None)
        if entry.kind is EntryKind.DOCUMENT:
            assert isinstance(entry.target, Document)
            return OpenDocument(entry.target)
        self.enter(descend_state(entry.target))
        logger.debug("Entered %s level", self.state.level.label)
        return Moved(self.state)

    def reset(self) -> None:
        self.state = ROOT_STATE
        self.history.clear()


class SessionRegistry:
    """One navigation session per key (conventionally one per tab)."""

    def __init__(self) -> None:
        self._sessions: dict[Hashable, NavigationSession] = {}

    def get(self, key: Hashable, collections: Sequence[Collection]) -> NavigationSession:
        session = self._sessions.get(key)
        if session is None or session.collections is not collections:
            session = NavigationSession(collections)
            self._sessions[key] = session
        return session

    def discard(self, key: Hashable) -> None:
        self._sessions.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
