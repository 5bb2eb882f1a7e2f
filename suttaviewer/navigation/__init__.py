"""Hierarchical picker chain: states, listings, sessions, and the driver."""

from __future__ import annotations

from .listing import EntryKind, Listing, ListingEntry, build_listing
from .navigator import Navigator
from .session import Moved, NavigationSession, OpenDocument, RunSearch, SessionRegistry
from .states import ROOT_STATE, Level, NavHistory, NavState, descend_state, parent_state, scope_for

__all__ = [
    "EntryKind",
    "Level",
    "Listing",
    "ListingEntry",
    "Moved",
    "NavHistory",
    "NavState",
    "NavigationSession",
    "Navigator",
    "OpenDocument",
    "ROOT_STATE",
    "RunSearch",
    "SessionRegistry",
    "build_listing",
    "descend_state",
    "parent_state",
    "scope_for",
]
