"""Parallel-text view: edition resolution, pair opening, and cursor sync."""

from __future__ import annotations

from .editions import (
    EDITIONS,
    Edition,
    EditionMatch,
    NoSiblingFoundError,
    SplitViewError,
    UnknownEditionCodeError,
    UnrecognizedEditionError,
    edition_for_code,
    resolve_edition,
    sibling_path,
)
from .opener import VIEW_PAIRS, PairOutcome, PairResult, SplitViewController
from .sync import CursorSync, align_pane, clamp_line

__all__ = [
    "CursorSync",
    "EDITIONS",
    "Edition",
    "EditionMatch",
    "NoSiblingFoundError",
    "PairOutcome",
    "PairResult",
    "SplitViewController",
    "SplitViewError",
    "UnknownEditionCodeError",
    "UnrecognizedEditionError",
    "VIEW_PAIRS",
    "align_pane",
    "clamp_line",
    "edition_for_code",
    "resolve_edition",
    "sibling_path",
]
