"""Open two editions of the current sutta side by side.

``view_pair`` is the user-facing entry point: it reports every failure
through the surface and never raises into the host.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from ..editor import EditorError, EditorSurface, PaneRef, report
from .editions import (
    NoSiblingFoundError,
    SplitViewError,
    UnknownEditionCodeError,
    edition_for_code,
    resolve_edition,
    sibling_path,
)
from .sync import CursorSync, align_pane

logger = logging.getLogger(__name__)

# Named combinations, keyed by the binding suffix after ``v``.
VIEW_PAIRS: dict[str, tuple[str, str]] = {
    "o": ("e1", "p1"),
    "e": ("e1", "e2"),
    "p": ("p1", "p2"),
    "b": ("e2", "p2"),
    "r": ("p1", "e2"),
}


class PairOutcome(enum.Enum):
    BOTH = "both"
    SINGLE_PANE = "single_pane"


@dataclass(frozen=True)
class PairResult:
    outcome: PairOutcome
    panes: tuple[PaneRef, ...]
    paths: tuple[Path, ...]


class SplitViewController:
    """Opens edition pairs and owns the active cursor sync, if any."""

    def __init__(self, surface: EditorSurface) -> None:
        self.surface = surface
        self.sync: CursorSync | None = None

    def stop_sync(self) -> None:
        if self.sync is not None:
            self.sync.stop()
            self.sync = None

    def open_pair(self, left_code: str, right_code: str) -> PairResult:
        """Show ``left_code`` and ``right_code`` editions of the current sutta.

        Raises ``UnrecognizedEditionError`` or ``NoSiblingFoundError`` before
        touching the layout. When only one edition exists it is shown alone
        and a warning is reported.
        """
        edition_for_code(left_code)
        edition_for_code(right_code)
        surface = self.surface
        match = resolve_edition(surface.current_file_path())
        left_path = sibling_path(match.base, left_code)
        right_path = sibling_path(match.base, right_code)
        left_exists = surface.file_exists(left_path)
        right_exists = surface.file_exists(right_path)
        if not left_exists and not right_exists:
            raise NoSiblingFoundError(left_path, right_path)

        origin_line = surface.cursor_line(surface.current_pane())
        self.stop_sync()
        surface.close_other_panes()

        if not left_exists:
            pane = surface.open_file(right_path)
            align_pane(surface, pane, origin_line)
            report(surface, f"Left file does not exist: {left_path}", logging.WARNING)
            return PairResult(PairOutcome.SINGLE_PANE, (pane,), (right_path,))

        left_pane = surface.open_file(left_path)
        left_line = align_pane(surface, left_pane, origin_line)
        if not right_exists:
            report(surface, f"Right file does not exist: {right_path}", logging.WARNING)
            return PairResult(PairOutcome.SINGLE_PANE, (left_pane,), (left_path,))

        right_pane = surface.open_split(right_path)
        align_pane(surface, right_pane, left_line)
        self.sync = CursorSync(surface, (left_pane, right_pane)).start()
        logger.info("Opened %s | %s at line %d", left_path.name, right_path.name, left_line)
        return PairResult(PairOutcome.BOTH, (left_pane, right_pane), (left_path, right_path))

    def view_pair(self, left_code: str, right_code: str) -> PairResult | None:
        try:
            return self.open_pair(left_code, right_code)
        except (SplitViewError, UnknownEditionCodeError, EditorError) as exc:
            report(self.surface, str(exc), logging.ERROR)
            return None
