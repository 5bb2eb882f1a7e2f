"""Continuous cursor-line mirroring between panes of one view group.

Every cursor move or focus change copies the moving pane's line to the other
panes of the group, clamped to each target's own length.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..editor import EditorError, EditorSurface, EventKind, PaneRef, Subscription, report

logger = logging.getLogger(__name__)

SYNC_EVENTS = (EventKind.CURSOR_MOVED, EventKind.PANE_ENTERED)


def clamp_line(line: int, line_count: int) -> int:
    return max(1, min(line, line_count))


def align_pane(surface: EditorSurface, pane: PaneRef, line: int) -> int:
    """Move ``pane`` to ``line`` clamped to its length; return the applied line."""
    target = clamp_line(line, surface.line_count(pane))
    surface.set_cursor_line(pane, target)
    return target


class CursorSync:
    """Mirror cursor lines across ``panes`` until stopped."""

    def __init__(self, surface: EditorSurface, panes: Sequence[PaneRef]) -> None:
        self.surface = surface
        self.panes = tuple(panes)
        self._subscription: Subscription | None = None

    @property
    def active(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def start(self) -> CursorSync:
        if not self.active:
            self._subscription = self.surface.subscribe(SYNC_EVENTS, self._on_event)
        return self

    def stop(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def _on_event(self, _event: EventKind) -> None:
        self.sync_from(self.surface.current_pane())

    def sync_from(self, source: PaneRef) -> None:
        """Propagate ``source``'s line to the other open panes of the group.

        A pane that cannot be positioned is reported and skipped. Once no other
        group pane is open the sync tears itself down.
        """
        if source not in self.panes:
            return
        open_panes = set(self.surface.list_panes())
        targets = [pane for pane in self.panes if pane != source and pane in open_panes]
        if not targets:
            logger.debug("View group %s has no open partner panes; stopping sync", self.panes)
            self.stop()
            return

        try:
            line = self.surface.cursor_line(source)
        except EditorError as exc:
            report(self.surface, f"Cannot read cursor in pane {source}: {exc}", logging.WARNING)
            return

        for pane in targets:
            try:
                align_pane(self.surface, pane, line)
            except EditorError as exc:
                report(self.surface, f"Failed to set cursor in pane {pane}: {exc}", logging.WARNING)
