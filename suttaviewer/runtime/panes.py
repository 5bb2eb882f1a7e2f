"""Document panes and the side-by-side layout that holds them.

Cursor lines are 1-based like the editor surface contract; ``top`` is the
0-based index of the first visible line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..editor import EditorError, PaneClosedError, PaneRef

SEPARATOR_WIDTH = 1


@dataclass
class Pane:
    pane_id: PaneRef
    path: Path | None = None
    lines: list[str] = field(default_factory=lambda: [""])
    cursor: int = 1
    top: int = 0

    @property
    def line_count(self) -> int:
        return max(1, len(self.lines))

    @property
    def title(self) -> str:
        return self.path.name if self.path is not None else "[No File]"

    def load(self, path: Path, lines: list[str]) -> None:
        self.path = path
        self.lines = lines or [""]
        self.cursor = 1
        self.top = 0

    def set_cursor(self, line: int) -> None:
        if not 1 <= line <= self.line_count:
            raise EditorError(f"cursor line {line} outside buffer of {self.line_count} lines")
        self.cursor = line

    def move_cursor(self, delta: int) -> bool:
        """Move by ``delta`` lines clamped to the buffer; return whether it moved."""
        target = max(1, min(self.line_count, self.cursor + delta))
        if target == self.cursor:
            return False
        self.cursor = target
        return True

    def scroll_to_cursor(self, rows: int) -> None:
        """Adjust ``top`` so the cursor line is inside a ``rows``-tall viewport."""
        rows = max(1, rows)
        cursor_idx = self.cursor - 1
        if cursor_idx < self.top:
            self.top = cursor_idx
        elif cursor_idx >= self.top + rows:
            self.top = cursor_idx - rows + 1
        self.top = max(0, min(self.top, max(0, self.line_count - rows)))


class PaneLayout:
    """Ordered left-to-right panes with one focused pane."""

    def __init__(self) -> None:
        self._next_id = 1
        self.panes: list[Pane] = [self._new_pane()]
        self.focused = 0

    def _new_pane(self) -> Pane:
        pane = Pane(pane_id=self._next_id)
        self._next_id += 1
        return pane

    @property
    def current(self) -> Pane:
        return self.panes[self.focused]

    def pane_ids(self) -> list[PaneRef]:
        return [pane.pane_id for pane in self.panes]

    def get(self, pane_id: PaneRef) -> Pane:
        for pane in self.panes:
            if pane.pane_id == pane_id:
                return pane
        raise PaneClosedError(pane_id)

    def split(self) -> Pane:
        """Insert a new pane right of the focused one and focus it."""
        pane = self._new_pane()
        self.panes.insert(self.focused + 1, pane)
        self.focused += 1
        return pane

    def only(self) -> None:
        self.panes = [self.current]
        self.focused = 0

    def close(self, pane_id: PaneRef) -> bool:
        """Close ``pane_id`` unless it is the last pane."""
        if len(self.panes) <= 1:
            return False
        index = self.pane_ids().index(pane_id)
        del self.panes[index]
        if self.focused >= len(self.panes) or self.focused > index:
            self.focused = max(0, self.focused - 1)
        return True

    def focus_next(self) -> bool:
        if len(self.panes) <= 1:
            return False
        self.focused = (self.focused + 1) % len(self.panes)
        return True

    def column_widths(self, total_width: int) -> list[int]:
        """Split ``total_width`` across panes, leaving one separator column between them."""
        count = len(self.panes)
        usable = max(count, total_width - SEPARATOR_WIDTH * (count - 1))
        base, extra = divmod(usable, count)
        return [base + (1 if idx < extra else 0) for idx in range(count)]
