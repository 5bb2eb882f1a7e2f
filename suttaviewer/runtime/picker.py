"""Modal list picker and text prompt state for the terminal surface.

Both are pure key-driven state objects; ``TerminalSurface`` feeds them keys
and draws their rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ansi import BOLD, DIM, RESET, REVERSE, fit_ansi_line

PICKER_HINT = "↑/↓ move  PgUp/PgDn page  type to filter  Enter select  Esc cancel"


@dataclass
class PickerState:
    """Selection over ``labels`` narrowed by a case-insensitive substring query."""

    labels: list[str]
    query: str = ""
    selected: int = 0
    list_start: int = 0
    matches: list[int] = field(default_factory=list)
    done: bool = False
    chosen: int | None = None

    def __post_init__(self) -> None:
        self.refresh_matches()

    def refresh_matches(self) -> None:
        needle = self.query.casefold()
        self.matches = [idx for idx, label in enumerate(self.labels) if needle in label.casefold()]
        self.selected = 0
        self.list_start = 0

    def _move(self, delta: int) -> None:
        if not self.matches:
            return
        self.selected = max(0, min(len(self.matches) - 1, self.selected + delta))

    def handle_key(self, key: str, page_rows: int) -> None:
        if key in {"ESC", "CTRL_C"}:
            self.done = True
            self.chosen = None
        elif key == "ENTER":
            if self.matches:
                self.done = True
                self.chosen = self.matches[self.selected]
        elif key == "UP":
            self._move(-1)
        elif key == "DOWN":
            self._move(1)
        elif key == "PAGE_UP":
            self._move(-max(1, page_rows))
        elif key == "PAGE_DOWN":
            self._move(max(1, page_rows))
        elif key == "HOME":
            self._move(-len(self.matches))
        elif key == "END":
            self._move(len(self.matches))
        elif key == "BACKSPACE":
            if self.query:
                self.query = self.query[:-1]
                self.refresh_matches()
        elif key == "CTRL_U":
            if self.query:
                self.query = ""
                self.refresh_matches()
        elif len(key) == 1 and key.isprintable():
            self.query += key
            self.refresh_matches()

    def visible_rows(self, rows: int) -> list[tuple[int, str, bool]]:
        """Return ``(match_position, label, is_selected)`` for the viewport."""
        rows = max(1, rows)
        if self.selected < self.list_start:
            self.list_start = self.selected
        elif self.selected >= self.list_start + rows:
            self.list_start = self.selected - rows + 1
        window = self.matches[self.list_start : self.list_start + rows]
        return [
            (self.list_start + offset, self.labels[idx], self.list_start + offset == self.selected)
            for offset, idx in enumerate(window)
        ]

    def render(self, prompt: str, width: int, height: int) -> list[str]:
        list_rows = max(1, height - 3)
        out = [
            fit_ansi_line(f"{BOLD}{prompt}{RESET}", width),
            fit_ansi_line(f"> {self.query}", width),
        ]
        for _pos, label, is_selected in self.visible_rows(list_rows):
            row = fit_ansi_line(f"  {label}", width)
            out.append(f"{REVERSE}{row}{RESET}" if is_selected else row)
        if not self.matches:
            out.append(fit_ansi_line(f"{DIM}  no matches{RESET}", width))
        while len(out) < height - 1:
            out.append(" " * width)
        counter = f"{len(self.matches)}/{len(self.labels)}"
        out.append(fit_ansi_line(f"{DIM}{counter}  {PICKER_HINT}{RESET}", width))
        return out[:height]


@dataclass
class PromptState:
    """Single-line text entry; ``value`` is ``None`` after cancel."""

    buffer: str = ""
    done: bool = False
    value: str | None = None

    def handle_key(self, key: str) -> None:
        if key in {"ESC", "CTRL_C"}:
            self.done = True
            self.value = None
        elif key == "ENTER":
            self.done = True
            self.value = self.buffer
        elif key == "BACKSPACE":
            self.buffer = self.buffer[:-1]
        elif key == "CTRL_U":
            self.buffer = ""
        elif len(key) == 1 and key.isprintable():
            self.buffer += key

    def render(self, prompt: str, width: int) -> str:
        return fit_ansi_line(f"{prompt}{self.buffer}", width)
