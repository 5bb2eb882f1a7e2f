"""Terminal implementation of the editor surface.

Draws one or more document panes side by side with a status row, runs modal
list and text prompts, and emits cursor/focus events to subscribers. Terminal
I/O is injected as callables so the surface can be driven by scripted keys.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import TypeVar

from ..editor import EditorError, EventBus, EventHandler, EventKind, PaneRef, Subscription
from .ansi import BOLD, CURSOR_LINE_BG, DIM, RESET, REVERSE, fit_ansi_line, wrap_ansi_line
from .config import DEFAULT_STYLE
from .panes import Pane, PaneLayout
from .picker import PickerState, PromptState
from .syntax import colorize_lines, read_text

T = TypeVar("T")

# Sequences that clear the background; the cursor-line colour is re-applied after each.
_SGR_RESET_RE = re.compile(r"\x1b\[(?:0|39;49;00|49)?m")

_LEVEL_STYLES = {
    logging.ERROR: "\x1b[31m",
    logging.WARNING: "\x1b[33m",
}


def _default_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


class TerminalSurface:
    """Editor surface backed by a raw-mode terminal."""

    def __init__(
        self,
        read_key: Callable[[], str],
        write: Callable[[str], None],
        get_size: Callable[[], os.terminal_size] = _default_size,
        style: str = DEFAULT_STYLE,
        no_color: bool = False,
    ) -> None:
        self.read_key = read_key
        self.write = write
        self.get_size = get_size
        self.style = style
        self.no_color = no_color
        self.layout = PaneLayout()
        self.events = EventBus()
        self.status_message = ""
        self.status_level = logging.INFO

    # geometry
    def _size(self) -> tuple[int, int]:
        size = self.get_size()
        return max(1, size.columns), max(3, size.lines)

    def content_rows(self) -> int:
        """Rows available to pane text after the title and status rows."""
        _width, height = self._size()
        return max(1, height - 2)

    # editor surface protocol
    def show_list(
        self,
        items: Sequence[T],
        prompt: str,
        format_item: Callable[[T], str],
    ) -> T | None:
        state = PickerState([format_item(item) for item in items])
        while not state.done:
            width, height = self._size()
            self._draw(state.render(prompt, width, height))
            state.handle_key(self.read_key(), page_rows=max(1, height - 3))
        self.render()
        if state.chosen is None:
            return None
        return items[state.chosen]

    def prompt_text(self, prompt: str) -> str | None:
        state = PromptState()
        while not state.done:
            width, _height = self._size()
            rows = self.render_rows()
            rows[-1] = state.render(prompt, width)
            self._draw(rows)
            state.handle_key(self.read_key())
        self.render()
        return state.value

    def _load_lines(self, path: Path) -> list[str]:
        try:
            source = read_text(path)
        except OSError as exc:
            raise EditorError(f"Cannot open {path}: {exc.strerror or exc}") from exc
        return colorize_lines(source, path, style=self.style, no_color=self.no_color)

    def open_file(self, path: Path) -> PaneRef:
        lines = self._load_lines(path)
        pane = self.layout.current
        pane.load(path, lines)
        return pane.pane_id

    def open_split(self, path: Path) -> PaneRef:
        lines = self._load_lines(path)
        pane = self.layout.split()
        pane.load(path, lines)
        return pane.pane_id

    def close_other_panes(self) -> None:
        self.layout.only()

    def notify(self, message: str, level: int = logging.INFO) -> None:
        self.status_message = message
        self.status_level = level

    def current_file_path(self) -> Path | None:
        return self.layout.current.path

    def current_pane(self) -> PaneRef:
        return self.layout.current.pane_id

    def list_panes(self) -> list[PaneRef]:
        return self.layout.pane_ids()

    def cursor_line(self, pane: PaneRef) -> int:
        return self.layout.get(pane).cursor

    def set_cursor_line(self, pane: PaneRef, line: int) -> None:
        target = self.layout.get(pane)
        target.set_cursor(line)
        target.scroll_to_cursor(self.content_rows())

    def line_count(self, pane: PaneRef) -> int:
        return self.layout.get(pane).line_count

    def subscribe(self, events: Iterable[EventKind], handler: EventHandler) -> Subscription:
        return self.events.subscribe(events, handler)

    def file_exists(self, path: Path) -> bool:
        return path.is_file()

    # user actions
    def move_cursor(self, delta: int) -> bool:
        pane = self.layout.current
        if not pane.move_cursor(delta):
            return False
        pane.scroll_to_cursor(self.content_rows())
        self.events.emit(EventKind.CURSOR_MOVED)
        return True

    def focus_next_pane(self) -> bool:
        if not self.layout.focus_next():
            return False
        self.events.emit(EventKind.PANE_ENTERED)
        return True

    def close_current_pane(self) -> bool:
        if not self.layout.close(self.layout.current.pane_id):
            return False
        self.events.emit(EventKind.PANE_ENTERED)
        return True

    # rendering
    def _scroll_wrapped(self, pane: Pane, width: int, rows: int) -> None:
        """Scroll so every screen row of the cursor line fits, where possible.

        ``top`` stays a logical line index; only lines above the cursor are
        dropped until the wrapped height from ``top`` to the cursor fits.
        """
        pane.scroll_to_cursor(rows)
        cursor_idx = pane.cursor - 1
        heights = {idx: len(wrap_ansi_line(pane.lines[idx], width)) for idx in range(pane.top, cursor_idx + 1)}
        used = sum(heights.values())
        while used > rows and pane.top < cursor_idx:
            used -= heights[pane.top]
            pane.top += 1

    def _pane_rows(self, pane: Pane, width: int, rows: int, focused: bool) -> list[str]:
        self._scroll_wrapped(pane, width, rows)
        title_style = REVERSE if focused else DIM
        title = f"{pane.title}  {pane.cursor}/{pane.line_count}"
        body: list[str] = []
        idx = pane.top
        while len(body) < rows and idx < len(pane.lines):
            on_cursor = idx + 1 == pane.cursor
            for segment in wrap_ansi_line(pane.lines[idx], width):
                if on_cursor:
                    segment = CURSOR_LINE_BG + _SGR_RESET_RE.sub(lambda match: match.group(0) + CURSOR_LINE_BG, segment)
                body.append(fit_ansi_line(segment, width) + RESET)
            idx += 1
        del body[rows:]
        while len(body) < rows:
            body.append(fit_ansi_line(f"{DIM}~{RESET}", width))
        return [f"{title_style}{fit_ansi_line(' ' + title, width)}{RESET}", *body]

    def _status_row(self, width: int) -> str:
        if not self.status_message:
            hint = "n navigate  / search  v+o/e/p/b/r parallel view  Tab switch pane  q quit"
            return fit_ansi_line(f"{DIM}{hint}{RESET}", width)
        color = _LEVEL_STYLES.get(self.status_level, "")
        return f"{color}{BOLD}{fit_ansi_line(self.status_message, width)}{RESET}"

    def render_rows(self) -> list[str]:
        width, height = self._size()
        rows = max(1, height - 2)
        widths = self.layout.column_widths(width)
        columns = [
            self._pane_rows(pane, pane_width, rows, idx == self.layout.focused)
            for idx, (pane, pane_width) in enumerate(zip(self.layout.panes, widths))
        ]
        separator = f"{DIM}│{RESET}"
        out = [separator.join(column[row] for column in columns) for row in range(rows + 1)]
        out.append(self._status_row(width))
        return out

    def render(self) -> None:
        self._draw(self.render_rows())

    def _draw(self, rows: list[str]) -> None:
        payload = ["\x1b[H"]
        for idx, row in enumerate(rows):
            if idx:
                payload.append("\r\n")
            payload.append(row)
            payload.append("\x1b[K")
        self.write("".join(payload))
