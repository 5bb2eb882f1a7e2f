"""Interactive viewer runtime: key bindings and the main loop.

The loop is wiring only: navigation, search, and the parallel view live in
their own packages and act through the terminal surface.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..corpus.store import MetadataStore
from ..editor import EditorError, report
from ..navigation import Navigator
from ..split_view import VIEW_PAIRS, SplitViewController
from .input import read_key
from .surface import TerminalSurface
from .terminal import TerminalController

logger = logging.getLogger(__name__)

CURSOR_KEYS: dict[str, Callable[[int], int]] = {
    "j": lambda rows: 1,
    "DOWN": lambda rows: 1,
    "k": lambda rows: -1,
    "UP": lambda rows: -1,
    "PAGE_DOWN": lambda rows: max(1, rows - 1),
    " ": lambda rows: max(1, rows - 1),
    "PAGE_UP": lambda rows: -max(1, rows - 1),
    "b": lambda rows: -max(1, rows - 1),
    "CTRL_U": lambda rows: -max(1, rows // 2),
}


@dataclass
class ViewerApp:
    """Binds keys to cursor movement, navigation, and parallel views."""

    surface: TerminalSurface
    navigator: Navigator
    split_view: SplitViewController
    session_key: str = "main"
    pending_prefix: str = ""

    def handle_key(self, key: str) -> bool:
        """Apply one key; return ``True`` when the app should exit."""
        if not key:
            return False
        if self.pending_prefix == "v":
            self.pending_prefix = ""
            pair = VIEW_PAIRS.get(key)
            if pair is None:
                if len(key) == 1 and key.isprintable():
                    self.surface.notify(f"No parallel view bound to v{key}")
                else:
                    self.surface.notify("")
                return False
            self.split_view.view_pair(*pair)
            return False

        self.surface.notify("")
        if key in {"q", "CTRL_C"}:
            return True
        if key == "v":
            self.pending_prefix = "v"
            self.surface.notify("Parallel view: o e1|p1  e e1|e2  p p1|p2  b e2|p2  r p1|e2")
            return False
        if key in {"n", "CTRL_P"}:
            self.navigator.run(self.session_key)
            return False
        if key == "/":
            self.navigator.search_corpus()
            return False
        if key in {"TAB", "CTRL_W"}:
            self.surface.focus_next_pane()
            return False
        if key == "x":
            if not self.surface.close_current_pane():
                self.surface.notify("Cannot close the last pane")
            return False
        if key in {"g", "HOME"}:
            self.surface.move_cursor(-self.surface.layout.current.line_count)
            return False
        if key in {"G", "END"}:
            self.surface.move_cursor(self.surface.layout.current.line_count)
            return False
        step = CURSOR_KEYS.get(key)
        if step is not None:
            self.surface.move_cursor(step(self.surface.content_rows()))
        return False


def build_app(
    surface: TerminalSurface,
    store: MetadataStore,
) -> ViewerApp:
    navigator = Navigator(surface, store.load)
    return ViewerApp(surface=surface, navigator=navigator, split_view=SplitViewController(surface))


def run_viewer(
    store: MetadataStore,
    path: Path | None = None,
    pair: tuple[str, str] | None = None,
    style: str = "monokai",
    no_color: bool = False,
) -> None:
    """Run the interactive viewer until the user quits.

    Opens ``path`` first when given (and the ``pair`` view on top of it);
    otherwise starts in the navigator.
    """
    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("suttaviewer needs an interactive terminal.")

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    surface = TerminalSurface(
        read_key=lambda: read_key(stdin_fd),
        write=terminal.write,
        style=style,
        no_color=no_color,
    )
    app = build_app(surface, store)

    with terminal.raw_mode():
        terminal.write("\x1b[2J")
        if path is not None:
            try:
                surface.open_file(path)
            except EditorError as exc:
                report(surface, str(exc), logging.ERROR)
            if pair is not None:
                app.split_view.view_pair(*pair)
        else:
            app.navigator.run(app.session_key)

        while True:
            surface.render()
            if app.handle_key(read_key(stdin_fd)):
                break
    app.split_view.stop_sync()
    logger.info("Viewer closed")

