"""Editor-surface contract consumed by navigation and split-view code.

The core never talks to a terminal directly. It asks a surface to show lists,
prompt for text, open documents in panes, move cursors, and report
notifications. ``runtime.surface.TerminalSurface`` is the concrete host; tests
use an in-memory fake.

Notification levels are standard ``logging`` level numbers.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Protocol, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
PaneRef = int


class EditorError(Exception):
    """Raised by a surface when an operation cannot be applied."""


class PaneClosedError(EditorError):
    """Raised when an operation targets a pane that is no longer open."""

    def __init__(self, pane: PaneRef) -> None:
        super().__init__(f"pane {pane} is not open")
        self.pane = pane


class EventKind(enum.Enum):
    CURSOR_MOVED = "cursor_moved"
    PANE_ENTERED = "pane_entered"


EventHandler = Callable[[EventKind], None]


class Subscription:
    """Handle for one registered event handler; ``cancel`` is idempotent."""

    def __init__(self, bus: EventBus, events: frozenset[EventKind], handler: EventHandler) -> None:
        self._bus = bus
        self.events = events
        self.handler = handler
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        self._bus._remove(self)


class EventBus:
    """Subscription bookkeeping shared by surface implementations."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, events: Iterable[EventKind], handler: EventHandler) -> Subscription:
        subscription = Subscription(self, frozenset(events), handler)
        self._subscriptions.append(subscription)
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            pass

    def emit(self, event: EventKind) -> None:
        """Invoke every active handler registered for ``event``.

        Handlers may cancel subscriptions (their own included) while the event
        is being dispatched; iteration runs over a snapshot.
        """
        for subscription in list(self._subscriptions):
            if subscription.active and event in subscription.events:
                subscription.handler(event)

    def __len__(self) -> int:
        return len(self._subscriptions)


class EditorSurface(Protocol):
    """Host capabilities required by the navigator and the split view."""

    def show_list(
        self,
        items: Sequence[T],
        prompt: str,
        format_item: Callable[[T], str],
    ) -> T | None: ...

    def prompt_text(self, prompt: str) -> str | None: ...

    def open_file(self, path: Path) -> PaneRef: ...

    def open_split(self, path: Path) -> PaneRef: ...

    def close_other_panes(self) -> None: ...

    def notify(self, message: str, level: int = logging.INFO) -> None: ...

    def current_file_path(self) -> Path | None: ...

    def current_pane(self) -> PaneRef: ...

    def list_panes(self) -> list[PaneRef]: ...

    def cursor_line(self, pane: PaneRef) -> int: ...

    def set_cursor_line(self, pane: PaneRef, line: int) -> None: ...

    def line_count(self, pane: PaneRef) -> int: ...

    def subscribe(self, events: Iterable[EventKind], handler: EventHandler) -> Subscription: ...

    def file_exists(self, path: Path) -> bool: ...


def report(surface: EditorSurface, message: str, level: int = logging.INFO) -> None:
    """Log ``message`` and show it through the surface notification channel."""
    logger.log(level, message)
    surface.notify(message, level)
