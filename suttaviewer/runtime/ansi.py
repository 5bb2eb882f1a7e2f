"""ANSI-aware text measurement, line clipping, and soft wrapping.

Clipping and wrapping preserve escape sequences so colorized lines stay
aligned when wide characters or tabs are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_ESCAPE_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")
TAB_STOP = 8
RESET = "\x1b[0m"
REVERSE = "\x1b[7m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
CURSOR_LINE_BG = "\x1b[48;5;236m"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences pass through untouched and take no width; tabs become
    spaces up to the next tab stop.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for idx, chunk in enumerate(_ESCAPE_SPLIT_RE.split(text)):
        if idx % 2:
            out.append(chunk)
            continue
        for ch in chunk:
            w = char_display_width(ch, col)
            if col + w > max_cols:
                return "".join(out)
            out.append(" " * w if ch == "\t" else ch)
            col += w
    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad with spaces to fill it exactly."""
    clipped = clip_ansi_line(text, width)
    padding = max(0, width - display_width(clipped))
    return clipped + " " * padding


def _last_sgr(cells: list[tuple[str, int]], current: str) -> str:
    for piece, _width in cells:
        if piece.startswith("\x1b[") and piece.endswith("m"):
            current = piece
    return current


def _break_index(cells: list[tuple[str, int]]) -> int:
    """Index just past the last space in ``cells``, or the end when there is none."""
    for idx in range(len(cells) - 1, -1, -1):
        if cells[idx][0] == " ":
            return idx + 1
    return len(cells)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Soft-wrap a styled line into rows of at most ``width`` display columns.

    Rows break after the last space that fits, or mid-word when a single word
    is wider than the row. The most recent SGR sequence is repeated at the
    start of each continuation row so colours carry over.
    """
    if width <= 0 or not text:
        return [""]

    rows: list[str] = []
    cells: list[tuple[str, int]] = []
    col = 0
    sgr = ""
    for idx, chunk in enumerate(_ESCAPE_SPLIT_RE.split(text)):
        if idx % 2:
            cells.append((chunk, 0))
            continue
        for ch in chunk:
            w = char_display_width(ch, col)
            while col > 0 and col + w > width:
                split = _break_index(cells)
                head, cells = cells[:split], cells[split:]
                rows.append("".join(piece for piece, _w in head))
                sgr = _last_sgr(head, sgr)
                if sgr:
                    cells.insert(0, (sgr, 0))
                col = sum(cell_width for _piece, cell_width in cells)
                w = char_display_width(ch, col)
            cells.append((" " * w if ch == "\t" else ch, w))
            col += w
    rows.append("".join(piece for piece, _w in cells))
    return rows
