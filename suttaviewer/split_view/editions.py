"""Edition suffixes and sibling-path resolution for parallel reading.

Each sutta exists as several files that share a base path and differ only
by suffix, for example ``dn18/dn18_sc_pali`` and ``dn18/dn18_sc_engl``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Edition:
    code: str
    suffix: str
    label: str


EDITIONS: dict[str, Edition] = {
    "p1": Edition("p1", "_sc_pali", "SC Pali"),
    "e1": Edition("e1", "_sc_engl", "SC English"),
    "p2": Edition("p2", "_vri_pali", "VRI Pali"),
    "e2": Edition("e2", "_bb_engl", "BB English"),
}


class SplitViewError(Exception):
    """Base class for split-view failures reported to the user."""


class UnrecognizedEditionError(SplitViewError):
    def __init__(self, path: Path | None) -> None:
        suffixes = ", ".join(edition.suffix for edition in EDITIONS.values())
        if path is None:
            message = f"No file is open; expected one of ({suffixes})"
        else:
            message = f"Not a recognized file type ({suffixes}): {path}"
        super().__init__(message)
        self.path = path


class NoSiblingFoundError(SplitViewError):
    def __init__(self, left: Path, right: Path) -> None:
        super().__init__(f"Neither file exists: {left} nor {right}")
        self.left = left
        self.right = right


class UnknownEditionCodeError(ValueError):
    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown edition code {code!r}; expected one of {', '.join(EDITIONS)}")
        self.code = code


@dataclass(frozen=True)
class EditionMatch:
    """A path split into its shared base and recognized edition code."""

    base: str
    code: str

    @property
    def edition(self) -> Edition:
        return EDITIONS[self.code]


def edition_for_code(code: str) -> Edition:
    edition = EDITIONS.get(code)
    if edition is None:
        raise UnknownEditionCodeError(code)
    return edition


def resolve_edition(path: Path | None) -> EditionMatch:
    """Split ``path`` into base and edition code by suffix match.

    Raises ``UnrecognizedEditionError`` when ``path`` is ``None`` or ends with
    none of the known suffixes.
    """
    if path is None:
        raise UnrecognizedEditionError(None)
    text = str(path)
    for edition in EDITIONS.values():
        if text.endswith(edition.suffix):
            return EditionMatch(base=text[: -len(edition.suffix)], code=edition.code)
    raise UnrecognizedEditionError(path)


def sibling_path(base: str, code: str) -> Path:
    return Path(base + edition_for_code(code).suffix)
