"""Corpus tree datatypes: collections, divisions, subdivisions, documents.

Nodes compare by identity so navigation can hold on to the exact parent
object it came from. Back-references are stamped once by ``corpus.build``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

UNKNOWN = "Unknown"
ERROR_TITLE = "error"


def format_display(english: str | None, pali: str | None) -> str:
    """Render an ``English / Pali`` label with placeholders for missing names."""
    return f"{english or UNKNOWN} / {pali or UNKNOWN}"


@dataclass(eq=False)
class Document:
    """One readable sutta file."""

    number: str | None
    english_title: str | None
    pali_title: str | None
    path: Path | None
    collection: Collection | None = field(default=None, repr=False)

    @property
    def is_valid(self) -> bool:
        return self.english_title != ERROR_TITLE and self.path is not None

    @property
    def collection_code(self) -> str:
        return self.collection.code if self.collection is not None else UNKNOWN

    @property
    def display(self) -> str:
        return (
            f"{self.number or UNKNOWN}: "
            f"{format_display(self.english_title, self.pali_title)} "
            f"({self.collection_code})"
        )


@dataclass(eq=False)
class Subdivision:
    english_name: str | None
    pali_name: str | None
    documents: tuple[Document, ...] = ()
    division: Division | None = field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        return format_display(self.english_name, self.pali_name)

    @property
    def collection(self) -> Collection | None:
        return self.division.collection if self.division is not None else None


@dataclass(eq=False)
class Division:
    english_name: str | None
    pali_name: str | None
    subdivisions: tuple[Subdivision, ...] = ()
    documents: tuple[Document, ...] = ()
    collection: Collection | None = field(default=None, repr=False)

    @property
    def display_name(self) -> str:
        return format_display(self.english_name, self.pali_name)


@dataclass(eq=False)
class Collection:
    code: str
    divisions: tuple[Division, ...] = ()
    documents: tuple[Document, ...] = ()

    @property
    def display_name(self) -> str:
        return self.code

    @property
    def collection(self) -> Collection:
        return self


DocumentContainer = Collection | Division | Subdivision
