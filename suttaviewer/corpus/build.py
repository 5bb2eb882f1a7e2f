"""Corpus tree construction from the decoded metadata payload.

A single pass converts JSON objects into tree nodes and stamps every child
with its owning parent, so navigation never has to search for one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .errors import DataSourceError
from .types import Collection, Division, Document, Subdivision

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_CODES = ("AN", "DN", "MN", "SN")


def _optional_text(value: object) -> str | None:
    """Normalize optional scalar fields; numbers become strings, blanks ``None``."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _object_list(record: dict, key: str, where: str) -> list[dict]:
    value = record.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise DataSourceError(f"{where}: field {key!r} must be a list of objects")
    return value


def _resolve_path(value: object, base_dir: Path | None) -> Path | None:
    raw = _optional_text(value)
    if raw is None:
        return None
    path = Path(raw).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def _build_documents(
    records: Iterable[dict],
    collection: Collection,
    base_dir: Path | None,
) -> tuple[Document, ...]:
    return tuple(
        Document(
            number=_optional_text(record.get("sutta_number")),
            english_title=_optional_text(record.get("sutta_title_english")),
            pali_title=_optional_text(record.get("sutta_title_pali")),
            path=_resolve_path(record.get("sutta_path"), base_dir),
            collection=collection,
        )
        for record in records
    )


def _build_division(
    record: dict,
    collection: Collection,
    base_dir: Path | None,
    where: str,
) -> Division:
    division = Division(
        english_name=_optional_text(record.get("english_name")),
        pali_name=_optional_text(record.get("pali_name")),
        collection=collection,
    )
    subdivisions: list[Subdivision] = []
    for sub_idx, sub_record in enumerate(_object_list(record, "subdivisions", where)):
        sub_where = f"{where}.subdivisions[{sub_idx}]"
        subdivision = Subdivision(
            english_name=_optional_text(sub_record.get("english_name")),
            pali_name=_optional_text(sub_record.get("pali_name")),
            division=division,
        )
        subdivision.documents = _build_documents(
            _object_list(sub_record, "suttas", sub_where),
            collection,
            base_dir,
        )
        subdivisions.append(subdivision)
    division.subdivisions = tuple(subdivisions)
    division.documents = _build_documents(_object_list(record, "suttas", where), collection, base_dir)
    return division


def build_collections(
    raw: object,
    base_dir: Path | None = None,
    collection_codes: Iterable[str] = DEFAULT_COLLECTION_CODES,
) -> tuple[Collection, ...]:
    """Build the corpus forest from decoded metadata JSON.

    ``raw`` must be a list of collection objects. Source order is preserved at
    every level. Collections whose code is not in ``collection_codes`` are
    skipped. Relative document paths are resolved against ``base_dir``.

    Raises ``DataSourceError`` when the payload does not have the expected
    structure.
    """
    if not isinstance(raw, list):
        raise DataSourceError("metadata root must be a list of collections")

    allowed = set(collection_codes)
    collections: list[Collection] = []
    for idx, record in enumerate(raw):
        where = f"collections[{idx}]"
        if not isinstance(record, dict):
            raise DataSourceError(f"{where}: expected an object")
        code = record.get("nikaya")
        if not isinstance(code, str) or not code.strip():
            raise DataSourceError(f"{where}: missing collection code")
        code = code.strip()
        if code not in allowed:
            logger.warning("Skipping unknown collection %r at %s", code, where)
            continue

        collection = Collection(code=code)
        collection.divisions = tuple(
            _build_division(div_record, collection, base_dir, f"{where}.divisions[{div_idx}]")
            for div_idx, div_record in enumerate(_object_list(record, "divisions", where))
        )
        collection.documents = _build_documents(_object_list(record, "suttas", where), collection, base_dir)
        collections.append(collection)

    logger.debug("Built corpus tree with %d collections", len(collections))
    return tuple(collections)


def iter_documents(container: Collection | Division | Subdivision) -> Iterable[Document]:
    """Yield every document below ``container`` depth-first in source order.

    Direct documents come before nested ones at each level.
    """
    yield from container.documents
    if isinstance(container, Collection):
        for division in container.divisions:
            yield from iter_documents(division)
    elif isinstance(container, Division):
        for subdivision in container.subdivisions:
            yield from subdivision.documents
