"""Read-only JSON config helpers.

Holds the metadata file location, pygments style, and collection codes.
Missing or malformed config values fall back to the built-in defaults.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from ..corpus.build import DEFAULT_COLLECTION_CODES

APP_NAME = "suttaviewer"
CONFIG_FILENAME = "config.json"
METADATA_FILENAME = "sutta_metadata_ALL.json"
METADATA_ENV_VAR = "SUTTAVIEWER_METADATA"
DEFAULT_STYLE = "monokai"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_METADATA_PATH = Path(user_data_dir(APP_NAME, appauthor=False)) / METADATA_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def _load_text(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_metadata_path(override: str | Path | None = None) -> Path:
    """Resolve the metadata file location.

    Precedence: explicit ``override``, then ``$SUTTAVIEWER_METADATA``, then the
    ``metadata_path`` config key, then the platform data directory default.
    """
    if override is not None and str(override).strip():
        return Path(override).expanduser()
    from_env = os.environ.get(METADATA_ENV_VAR, "").strip()
    if from_env:
        return Path(from_env).expanduser()
    from_config = _load_text("metadata_path")
    if from_config is not None:
        return Path(from_config).expanduser()
    return DEFAULT_METADATA_PATH


def load_style_name() -> str:
    """Load pygments style name, falling back to ``monokai``."""
    return _load_text("style") or DEFAULT_STYLE


def load_collection_codes() -> tuple[str, ...]:
    """Load collection codes in display order.

    Only a non-empty list of non-blank strings is accepted; duplicates are
    dropped keeping the first occurrence.
    """
    value = load_config().get("collections")
    if not isinstance(value, list) or not value:
        return DEFAULT_COLLECTION_CODES
    codes: list[str] = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            return DEFAULT_COLLECTION_CODES
        code = item.strip()
        if code not in codes:
            codes.append(code)
    return tuple(codes)
