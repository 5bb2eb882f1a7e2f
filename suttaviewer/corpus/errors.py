from __future__ import annotations


class DataSourceError(Exception):
    """Corpus metadata could not be read or does not have the expected shape."""
