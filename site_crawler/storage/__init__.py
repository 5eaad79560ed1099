"""site_crawler.storage: sinks that receive crawled pages."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from .base import ContentStore, StorageError
from .jsonl import JsonLinesStore
from .memory import MemoryStore
from .sqlite import SqliteStore

_SQLITE_SUFFIXES = (".db", ".sqlite", ".sqlite3")


def open_store(path: Union[str, Path, None]) -> ContentStore:
    """Pick a sink for *path*: memory when None, SQLite for .db/.sqlite, JSON Lines otherwise."""
    if path is None:
        return MemoryStore()
    if Path(path).suffix.lower() in _SQLITE_SUFFIXES:
        return SqliteStore(path)
    return JsonLinesStore(path)


__all__ = ["ContentStore", "StorageError", "MemoryStore", "JsonLinesStore", "SqliteStore", "open_store"]
