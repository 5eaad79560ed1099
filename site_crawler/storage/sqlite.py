"""SQLite sink: a single ``pages`` table keyed by URL."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import List, Union

from site_crawler.crawler.models import Page

from .base import ContentStore, StorageError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS pages (
    url TEXT PRIMARY KEY,
    title TEXT,
    description TEXT,
    raw_content TEXT NOT NULL,
    outbound_links TEXT NOT NULL,
    depth INTEGER NOT NULL,
    fetched_at TEXT NOT NULL
)
"""


class SqliteStore(ContentStore):
    """Writes pages to an SQLite database at *path* (``":memory:"`` works too)."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        try:
            if self.path != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.path)
            with self._conn:
                self._conn.execute(_SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"cannot open {self.path}: {exc}") from exc

    def add_page(self, page: Page) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO pages VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        page.url,
                        page.title,
                        page.description,
                        page.raw_content,
                        json.dumps(page.outbound_links),
                        page.depth,
                        page.fetched_at.isoformat(),
                    ),
                )
        except sqlite3.Error as exc:
            raise StorageError(f"cannot store {page.url}: {exc}") from exc

    def get_all_pages(self) -> List[Page]:
        try:
            rows = self._conn.execute(
                "SELECT url, title, description, raw_content, outbound_links, depth, fetched_at "
                "FROM pages ORDER BY rowid"
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        return [
            Page(
                url=url,
                title=title,
                description=description,
                raw_content=raw,
                outbound_links=json.loads(links),
                depth=depth,
                fetched_at=datetime.fromisoformat(fetched_at),
            )
            for url, title, description, raw, links, depth, fetched_at in rows
        ]

    def close(self) -> None:
        self._conn.close()

    def __len__(self) -> int:
        (count,) = self._conn.execute("SELECT COUNT(*) FROM pages").fetchone()
        return count
