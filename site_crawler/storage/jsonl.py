"""JSON Lines file sink: one page object per line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from site_crawler.crawler.models import Page

from .base import ContentStore, StorageError


class JsonLinesStore(ContentStore):
    """Appends pages to *path*. The file is truncated when the store is created."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"cannot create {self.path}: {exc}") from exc
        self._count = 0

    def add_page(self, page: Page) -> None:
        line = json.dumps(page.to_dict(), ensure_ascii=False)
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")
        except OSError as exc:
            raise StorageError(f"cannot write {page.url} to {self.path}: {exc}") from exc
        self._count += 1

    def get_all_pages(self) -> List[Page]:
        try:
            lines = self.path.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise StorageError(f"cannot read {self.path}: {exc}") from exc
        return [Page.from_dict(json.loads(line)) for line in lines if line.strip()]

    def __len__(self) -> int:
        return self._count
