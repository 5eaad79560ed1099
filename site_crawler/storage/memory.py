"""In-memory reference sink."""

from __future__ import annotations

from typing import List

from site_crawler.crawler.models import Page

from .base import ContentStore


class MemoryStore(ContentStore):
    """Keeps every page in a list, in the order they were stored."""

    def __init__(self) -> None:
        self._pages: List[Page] = []

    def add_page(self, page: Page) -> None:
        self._pages.append(page)

    def get_all_pages(self) -> List[Page]:
        return list(self._pages)

    def __len__(self) -> int:
        return len(self._pages)
