"""Contract shared by every storage sink."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from site_crawler.crawler.models import Page


class StorageError(Exception):
    """A page could not be written to, or read back from, a sink."""


class ContentStore(ABC):
    """Receives pages from the crawler.

    ``add_page`` raises :class:`StorageError` on failure; the crawler logs it
    and keeps going.
    """

    @abstractmethod
    def add_page(self, page: Page) -> None:
        ...

    @abstractmethod
    def get_all_pages(self) -> List[Page]:
        ...

    def close(self) -> None:
        """Release resources held by the sink."""

    def __len__(self) -> int:
        return len(self.get_all_pages())
