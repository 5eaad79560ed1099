# site_crawler/crawler/frontier.py
"""
Frontier: FIFO work queue plus the visited set that guarantees every canonical
URL is queued at most once per run.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Optional, Set

from site_crawler.crawler.models import FrontierEntry
from site_crawler.utils import normalize_url

__all__ = ("Frontier",)


class Frontier:
    """Concurrent-safe queue of :class:`FrontierEntry` with URL deduplication.

    "Already seen" and "currently queued" share one set, so the membership
    test and the insert happen in the same critical section. The lock is
    never held across an ``await``.
    """

    def __init__(self) -> None:
        self._queue: Deque[FrontierEntry] = deque()
        self._visited: Set[str] = set()
        self._lock = threading.Lock()

    def try_enqueue(self, url: str, depth: int) -> bool:
        """Queue *url* at *depth* unless it is invalid or was seen before.

        Returns True only when a new entry was created.
        """
        canonical = normalize_url(url)
        if canonical is None:
            return False
        with self._lock:
            if canonical in self._visited:
                return False
            self._visited.add(canonical)
            self._queue.append(FrontierEntry(canonical, depth))
        return True

    def dequeue(self) -> Optional[FrontierEntry]:
        """Pop the oldest entry, or None if the queue is empty right now."""
        with self._lock:
            if not self._queue:
                return None
            return self._queue.popleft()

    def is_empty(self) -> bool:
        with self._lock:
            return not self._queue

    @property
    def seen_count(self) -> int:
        """Number of distinct canonical URLs ever accepted."""
        with self._lock:
            return len(self._visited)

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        canonical = normalize_url(url)
        if canonical is None:
            return False
        with self._lock:
            return canonical in self._visited
