# === FILE: site_crawler/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from aiohttp import ClientSession, ClientTimeout
from bs4 import ParserRejectedMarkup

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.fetcher import FetchError, Fetcher, ParseError
from site_crawler.crawler.frontier import Frontier
from site_crawler.crawler.models import CrawlResult, FrontierEntry, Page
from site_crawler.crawler.robots import RobotsCache
from site_crawler.logger import logger
from site_crawler.parser.html_parser import parse_html
from site_crawler.storage import ContentStore, MemoryStore, StorageError

__all__ = ("AsyncCrawler", "RunState")

_NO_SESSION = "Session not initialized; use 'async with AsyncCrawler(...)'"


@dataclass(slots=True)
class RunState:
    """Everything the workers of one run share.

    Built by :meth:`AsyncCrawler.crawl` and handed to each worker at spawn.
    Counters are only touched between suspension points.
    """
    frontier: Frontier
    robots: RobotsCache
    store: ContentStore
    pages_stored: int = 0
    errors: int = 0
    store_errors: int = 0
    robots_blocked: int = 0


class AsyncCrawler:
    """Breadth-first crawler: a pool of asyncio workers over one shared frontier."""
    #: pause before a worker re-checks an empty frontier (seconds)
    EMPTY_BACKOFF: float = 0.1

    def __init__(self, config: CrawlerConfig, store: Optional[ContentStore] = None) -> None:
        self.config = config
        self.store: ContentStore = store if store is not None else MemoryStore()
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.logger = logger

    async def __aenter__(self) -> AsyncCrawler:
        timeout = ClientTimeout(total=self.config.timeout)
        self.session = ClientSession(
            timeout=timeout,
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, seed_urls: Iterable[str]) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError(_NO_SESSION)
        start = time.monotonic()
        state = RunState(frontier=Frontier(), robots=RobotsCache(self.fetcher), store=self.store)
        for url in seed_urls:
            if not state.frontier.try_enqueue(url, 0):
                self.logger.warning("Ignoring seed %s (invalid or duplicate)", url)

        self.logger.info(
            "Crawl started: %d seed(s), %d worker(s), max_depth=%d, max_pages=%d",
            len(state.frontier), self.config.concurrent_requests,
            self.config.max_depth, self.config.max_pages,
        )
        workers = [
            asyncio.create_task(self._worker(i, state))
            for i in range(1, self.config.concurrent_requests + 1)
        ]
        await asyncio.gather(*workers)

        result = CrawlResult(
            pages_stored=state.pages_stored,
            unique_urls_seen=state.frontier.seen_count,
            errors=state.errors,
            elapsed_seconds=time.monotonic() - start,
            store_errors=state.store_errors,
            robots_blocked=state.robots_blocked,
        )
        self.logger.info(
            "Finished: %d page(s) stored, %d unique URL(s), %d error(s) in %.2f s",
            result.pages_stored, result.unique_urls_seen, result.errors, result.elapsed_seconds,
        )
        return result

    async def _worker(self, worker_id: int, state: RunState) -> None:
        self.logger.info("Worker %d started", worker_id)
        while True:
            if state.pages_stored >= self.config.max_pages:
                break
            entry = state.frontier.dequeue()
            if entry is None:
                # a peer may still be fetching a page whose links are not queued yet
                await asyncio.sleep(self.EMPTY_BACKOFF)
                if state.frontier.is_empty():
                    break
                continue
            if entry.depth > self.config.max_depth:
                continue
            if self.config.respect_robots_txt and not await state.robots.is_allowed(entry.url):
                state.robots_blocked += 1
                self.logger.info("Blocked by robots.txt: %s", entry.url)
                continue
            await self._process(entry, state)
            if self.config.delay_ms:
                await asyncio.sleep(self.config.delay_seconds)
        self.logger.info("Worker %d stopped", worker_id)

    async def _process(self, entry: FrontierEntry, state: RunState) -> None:
        try:
            page = await self.fetch_page(entry)
        except FetchError as exc:
            state.errors += 1
            self.logger.error("Error crawling %s: %s", entry.url, exc)
            return

        # no await from here on: the budget check and the increment are atomic
        if state.pages_stored >= self.config.max_pages:
            self.logger.debug("Page budget reached, discarding %s", entry.url)
            return
        state.pages_stored += 1

        for link in page.outbound_links:
            state.frontier.try_enqueue(link, entry.depth + 1)
        try:
            state.store.add_page(page)
        except StorageError as exc:
            state.store_errors += 1
            self.logger.warning("Could not store %s: %s", entry.url, exc)
        self.logger.info("Crawled: %s (depth: %d)", entry.url, entry.depth)

    async def fetch_page(self, entry: FrontierEntry) -> Page:
        """Fetch and parse *entry*; raises :class:`FetchError` on failure."""
        if self.fetcher is None:
            raise RuntimeError(_NO_SESSION)
        response = await self.fetcher.fetch(entry.url)
        try:
            parsed = parse_html(response.body, entry.url)
        except ParserRejectedMarkup as exc:
            raise ParseError(entry.url, f"malformed HTML: {exc}") from exc
        return Page(
            url=entry.url,
            title=parsed.title,
            description=parsed.description,
            raw_content=response.body,
            outbound_links=parsed.links,
            depth=entry.depth,
        )

