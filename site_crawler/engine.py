# File: site_crawler/engine.py
"""site_crawler.engine: entry coroutine that runs one crawl with a given sink."""

from __future__ import annotations

from typing import Iterable, Optional

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.crawler import AsyncCrawler
from site_crawler.crawler.models import CrawlResult
from site_crawler.storage import ContentStore

__all__ = ["start_crawl"]


async def start_crawl(
    cfg: CrawlerConfig,
    seed_urls: Iterable[str],
    store: Optional[ContentStore] = None,
) -> CrawlResult:
    """
    Run :class:`AsyncCrawler` inside its session context and return the counters.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl settings.
    seed_urls : Iterable[str]
        Start URLs, queued at depth 0.
    store : ContentStore, optional
        Sink for crawled pages; an in-memory store when omitted.
    """
    async with AsyncCrawler(cfg, store) as crawler:
        return await crawler.crawl(seed_urls)
