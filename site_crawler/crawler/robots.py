# site_crawler/crawler/robots.py
"""
Per-host cache of robots.txt rules.
"""
from __future__ import annotations

import logging
from typing import Dict, FrozenSet
from urllib.parse import urlsplit

from site_crawler.crawler.fetcher import Fetcher, NetworkError
from site_crawler.logger import LOGGER_NAME
from site_crawler.parser.robots_parser import RobotsRules, parse_robots
from site_crawler.utils import extract_host, robots_url

__all__ = ("RobotsCache",)


class RobotsCache:
    """Lazily fetches and memoizes robots.txt per host.

    Only successful fetches are cached. A network error or non-2xx answer
    allows the URL and leaves the host uncached, so the next lookup tries
    again. Two workers racing on the same new host may both fetch; both
    store equal rules.
    """

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher
        self._rules: Dict[str, RobotsRules] = {}
        self.logger = logging.getLogger(f"{LOGGER_NAME}.robots")

    @property
    def cached_hosts(self) -> FrozenSet[str]:
        return frozenset(self._rules)

    def get_rules(self, host: str) -> RobotsRules | None:
        return self._rules.get(host)

    async def is_allowed(self, url: str) -> bool:
        host = extract_host(url)
        rules = self._rules.get(host)
        if rules is None:
            rules = await self._load(url, host)
            if rules is None:
                return True
        return rules.is_allowed(urlsplit(url).path or "/")

    async def _load(self, url: str, host: str) -> RobotsRules | None:
        location = robots_url(url)
        try:
            status, text = await self.fetcher.get_text(location)
        except NetworkError as exc:
            self.logger.warning("robots.txt unavailable for %s (%s), allowing", host, exc)
            return None
        if not 200 <= status < 300:
            self.logger.debug("robots.txt %s -> HTTP %s, allowing", location, status)
            return None
        rules = parse_robots(text, host)
        self._rules[host] = rules
        self.logger.debug(
            "robots.txt for %s: %d allow, %d disallow", host, len(rules.allow), len(rules.disallow)
        )
        return rules
