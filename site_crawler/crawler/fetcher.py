# site_crawler/crawler/fetcher.py
"""
Fetcher module: single-attempt HTTP GET over a shared aiohttp session.

Failures are reported as :class:`FetchError` subclasses so the worker can
count them without inspecting aiohttp internals.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Tuple

from aiohttp import ClientError, ClientSession

from site_crawler.config import CrawlerConfig

__all__ = (
    "FetchResponse",
    "FetchError",
    "NetworkError",
    "HttpStatusError",
    "NotHtmlError",
    "ParseError",
    "Fetcher",
)


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Successful HTML response."""

    status: int
    content_type: str
    body: str


class FetchError(Exception):
    """A page could not be fetched."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(reason)
        self.url = url
        self.reason = reason

    def __str__(self) -> str:
        return self.reason


class NetworkError(FetchError):
    """Connection failure, protocol error or timeout."""


class HttpStatusError(FetchError):
    """The server answered with a non-2xx status."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, f"HTTP status {status}")
        self.status = status


class NotHtmlError(FetchError):
    """The response is not an HTML document."""

    def __init__(self, url: str, content_type: str) -> None:
        super().__init__(url, f"not an HTML page (content-type: {content_type or 'missing'})")
        self.content_type = content_type


class ParseError(FetchError):
    """The HTML parser rejected the document."""


class Fetcher:
    """Performs GET requests with the crawler's User-Agent and timeout.

    The session is owned by :class:`~site_crawler.crawler.crawler.AsyncCrawler`
    and shared by all workers.
    """

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> FetchResponse:
        """
        Fetch *url* once and return its HTML body.

        Raises NetworkError, HttpStatusError or NotHtmlError.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if not 200 <= resp.status < 300:
                    raise HttpStatusError(url, resp.status)
                ctype = resp.headers.get("Content-Type", "")
                if "text/html" not in ctype.lower():
                    raise NotHtmlError(url, ctype)
                text = await resp.text(errors="replace")
                return FetchResponse(resp.status, ctype, text)
        except asyncio.TimeoutError:
            raise NetworkError(url, f"timed out after {self.config.timeout:g}s") from None
        except ClientError as exc:
            raise NetworkError(url, f"{type(exc).__name__}: {exc}") from exc

    async def get_text(self, url: str) -> Tuple[int, str]:
        """GET *url* regardless of status/content type; used for robots.txt.

        Raises NetworkError only.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                return resp.status, await resp.text(errors="replace")
        except asyncio.TimeoutError:
            raise NetworkError(url, f"timed out after {self.config.timeout:g}s") from None
        except ClientError as exc:
            raise NetworkError(url, f"{type(exc).__name__}: {exc}") from exc
