# File: site_crawler/utils.py
"""site_crawler.utils: URL helpers shared by the frontier, parser and robots cache."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence
from urllib.parse import urldefrag, urljoin, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "ALLOWED_SCHEMES",
    "normalize_url",
    "extract_host",
    "robots_url",
    "remove_duplicates",
)

ALLOWED_SCHEMES = ("http", "https")


def normalize_url(url: str, base: Optional[str] = None) -> Optional[str]:
    """Return the canonical form of *url* or ``None`` if it cannot be crawled.

    Relative references are resolved against *base*. Only the fragment is
    removed; case, default ports and query order are left untouched.
    """
    raw = url.strip()
    try:
        absolute = urljoin(base, raw) if base else raw
        parts = urlsplit(absolute)
        # port is parsed lazily and raises for garbage such as "host:abc"
        parts.port
    except ValueError:
        return None
    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.netloc:
        return None
    return urldefrag(absolute).url


def extract_host(url: str) -> str:
    """Host part of *url* without port or credentials (``""`` if absent)."""
    return urlsplit(url).hostname or ""


def robots_url(url: str) -> str:
    """Location of robots.txt for the site serving *url*."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, "/robots.txt", "", ""))


def remove_duplicates(urls: Iterable[str]) -> List[str]:
    """Drop repeated URLs, keeping first-seen order."""
    return list(dict.fromkeys(urls))
