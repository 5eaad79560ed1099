# === FILE: site_crawler/parser/html_parser.py ===
"""HTML parsing for SiteCrawler.

:func:`parse_html` turns raw markup into the three things the crawler needs
from a page:

* title — text of the first ``<title>``, or ``None`` if absent/empty.
* description — ``content`` of ``<meta name="description">``, or ``None``.
* links — absolute http(s) URLs from ``<a href="…">``, resolved against the
  page URL, de-duplicated in document order.

Fragments are kept on purpose; canonicalisation is the frontier's job.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_crawler.utils import ALLOWED_SCHEMES, remove_duplicates

__all__: Sequence[str] = ("ParsedPage", "parse_html")


@dataclass(slots=True)
class ParsedPage:
    """Metadata extracted from one HTML document."""

    title: Optional[str] = None
    description: Optional[str] = None
    links: list[str] = field(default_factory=list)


def _resolve(base_url: str, href: str) -> Optional[str]:
    try:
        absolute = urljoin(base_url, href)
        scheme = urlsplit(absolute).scheme.lower()
    except ValueError:
        return None
    return absolute if scheme in ALLOWED_SCHEMES else None


def parse_html(html: str, base_url: str) -> ParsedPage:
    """Parse *html* fetched from *base_url*."""
    soup = BeautifulSoup(html, "html.parser")

    title: Optional[str] = None
    title_tag = soup.find("title")
    if isinstance(title_tag, Tag):
        title = title_tag.get_text(strip=True) or None

    description: Optional[str] = None
    meta = soup.find("meta", attrs={"name": "description"})
    if isinstance(meta, Tag):
        content = meta.get("content")
        if isinstance(content, str):
            description = content.strip() or None

    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        absolute = _resolve(base_url, href.strip())
        if absolute is not None:
            links.append(absolute)

    return ParsedPage(title=title, description=description, links=remove_duplicates(links))
