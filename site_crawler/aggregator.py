# File: site_crawler/aggregator.py
"""site_crawler.aggregator: builds the crawl report from the run counters and stored pages."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, TypedDict

from site_crawler.crawler.models import CrawlResult, Page


class PageInfo(TypedDict, total=False):
    """Summary of one stored page."""

    url: str
    title: Optional[str]
    description: Optional[str]
    depth: int
    links: int
    fetched_at: str


@dataclass(slots=True)
class CrawlReport:
    """Run statistics plus per-page summaries (raw HTML is left out)."""

    summary: Dict[str, Any] = field(default_factory=dict)
    pages: List[PageInfo] = field(default_factory=list)

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def _page_info(page: Page) -> PageInfo:
    return {
        "url": page.url,
        "title": page.title,
        "description": page.description,
        "depth": page.depth,
        "links": len(page.outbound_links),
        "fetched_at": page.fetched_at.isoformat(),
    }


def aggregate_results(result: CrawlResult, pages: Iterable[Page]) -> CrawlReport:
    """Combine *result* and the pages read back from the sink, ordered by depth then URL."""
    ordered = sorted(pages, key=lambda p: (p.depth, p.url))
    return CrawlReport(summary=result.to_dict(), pages=[_page_info(p) for p in ordered])
