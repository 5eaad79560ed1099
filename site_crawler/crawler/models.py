# site_crawler/crawler/models.py
"""
Data models for the SiteCrawler crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class FrontierEntry:
    """A canonical URL waiting to be crawled, with the depth it was discovered at."""

    url: str
    depth: int


@dataclass(slots=True)
class Page:
    """A successfully fetched and parsed HTML page."""

    url: str
    title: Optional[str]
    description: Optional[str]
    raw_content: str
    outbound_links: List[str]
    depth: int
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "raw_content": self.raw_content,
            "outbound_links": list(self.outbound_links),
            "depth": self.depth,
            "fetched_at": self.fetched_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Page:
        return cls(
            url=data["url"],
            title=data.get("title"),
            description=data.get("description"),
            raw_content=data.get("raw_content", ""),
            outbound_links=list(data.get("outbound_links", [])),
            depth=int(data.get("depth", 0)),
            fetched_at=datetime.fromisoformat(data["fetched_at"]),
        )


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Aggregate counters of a finished run."""

    pages_stored: int
    unique_urls_seen: int
    errors: int
    elapsed_seconds: float
    store_errors: int = 0
    robots_blocked: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pages_stored": self.pages_stored,
            "unique_urls_seen": self.unique_urls_seen,
            "errors": self.errors,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "store_errors": self.store_errors,
            "robots_blocked": self.robots_blocked,
        }
