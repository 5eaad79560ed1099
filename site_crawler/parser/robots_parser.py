# File: site_crawler/parser/robots_parser.py
"""site_crawler.parser.robots_parser: parsing of the robots.txt subset the crawler honours.

Only ``Allow`` and ``Disallow`` lines are read, as plain path prefixes.
User-agent groups, wildcards and ``Crawl-delay`` are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True, slots=True)
class RobotsRules:
    """Allow/Disallow prefixes of one host, in file order."""

    host: str
    allow: Tuple[str, ...] = ()
    disallow: Tuple[str, ...] = ()

    def is_allowed(self, path: str) -> bool:
        """Any Allow prefix wins; otherwise any Disallow prefix blocks; otherwise allowed."""
        path = path or "/"
        if any(path.startswith(prefix) for prefix in self.allow):
            return True
        if any(path.startswith(prefix) for prefix in self.disallow):
            return False
        return True


def parse_robots(text: str, host: str) -> RobotsRules:
    """Build :class:`RobotsRules` for *host* from the robots.txt body *text*."""
    allow: List[str] = []
    disallow: List[str] = []
    for directive, value in _prepare_lines(text):
        if not value:
            continue
        if directive == "allow":
            allow.append(value)
        elif directive == "disallow":
            disallow.append(value)
    return RobotsRules(host=host, allow=tuple(allow), disallow=tuple(disallow))


def _prepare_lines(text: str) -> List[Tuple[str, str]]:
    """Strip comments and split lines into (directive, value)."""
    lines: List[Tuple[str, str]] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or ":" not in line:
            continue
        key, val = (part.strip() for part in line.split(":", 1))
        lines.append((key.lower(), val))
    return lines
