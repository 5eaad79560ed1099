# File: tests/test_robots.py
from __future__ import annotations

import pytest
from aiohttp import ClientSession, ClientTimeout, web
from conftest import build_app, serve_app

from site_crawler.crawler.fetcher import Fetcher
from site_crawler.crawler.robots import RobotsCache
from site_crawler.parser.robots_parser import RobotsRules, parse_robots

ROBOTS = """\
# comment line
User-agent: *
Allow: /public   # trailing comment
Disallow: /
Crawl-delay: 10
Sitemap: https://x.test/sitemap.xml
Disallow:
"""


def test_parse_keeps_only_allow_and_disallow_in_order():
    rules = parse_robots(ROBOTS, "x.test")
    assert rules == RobotsRules(host="x.test", allow=("/public",), disallow=("/",))


def test_parse_is_case_insensitive_on_directives():
    rules = parse_robots("allow: /a\nDISALLOW: /b\ndisallow : /c", "x.test")
    assert rules.allow == ("/a",)
    assert rules.disallow == ("/b", "/c")


@pytest.mark.parametrize(
    "path,allowed",
    [
        ("/public/page", True),
        ("/public", True),
        ("/private", False),
        ("/", False),
    ],
)
def test_allow_takes_precedence_over_disallow(path, allowed):
    rules = parse_robots("Allow: /public\nDisallow: /", "x.test")
    assert rules.is_allowed(path) is allowed


def test_unmatched_path_is_allowed():
    rules = parse_robots("Allow: /public\nDisallow: /private", "x.test")
    assert rules.is_allowed("/other")
    assert not rules.is_allowed("/private/x")


def test_empty_rules_allow_everything():
    rules = parse_robots("User-agent: *\nDisallow:\n", "x.test")
    assert rules.is_allowed("/anything")
    assert rules.is_allowed("")


# --------------------------------------------------------------------------- #
#                                 RobotsCache                                 #
# --------------------------------------------------------------------------- #


def make_fetcher(session: ClientSession, basic_config) -> Fetcher:
    return Fetcher(session, basic_config)


@pytest.mark.asyncio()
async def test_cache_fetches_once_per_host(basic_config, unused_tcp_port):
    hits: list[str] = []

    async def robots(_):
        return web.Response(text="Disallow: /private", content_type="text/plain")

    app = build_app({"/robots.txt": robots}, hits)
    async for base in serve_app(app, unused_tcp_port):
        async with ClientSession() as session:
            cache = RobotsCache(make_fetcher(session, basic_config))
            assert await cache.is_allowed(f"{base}/open")
            assert not await cache.is_allowed(f"{base}/private/doc")
            assert not await cache.is_allowed(f"{base}/private#x")

    assert hits == ["/robots.txt"]
    assert cache.cached_hosts == frozenset({"127.0.0.1"})
    assert cache.get_rules("127.0.0.1").disallow == ("/private",)


@pytest.mark.asyncio()
async def test_connection_refused_fails_open(basic_config, unused_tcp_port):
    # nothing listens on the port
    async with ClientSession(timeout=ClientTimeout(total=2)) as session:
        cache = RobotsCache(make_fetcher(session, basic_config))
        assert await cache.is_allowed(f"http://127.0.0.1:{unused_tcp_port}/anything")
    assert cache.cached_hosts == frozenset()


@pytest.mark.asyncio()
async def test_non_success_status_is_not_cached(basic_config, unused_tcp_port):
    hits: list[str] = []
    calls = {"n": 0}

    async def robots(_):
        calls["n"] += 1
        if calls["n"] == 1:
            return web.Response(status=500)
        return web.Response(text="Disallow: /", content_type="text/plain")

    app = build_app({"/robots.txt": robots}, hits)
    async for base in serve_app(app, unused_tcp_port):
        async with ClientSession() as session:
            cache = RobotsCache(make_fetcher(session, basic_config))
            assert await cache.is_allowed(f"{base}/page")
            assert cache.cached_hosts == frozenset()
            assert not await cache.is_allowed(f"{base}/page")

    assert hits == ["/robots.txt", "/robots.txt"]
