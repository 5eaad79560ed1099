# File: tests/conftest.py
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from datetime import datetime, timezone

import pytest
from aiohttp import web

from site_crawler.config import CrawlerConfig
from site_crawler.crawler.models import Page
from site_crawler.logger import LOGGER_NAME

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def html(body: str, title: str = "") -> web.Response:
    """HTML response with an optional <title>."""
    head = f"<head><title>{title}</title></head>" if title else ""
    return web.Response(text=f"<html>{head}<body>{body}</body></html>", content_type="text/html")


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


def build_app(routes: Mapping[str, Handler], hits: list[str] | None = None) -> web.Application:
    """aiohttp app serving *routes*; every requested path is appended to *hits*."""

    @web.middleware
    async def record(request: web.Request, handler):
        if hits is not None:
            hits.append(request.path)
        return await handler(request)

    app = web.Application(middlewares=[record])
    for path, handler in routes.items():
        app.router.add_get(path, handler)
    return app


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """Fast config for crawl tests: no politeness delay, short timeout."""
    return CrawlerConfig(
        max_depth=2,
        max_pages=50,
        concurrent_requests=4,
        delay_ms=0,
        user_agent="TestAgent/1.0",
        respect_robots_txt=True,
        timeout=2.0,
    )


@pytest.fixture()
def make_page() -> Callable[..., Page]:
    def _make(url: str = "https://x.test/", depth: int = 0, **kwargs) -> Page:
        defaults = dict(
            title="Title",
            description="Description",
            raw_content="<html></html>",
            outbound_links=["https://x.test/a"],
            fetched_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        defaults.update(kwargs)
        return Page(url=url, depth=depth, **defaults)

    return _make


@pytest.fixture(autouse=True)
def restore_logger():
    """The CLI reconfigures the project logger; undo that after every test."""
    lg = logging.getLogger(LOGGER_NAME)
    handlers, propagate, level = list(lg.handlers), lg.propagate, lg.level
    yield
    lg.handlers[:] = handlers
    lg.propagate = propagate
    lg.setLevel(level)
