# File: tests/conftest.py
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Union

import pytest
from aiohttp import web

from sitemap_scout.config import ScraperConfig
from sitemap_scout.crawler.models import FetchedPage
from sitemap_scout.errors import TransportError
from sitemap_scout.logger import LOGGER_NAME

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

Response = Union[str, bytes, FetchedPage, Exception]


def urlset(*urls: str) -> str:
    """Build a ``<urlset>`` sitemap document."""
    entries = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{entries}</urlset>'


def sitemapindex(*urls: str) -> str:
    """Build a ``<sitemapindex>`` document."""
    entries = "".join(f"<sitemap><loc>{u}</loc></sitemap>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="{SITEMAP_NS}">{entries}</sitemapindex>'


def html_page(title: str = "", h1: str = "", description: Optional[str] = None) -> str:
    meta = f'<meta name="description" content="{description}">' if description is not None else ""
    title_tag = f"<title>{title}</title>" if title else ""
    h1_tag = f"<h1>{h1}</h1>" if h1 else ""
    return f"<html><head>{title_tag}{meta}</head><body>{h1_tag}<p>text</p></body></html>"


class FakeFetcher:
    """In-memory stand-in for :class:`~sitemap_scout.crawler.fetcher.Fetcher`.

    Unknown URLs fail like an unreachable host. Tracks how many fetches
    overlap so tests can check concurrency limits.
    """

    def __init__(self, responses: Dict[str, Response], delay: float = 0.0, status: int = 200) -> None:
        self.responses = responses
        self.delay = delay
        self.status = status
        self.calls: List[str] = []
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, url: str) -> FetchedPage:
        self.calls.append(url)
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            resp = self.responses.get(url)
            if resp is None:
                raise TransportError(url, "connection refused")
            if isinstance(resp, Exception):
                raise resp
            if isinstance(resp, FetchedPage):
                return resp
            body = resp.encode("utf-8") if isinstance(resp, str) else resp
            return FetchedPage(url=url, status=self.status, content_type="text/html", body=body)
        finally:
            self.in_flight -= 1


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture(autouse=True)
def reset_project_logger():
    """CLI tests install handlers bound to CliRunner streams; drop them after each test."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def basic_config() -> ScraperConfig:
    """Return a basic valid ScraperConfig."""
    return ScraperConfig(
        root_url="https://example.com/sitemap.xml",
        concurrency=4,
        timeout=2.0,
        user_agents=["TestAgent/1.0", "TestAgent/2.0"],
        seed=1,
    )
