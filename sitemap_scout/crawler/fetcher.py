# sitemap_scout/crawler/fetcher.py
"""
Fetcher module: a single timed HTTP GET with a rotating User-Agent.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitemap_scout.config import ScraperConfig
from sitemap_scout.crawler.models import FetchedPage
from sitemap_scout.errors import TransportError

__all__ = ("Fetcher",)


class Fetcher:
    """Issues GET requests; HTTP status codes are returned, never raised.

    Use as an async context manager so the underlying session is closed::

        async with Fetcher(config) as fetcher:
            page = await fetcher.fetch(url)
    """

    def __init__(
        self,
        config: ScraperConfig,
        session: Optional[ClientSession] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.session = session
        self.user_agents: Sequence[str] = tuple(config.user_agents)
        self.logger = logging.getLogger("SitemapScout")
        self._owns_session = session is None
        self._timeout = ClientTimeout(total=config.timeout)
        # seeded once per fetcher, reused for every request
        self._rng = rng if rng is not None else random.Random(config.seed)

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(timeout=self._timeout, raise_for_status=False)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    def pick_user_agent(self) -> str:
        return self._rng.choice(self.user_agents)

    async def fetch(self, url: str) -> FetchedPage:
        """
        GET *url* and read the whole body.

        Raises TransportError on DNS, connection or timeout failure.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")

        headers = {"User-Agent": self.pick_user_agent()}
        self.logger.debug("Requesting URL: %s", url)
        try:
            async with self.session.get(url, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                return FetchedPage(
                    url=str(resp.url),
                    status=resp.status,
                    content_type=resp.headers.get("Content-Type", ""),
                    body=body,
                )
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
