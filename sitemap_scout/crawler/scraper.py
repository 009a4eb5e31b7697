# === FILE: sitemap_scout/crawler/scraper.py ===
"""
Fetch-and-extract over a known set of page URLs under a concurrency ceiling.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Iterable, List, Optional

from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.models import FetchedPage, SeoData
from sitemap_scout.crawler.worklist import Batch, Worklist
from sitemap_scout.errors import ExtractionError, TransportError
from sitemap_scout.parser.html_parser import Extractor

__all__ = ("BoundedScraper",)


class BoundedScraper:
    """Scrapes pages with at most *concurrency* fetches in flight.

    A slot is held for the network round trip only; extraction runs after the
    slot is released. Pages that fail to fetch or extract are logged and left
    out of the result.
    """

    def __init__(self, fetcher: Fetcher, extractor: Extractor, concurrency: int) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self.fetcher = fetcher
        self.extractor = extractor
        self.concurrency = concurrency
        self.logger = logging.getLogger("SitemapScout")
        self.in_flight = 0
        self.peak_in_flight = 0
        self._slots: Optional[asyncio.Semaphore] = None

    async def scrape(self, urls: Iterable[str]) -> List[SeoData]:
        urls = list(urls)
        self.logger.info("Scraping %d pages (concurrency %d)", len(urls), self.concurrency)
        start = time.monotonic()
        self._slots = asyncio.Semaphore(self.concurrency)
        self.in_flight = 0
        self.peak_in_flight = 0

        worklist: Worklist[SeoData] = Worklist(self._visit, name="scrape")
        records = await worklist.drain(urls)

        duration = time.monotonic() - start
        self.logger.info(
            "Scrape finished: %d of %d pages in %.2f s (%.2f pages/s)",
            len(records), len(urls), duration, len(records) / duration if duration else 0,
        )
        return records

    async def _fetch_with_slot(self, url: str) -> FetchedPage:
        if self._slots is None:
            raise RuntimeError("Slots not initialized, call scrape()")
        async with self._slots:
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                return await self.fetcher.fetch(url)
            finally:
                self.in_flight -= 1

    async def _visit(self, url: str) -> Batch[SeoData]:
        try:
            page = await self._fetch_with_slot(url)
        except TransportError as exc:
            self.logger.warning("Error scraping URL: %s (%s)", url, exc.reason)
            return Batch()

        try:
            record = self.extractor.extract(page)
        except ExtractionError as exc:
            self.logger.warning("Error extracting SEO data: %s (%s)", url, exc.reason)
            return Batch()
        return Batch(results=[record])
