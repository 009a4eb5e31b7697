# File: sitemap_scout/engine.py
"""sitemap_scout.engine: orchestration layer, discovery followed by scrape."""

from __future__ import annotations

from typing import List, Optional

from sitemap_scout.config import ScraperConfig
from sitemap_scout.crawler.discovery import SitemapDiscovery
from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.models import SeoData
from sitemap_scout.crawler.scraper import BoundedScraper
from sitemap_scout.logger import logger
from sitemap_scout.parser.html_parser import DefaultExtractor, Extractor

__all__ = ["Engine", "start_scan"]


class Engine:
    """Facade for the CLI and tests: runs discovery, then the bounded scrape."""

    def __init__(
        self,
        config: ScraperConfig,
        extractor: Optional[Extractor] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.config = config
        self.extractor: Extractor = extractor if extractor is not None else DefaultExtractor()
        self._fetcher = fetcher

    async def run(self) -> List[SeoData]:
        """Discover every page under ``config.root_url`` and scrape them all.

        Never raises for per-URL failures: a run where every URL fails returns
        an empty list.
        """
        if self._fetcher is not None:
            return await self._run_with(self._fetcher)
        async with Fetcher(self.config) as fetcher:
            return await self._run_with(fetcher)

    async def _run_with(self, fetcher: Fetcher) -> List[SeoData]:
        root_url = str(self.config.root_url)
        logger.info("Starting scrape of %s", root_url)

        discovery = SitemapDiscovery(fetcher, skip_seen=self.config.skip_seen_sitemaps)
        pages = await discovery.discover(root_url)

        scraper = BoundedScraper(fetcher, self.extractor, self.config.concurrency)
        return await scraper.scrape(pages)


async def start_scan(cfg: ScraperConfig, extractor: Optional[Extractor] = None) -> List[SeoData]:
    """Run a full discovery + scrape for *cfg* and return the records."""
    return await Engine(cfg, extractor=extractor).run()
