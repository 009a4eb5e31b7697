# === FILE: sitemap_scout/crawler/discovery.py ===
"""
Recursive discovery of page URLs from a tree of sitemap documents.
"""
from __future__ import annotations

import logging
import time
from typing import List, Set

from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.worklist import Batch, Worklist
from sitemap_scout.errors import ParseError, TransportError
from sitemap_scout.parser.sitemap_parser import classify_urls, parse_sitemap

__all__ = ("SitemapDiscovery",)


class SitemapDiscovery:
    """Walks sitemap indexes and URL sets, returning every page URL found.

    Fan-out is unbounded: each sitemap referenced by a fetched document is
    fetched in its own task as soon as it is seen. Page URLs are neither
    deduplicated nor sorted.

    With ``skip_seen=True`` a sitemap URL is fetched at most once per run,
    which makes discovery terminate on cyclic sitemap graphs. By default it is
    off and a cycle keeps discovery running.
    """

    def __init__(self, fetcher: Fetcher, skip_seen: bool = False) -> None:
        self.fetcher = fetcher
        self.skip_seen = skip_seen
        self.logger = logging.getLogger("SitemapScout")
        self.sitemaps_fetched = 0
        self._seen: Set[str] = set()

    async def discover(self, root_url: str) -> List[str]:
        self.logger.info("Discovering pages from %s", root_url)
        start = time.monotonic()
        self.sitemaps_fetched = 0
        self._seen = set()

        worklist: Worklist[str] = Worklist(self._visit, name="discovery")
        pages = await worklist.drain([root_url])

        self.logger.info(
            "Discovery finished: %d page URLs from %d sitemaps in %.2f s",
            len(pages), self.sitemaps_fetched, time.monotonic() - start,
        )
        return pages

    async def _visit(self, url: str) -> Batch[str]:
        if self.skip_seen:
            if url in self._seen:
                self.logger.debug("Skipping already fetched sitemap %s", url)
                return Batch()
            self._seen.add(url)

        try:
            page = await self.fetcher.fetch(url)
        except TransportError as exc:
            self.logger.warning("Request failed: %s (%s)", url, exc.reason)
            return Batch()
        self.sitemaps_fetched += 1

        try:
            locs = parse_sitemap(page.body, url=url)
        except ParseError as exc:
            self.logger.warning("Error extracting URLs: %s (%s)", url, exc.reason)
            return Batch()

        sitemaps, pages = classify_urls(locs)
        for sitemap in sitemaps:
            self.logger.info("Found sitemap %s", sitemap)
        return Batch(urls=sitemaps, results=pages)
