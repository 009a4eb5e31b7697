# === FILE: sitemap_scout/parser/html_parser.py ===
"""HTML extraction for SitemapScout.

The scrape engine only depends on the :class:`Extractor` protocol: one method
that turns a :class:`~sitemap_scout.crawler.models.FetchedPage` into a
:class:`~sitemap_scout.crawler.models.SeoData` record. Alternative extraction
logic can be plugged in without touching the engines.

:class:`DefaultExtractor` picks out:

* title: text of the first ``<title>``, or ``""`` if absent.
* h1: text of the first ``<h1>`` including nested inline markup, or ``""``.
* meta_description: ``content`` of the first ``<meta name="description...">``
  tag, or ``""`` if absent.

Status code and the resolved URL are copied from the response as is.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from sitemap_scout.crawler.models import FetchedPage, SeoData
from sitemap_scout.errors import ExtractionError

__all__: Sequence[str] = ("Extractor", "DefaultExtractor")


@runtime_checkable
class Extractor(Protocol):
    """Turns a fetched page into an :class:`SeoData` record."""

    def extract(self, page: FetchedPage) -> SeoData:
        """Return the record for *page* or raise :class:`ExtractionError`."""
        ...


class DefaultExtractor:
    """BeautifulSoup-based extractor for title, first h1 and meta description."""

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def extract(self, page: FetchedPage) -> SeoData:
        try:
            soup = BeautifulSoup(page.body, self.features)
        except ParserRejectedMarkup as exc:
            raise ExtractionError(page.url, exc) from exc

        title_tag = soup.find("title")
        h1_tag = soup.find("h1")
        meta_tag = soup.select_one("meta[name^=description]")

        description = meta_tag.get("content", "") if meta_tag else ""
        if isinstance(description, list):  # multi-valued attribute
            description = " ".join(description)

        return SeoData(
            url=page.url,
            title=title_tag.get_text().strip() if title_tag else "",
            h1=h1_tag.get_text().strip() if h1_tag else "",
            meta_description=description.strip(),
            status_code=page.status,
        )
