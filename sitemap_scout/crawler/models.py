# sitemap_scout/crawler/models.py
"""
Data models for the SitemapScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UrlKind(str, Enum):
    """Classification of a URL found in a sitemap."""

    CONTAINER = "container"
    LEAF = "leaf"


@dataclass(frozen=True, slots=True)
class UrlReference:
    """A URL found in a ``<loc>`` element together with its classification."""

    url: str
    kind: UrlKind

    @property
    def is_container(self) -> bool:
        return self.kind is UrlKind.CONTAINER


@dataclass(frozen=True, slots=True)
class FetchedPage:
    """Fully read HTTP response: resolved URL, status, content type and raw body."""

    url: str
    status: int
    content_type: str
    body: bytes


@dataclass(frozen=True, slots=True)
class SeoData:
    """Fields extracted from one scraped page."""

    url: str
    title: str
    h1: str
    meta_description: str
    status_code: int
