# sitemap_scout/errors.py
"""
Exception hierarchy for SitemapScout.

All three concrete errors are raised inside a single unit of work (one URL)
and handled there: logged and the URL dropped.
"""
from __future__ import annotations

__all__ = ("SitemapScoutError", "TransportError", "ParseError", "ExtractionError")


class SitemapScoutError(Exception):
    """Base class for all project errors."""

    def __init__(self, url: str, reason: object = None) -> None:
        self.url = url
        self.reason = reason
        message = url if reason is None else f"{url}: {reason}"
        super().__init__(message)


class TransportError(SitemapScoutError):
    """DNS, connection or timeout failure. HTTP status codes never raise this."""


class ParseError(SitemapScoutError):
    """A sitemap body could not be decoded or parsed as XML."""


class ExtractionError(SitemapScoutError):
    """The extractor could not derive a record from a page at all."""
