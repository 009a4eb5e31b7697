# File: sitemap_scout/parser/sitemap_parser.py
"""sitemap_scout.parser.sitemap_parser: parsing of sitemap documents and URL classification."""

from __future__ import annotations

import gzip
import logging
import zlib
from typing import Iterable, List, Tuple, Union

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from lxml import etree

from sitemap_scout.crawler.models import UrlKind, UrlReference
from sitemap_scout.errors import ParseError

__all__ = ("CONTAINER_MARKER", "parse_sitemap", "classify_url", "classify_urls")

#: substring that marks a URL as another sitemap document (case-sensitive)
CONTAINER_MARKER = "xml"

_GZIP_MAGIC = b"\x1f\x8b"

logger = logging.getLogger("SitemapScout")


def _maybe_gunzip(data: bytes, url: str) -> bytes:
    if not data.startswith(_GZIP_MAGIC):
        return data
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as exc:
        raise ParseError(url, f"broken gzip stream: {exc}") from exc


def _locs_from_xml(data: bytes) -> List[str]:
    parser = etree.XMLParser(ns_clean=True, resolve_entities=False, no_network=True)
    root = etree.fromstring(data, parser=parser)
    return ["".join(loc.itertext()) for loc in root.iter("{*}loc")]


def _locs_from_markup(data: bytes, url: str) -> List[str]:
    # fragments and broken documents: any <loc> tag, like an HTML scraper sees it
    try:
        soup = BeautifulSoup(data, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(url, exc) from exc
    return [loc.get_text() for loc in soup.find_all("loc")]


def parse_sitemap(content: Union[str, bytes], url: str = "") -> List[str]:
    """Parse a sitemap document and return the text of every ``<loc>`` element.

    Works the same way for a ``<sitemapindex>`` and a ``<urlset>``: any element
    named ``loc`` in any namespace counts. Documents that are not well-formed
    XML (several root elements, truncated bodies) are scanned leniently for
    ``<loc>`` tags instead.

    Empty or whitespace-only ``<loc>`` elements are dropped here rather than
    passed on as empty page URLs. They name nothing to fetch, so the scrape
    result is the same as if they were classified as pages and skipped later.

    Args:
        content: raw body, ``str`` or ``bytes`` (gzip-compressed bodies are accepted).
        url: source URL, used only in error messages.

    Returns:
        List of URLs in document order, possibly empty.

    Raises:
        ParseError: if the body cannot be decompressed or parsed at all.

    Example:
    ```python
    from sitemap_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        urls = parse_sitemap(f.read())
    ```
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    data = _maybe_gunzip(data, url)
    if not data.strip():
        return []

    try:
        texts = _locs_from_xml(data)
    except etree.XMLSyntaxError as exc:
        logger.debug("%s is not well-formed XML (%s), scanning it as markup", url or "document", exc)
        texts = _locs_from_markup(data, url)
    return [text.strip() for text in texts if text and text.strip()]


def classify_url(url: str) -> UrlReference:
    """A URL containing ``"xml"`` anywhere is another sitemap, everything else is a page."""
    kind = UrlKind.CONTAINER if CONTAINER_MARKER in url else UrlKind.LEAF
    return UrlReference(url=url, kind=kind)


def classify_urls(urls: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Split *urls* into ``(containers, leaves)``, keeping order and duplicates."""
    containers: List[str] = []
    leaves: List[str] = []
    for ref in map(classify_url, urls):
        if ref.is_container:
            containers.append(ref.url)
        else:
            leaves.append(ref.url)
    return containers, leaves
