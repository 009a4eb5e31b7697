# sitemap_scout/__init__.py
"""
SitemapScout package initializer.
Defines the package version and exposes the public API.
"""
__version__ = "0.1.0"

from sitemap_scout.config import ScraperConfig, load_config
from sitemap_scout.crawler.models import FetchedPage, SeoData
from sitemap_scout.engine import Engine, start_scan
from sitemap_scout.parser.html_parser import DefaultExtractor, Extractor

__all__ = [
    "__version__",
    "DefaultExtractor",
    "Engine",
    "Extractor",
    "FetchedPage",
    "ScraperConfig",
    "SeoData",
    "load_config",
    "start_scan",
]
