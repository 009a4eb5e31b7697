# File: sitemap_scout/aggregator.py
"""sitemap_scout.aggregator: turns scraped records into a report with summary counters."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, TypedDict

from sitemap_scout.crawler.models import SeoData


class PageInfo(TypedDict):
    """One scraped page as it appears in reports."""

    url: str
    title: str
    h1: str
    meta_description: str
    status_code: int


class ScrapeSummary(TypedDict):
    """Counters over all scraped pages."""

    pages: int
    missing_title: int
    missing_h1: int
    missing_meta_description: int
    status_codes: Dict[str, int]


@dataclass(slots=True)
class ScrapeReport:
    """Scrape results plus summary counters."""

    pages: List[PageInfo] = field(default_factory=list)
    summary: ScrapeSummary = field(default_factory=lambda: _summarize([]))

    def as_dict(self) -> Dict[str, Any]:
        return {"summary": self.summary, "pages": self.pages}

    def json(self, *, pretty: bool = False) -> str:
        """Return the JSON representation of the report."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def _summarize(pages: List[PageInfo]) -> ScrapeSummary:
    statuses = Counter(str(p["status_code"]) for p in pages)
    return {
        "pages": len(pages),
        "missing_title": sum(1 for p in pages if not p["title"]),
        "missing_h1": sum(1 for p in pages if not p["h1"]),
        "missing_meta_description": sum(1 for p in pages if not p["meta_description"]),
        "status_codes": dict(sorted(statuses.items())),
    }


def aggregate_results(records: Iterable[SeoData]) -> ScrapeReport:
    """Build a ScrapeReport; pages are ordered by URL so reports are stable."""
    pages: List[PageInfo] = [asdict(r) for r in records]  # type: ignore[misc]
    pages.sort(key=lambda p: p["url"])
    return ScrapeReport(pages=pages, summary=_summarize(pages))
