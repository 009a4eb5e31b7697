# File: sitemap_scout/report/__init__.py
"""sitemap_scout.report: JSON and HTML report renderers used by the CLI."""

from __future__ import annotations

from sitemap_scout.report.html_report import render_html
from sitemap_scout.report.json_report import render_json

__all__ = ["render_json", "render_html"]
