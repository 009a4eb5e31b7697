# sitemap_scout/parser/__init__.py
"""Sitemap and HTML parsing."""
