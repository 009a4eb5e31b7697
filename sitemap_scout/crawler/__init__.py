# sitemap_scout/crawler/__init__.py
"""Concurrent discovery and scrape engines."""
