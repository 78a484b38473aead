"""Scraper package — console fetch & metric extraction."""

from exporter.scraper.extractor import extract_snapshot
from exporter.scraper.fetcher import fetch_console
from exporter.scraper.models import RawPage, Snapshot

__all__ = ["fetch_console", "extract_snapshot", "RawPage", "Snapshot"]
