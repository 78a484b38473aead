"""HTML in, exposition text out."""

from __future__ import annotations

from exporter.metrics.renderer import render_snapshot
from exporter.scraper.extractor import extract_snapshot


def collect_metrics(html: str) -> str:
    """Extract every metric the page reports and render them.

    Pure and stateless; safe to call concurrently from request threads.
    """
    return render_snapshot(extract_snapshot(html))
