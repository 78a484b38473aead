"""Exposition-format rendering."""

from exporter.metrics.renderer import CONTENT_TYPE, render_snapshot

__all__ = ["CONTENT_TYPE", "render_snapshot"]
