"""Prometheus exporter for i2pd, scraping its web console."""

__version__ = "1.1.0"
