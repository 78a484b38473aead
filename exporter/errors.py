"""Exception types raised by the exporter's I/O collaborators.

The extraction and rendering core never raises; these only cover fetching
the console page and reading configuration.
"""

from __future__ import annotations


class ExporterError(Exception):
    """Base class for every error the exporter raises on purpose."""


class ConfigError(ExporterError):
    """A setting could not be interpreted (e.g. a malformed listen address)."""


class ConsoleFetchError(ExporterError):
    """The web console could not be fetched or returned a non-2xx status."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
