"""Centralised settings for the i2pd web-console exporter.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from exporter.errors import ConfigError

logger = logging.getLogger(__name__)

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_WEB_CONSOLE = "http://127.0.0.1:7070"
DEFAULT_LISTEN_ADDR = "0.0.0.0:9700"
DEFAULT_HTTP_TIMEOUT = 60


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to *default*."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value <= 0:
        logger.warning("Ignoring %s=%r: must be > 0, using %d", name, raw, default)
        return default
    return value


def parse_listen_addr(addr: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address into its parts.

    IPv6 hosts must be bracketed (``[::]:9700``); the brackets are removed
    from the returned host.

    Raises:
        ConfigError: If *addr* has no port, an empty host, or a port outside
            1-65535.
    """
    host, sep, port_str = addr.strip().rpartition(":")
    if not sep or not host:
        raise ConfigError(f"Invalid listen address {addr!r}: expected host:port")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ConfigError(f"Invalid listen address {addr!r}: bracket IPv6 hosts")
    if not host:
        raise ConfigError(f"Invalid listen address {addr!r}: empty host")
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ConfigError(f"Invalid listen address {addr!r}: bad port") from exc
    if not 1 <= port <= 65535:
        raise ConfigError(f"Invalid listen address {addr!r}: port out of range")
    return host, port


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Source page
    # ------------------------------------------------------------------
    web_console_url: str = field(
        default_factory=lambda: os.environ.get("I2PD_WEB_CONSOLE", DEFAULT_WEB_CONSOLE)
    )
    http_timeout: int = field(
        default_factory=lambda: _env_int("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT)
    )

    # ------------------------------------------------------------------
    # Metrics server
    # ------------------------------------------------------------------
    listen_addr: str = field(
        default_factory=lambda: os.environ.get("METRICS_LISTEN_ADDR", DEFAULT_LISTEN_ADDR)
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    @property
    def listen_host_port(self) -> tuple[str, int]:
        """The listen address split into ``(host, port)``."""
        return parse_listen_addr(self.listen_addr)


# Module-level singleton — import this everywhere:
#   from exporter.config import settings
settings = Settings()
