"""Metric extraction: turns web-console HTML into a :class:`Snapshot`.

Every ``parse_*`` function is an independent rule over the full document.
A rule whose pattern is missing, or whose captured text does not parse,
returns ``None`` (or an empty container) instead of raising, so one
changed fragment upstream never hides the metrics that still parse.

WARNING: HTML scraping is fragile and may need updating when i2pd changes
its web console.
"""

from __future__ import annotations

import logging
import re
from fractions import Fraction

from exporter.scraper.models import (
    DataMetrics,
    DirectionMetrics,
    NetworkCounts,
    Snapshot,
    TunnelCounts,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns, compiled once at import time
# ---------------------------------------------------------------------------
_IPV4_STATUS_RE = re.compile(r"<b>Network status:</b> ([^<]+)")
_IPV6_STATUS_RE = re.compile(r"<b>Network status v6:</b> ([^<]+)")
_TUNNEL_CREATION_RATE_RE = re.compile(
    r"<b>Tunnel creation success rate:</b> (\d+(?:\.\d+)?)%"
)
_DATA_SIZE_RE = re.compile(r"(\d+\.\d+|\d+)\s*([KMGT]iB|B)")
_DATA_RATE_RE = re.compile(r"(\d+\.\d+|\d+)\s*([KMGT]iB/s|B/s)")
_DIRECTION_RES = {
    "received": re.compile(r"<b>Received:</b> ([^<]+)<br>"),
    "sent": re.compile(r"<b>Sent:</b> ([^<]+)<br>"),
    "transit": re.compile(r"<b>Transit:</b> ([^<]+)<br>"),
}
_ROUTER_CAPS_RE = re.compile(r"<b>Router Caps:</b> ([A-Za-z0-9~]+)<br>")
_EXT_ADDR_SECTION = "<b>Our external address:</b>"
_EXT_ADDR_TABLE_RE = re.compile(r"<table class=[\"']extaddr[\"']>")
_EXT_ADDR_ROW_RE = re.compile(r"<tr>\s*<td>([^<]+)</td>\s*<td>([^<]+)</td>\s*</tr>")
_NET_COUNTS_RE = re.compile(
    r"<b>Routers:</b>\s*(\d+)\s*<b>Floodfills:</b>\s*(\d+)\s*<b>LeaseSets:</b>\s*(\d+)"
)
_TUNNEL_COUNTS_RE = re.compile(
    r"<b>Client Tunnels:</b>\s*(\d+)\s*<b>Transit Tunnels:</b>\s*(\d+)"
)
_SERVICES_TABLE_RE = re.compile(r"<table class=[\"']services[\"']>")
_SERVICE_ROW_RE = re.compile(
    r"<tr>\s*<td>([^<]+)</td>\s*<td class=[\"']([^\"']*)[\"']>([^<]*)</td>\s*</tr>"
)
_TABLE_END = "</table>"
_ENABLED_CLASS = "enabled"

# Binary (IEC) unit ladder shared by sizes and rates.
_UNIT_EXPONENTS = {"B": 0, "KiB": 1, "MiB": 2, "GiB": 3, "TiB": 4}

# Totals and counts are unsigned 64-bit values on the router side.
_U64_MAX = 2 ** 64 - 1


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _first_group(pattern: re.Pattern[str], html: str) -> str | None:
    match = pattern.search(html)
    if match is None:
        return None
    return match.group(1)


def _parse_int(text: str | None) -> int | None:
    if text is None:
        return None
    try:
        value = int(text)
    except ValueError:
        return None
    return value if value <= _U64_MAX else None


def _table_after(html: str, table_re: re.Pattern[str], start: int = 0) -> str | None:
    """Return the first table matching *table_re* at or after *start*.

    The slice runs from the opening tag through its ``</table>``; ``None``
    when either end is missing.
    """
    opening = table_re.search(html, start)
    if opening is None:
        return None
    end = html.find(_TABLE_END, opening.start())
    if end == -1:
        return None
    return html[opening.start():end + len(_TABLE_END)]


# ---------------------------------------------------------------------------
# Unit parsing
# ---------------------------------------------------------------------------

def parse_data_size(text: str) -> int | None:
    """Parse a size like ``"1.23 GiB"`` or ``"500 MiB"`` into whole bytes.

    Fractional bytes are truncated.  The multiplication is exact, so large
    decimal totals do not pick up float rounding error; results beyond the
    unsigned 64-bit range saturate at its maximum.
    """
    match = _DATA_SIZE_RE.search(text)
    if match is None:
        return None
    exponent = _UNIT_EXPONENTS.get(match.group(2))
    if exponent is None:
        return None
    try:
        number = Fraction(match.group(1))
    except ValueError:
        # Digit strings past the interpreter's int conversion limit.
        return None
    return min(int(number * 1024 ** exponent), _U64_MAX)


def parse_data_rate(text: str) -> float | None:
    """Parse a rate like ``"100.5 KiB/s"`` into bytes per second."""
    match = _DATA_RATE_RE.search(text)
    if match is None:
        return None
    exponent = _UNIT_EXPONENTS.get(match.group(2)[: -len("/s")])
    if exponent is None:
        return None
    return float(match.group(1)) * float(1024 ** exponent)


def parse_direction(text: str) -> DirectionMetrics:
    """Parse ``"<size>"`` or ``"<size> (<rate>)"`` into its two halves."""
    total_part, sep, rate_part = text.partition(" (")
    total = parse_data_size(total_part)
    rate = parse_data_rate(rate_part.rstrip(")")) if sep else None
    return DirectionMetrics(total_bytes=total, rate=rate)


# ---------------------------------------------------------------------------
# Extraction rules
# ---------------------------------------------------------------------------

def parse_network_status(html: str) -> tuple[str | None, str | None]:
    """Return the IPv4 and IPv6 network status texts, trimmed."""
    v4 = _first_group(_IPV4_STATUS_RE, html)
    v6 = _first_group(_IPV6_STATUS_RE, html)
    return (
        v4.strip() if v4 is not None else None,
        v6.strip() if v6 is not None else None,
    )


def parse_tunnel_creation_rate(html: str) -> float | None:
    """Return the tunnel creation success rate as a percentage."""
    raw = _first_group(_TUNNEL_CREATION_RATE_RE, html)
    if raw is None:
        logger.debug("Tunnel creation success rate not found")
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def parse_data_metrics(html: str) -> DataMetrics:
    """Return received/sent/transit totals and rates."""
    parsed: dict[str, DirectionMetrics] = {}
    for direction, pattern in _DIRECTION_RES.items():
        raw = _first_group(pattern, html)
        if raw is None:
            logger.debug("Data field %r not found", direction)
            parsed[direction] = DirectionMetrics()
        else:
            parsed[direction] = parse_direction(raw)
    return DataMetrics(**parsed)


def parse_router_capabilities(html: str) -> str | None:
    return _first_group(_ROUTER_CAPS_RE, html)


def parse_external_addresses(html: str) -> list[tuple[str, str]]:
    """Return ``(protocol, address)`` rows of the external address table.

    An empty list means either the section is missing or it lists nothing.
    """
    section = html.find(_EXT_ADDR_SECTION)
    if section == -1:
        logger.debug("External address section not found")
        return []
    table = _table_after(html, _EXT_ADDR_TABLE_RE, section)
    if table is None:
        logger.debug("External address table not found")
        return []
    return [(m.group(1), m.group(2)) for m in _EXT_ADDR_ROW_RE.finditer(table)]


def parse_network_counts(html: str) -> NetworkCounts | None:
    """Return router, floodfill and leaseset counts, or ``None`` if the line is missing."""
    match = _NET_COUNTS_RE.search(html)
    if match is None:
        logger.debug("Network counts line not found")
        return None
    return NetworkCounts(
        routers=_parse_int(match.group(1)),
        floodfills=_parse_int(match.group(2)),
        leasesets=_parse_int(match.group(3)),
    )


def parse_tunnel_counts(html: str) -> TunnelCounts | None:
    """Return client and transit tunnel counts, or ``None`` if the line is missing."""
    match = _TUNNEL_COUNTS_RE.search(html)
    if match is None:
        logger.debug("Tunnel counts line not found")
        return None
    return TunnelCounts(
        client=_parse_int(match.group(1)),
        transit=_parse_int(match.group(2)),
    )


def normalize_service_name(name: str) -> str:
    """``"HTTP Proxy"`` -> ``"http_proxy"``."""
    return name.strip().lower().replace(" ", "_")


def parse_service_statuses(html: str) -> dict[str, bool]:
    """Return a mapping of normalized service name to enabled state.

    The status cell's CSS class decides the state: ``enabled`` is ``True``,
    any other class is ``False``.  Later duplicate names win.
    """
    table = _table_after(html, _SERVICES_TABLE_RE)
    if table is None:
        logger.debug("Services table not found")
        return {}
    services: dict[str, bool] = {}
    for m in _SERVICE_ROW_RE.finditer(table):
        services[normalize_service_name(m.group(1))] = m.group(2) == _ENABLED_CLASS
    return services


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_snapshot(html: str) -> Snapshot:
    """Run every extraction rule over *html* and collect the results."""
    ipv4_status, ipv6_status = parse_network_status(html)
    return Snapshot(
        ipv4_status=ipv4_status,
        ipv6_status=ipv6_status,
        tunnel_creation_rate=parse_tunnel_creation_rate(html),
        data_metrics=parse_data_metrics(html),
        router_capabilities=parse_router_capabilities(html),
        external_addresses=parse_external_addresses(html),
        network_counts=parse_network_counts(html),
        tunnel_counts=parse_tunnel_counts(html),
        service_statuses=parse_service_statuses(html),
    )
