"""Render a :class:`Snapshot` as Prometheus text exposition (format 0.0.4).

Blocks are appended in a fixed order and only for fields the snapshot
actually holds, followed by the exporter's own version block, which is
always present.
"""

from __future__ import annotations

import math

from exporter import __version__
from exporter.scraper.models import Snapshot

CONTENT_TYPE = "text/plain; version=0.0.4"
VERSION_METRIC = "i2pd_webconsole_exporter_version_info"

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def escape_label_value(value: str) -> str:
    """Escape backslash, double quote and line breaks for use inside ``"..."``.

    A carriage return has no escape of its own in the format, so it is
    folded into a line feed first.
    """
    value = value.replace("\r\n", "\n").replace("\r", "\n")
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_value(value: int | float | bool) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return repr(value)


def _labels(labels: dict[str, str] | None) -> str:
    if not labels:
        return ""
    pairs = ",".join(f'{k}="{escape_label_value(v)}"' for k, v in labels.items())
    return "{" + pairs + "}"


class _Document:
    """Accumulates exposition lines."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def block(
        self,
        name: str,
        help_text: str,
        metric_type: str,
        samples: list[tuple[dict[str, str] | None, int | float | bool]],
    ) -> None:
        """Append HELP and TYPE lines plus one line per sample."""
        self._lines.append(f"# HELP {name} {help_text}")
        self._lines.append(f"# TYPE {name} {metric_type}")
        for labels, value in samples:
            self._lines.append(f"{name}{_labels(labels)} {format_value(value)}")

    def gauge(self, name: str, help_text: str, value: int | float | bool,
              labels: dict[str, str] | None = None) -> None:
        self.block(name, help_text, "gauge", [(labels, value)])

    def text(self) -> str:
        return "".join(line + "\n" for line in self._lines)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_snapshot(snapshot: Snapshot, version: str = __version__) -> str:
    """Serialise *snapshot* into an exposition document.

    Status gauges are ``1`` only for the literal text ``"OK"``; the raw text
    is kept in the ``status`` label.  Service samples are sorted by name so
    the output is byte-for-byte reproducible.
    """
    doc = _Document()

    if snapshot.ipv4_status is not None:
        doc.gauge(
            "i2p_network_status_v4",
            "IPv4 network status as string",
            snapshot.ipv4_status == "OK",
            {"status": snapshot.ipv4_status},
        )
    if snapshot.ipv6_status is not None:
        doc.gauge(
            "i2p_network_status_v6",
            "IPv6 network status as string",
            snapshot.ipv6_status == "OK",
            {"status": snapshot.ipv6_status},
        )

    if snapshot.tunnel_creation_rate is not None:
        doc.gauge(
            "i2p_tunnel_creation_success_rate",
            "Percentage of successful tunnel creations",
            snapshot.tunnel_creation_rate,
        )

    data = snapshot.data_metrics
    for direction, metrics in data.directions():
        if metrics.total_bytes is None:
            continue
        help_text = (
            "Total transit data in bytes"
            if direction == "transit"
            else f"Total data {direction} in bytes"
        )
        doc.block(
            f"i2p_data_{direction}_bytes",
            help_text,
            "counter",
            [(None, metrics.total_bytes)],
        )

    rates = [
        ({"direction": direction}, metrics.rate)
        for direction, metrics in data.directions()
        if metrics.rate is not None
    ]
    if rates:
        doc.block(
            "i2p_data_rate_bytes_per_second",
            "Data transfer rate in bytes/second",
            "gauge",
            rates,
        )

    if snapshot.router_capabilities is not None:
        doc.gauge(
            "i2p_router_capabilities",
            "Router capabilities",
            1,
            {"capabilities": snapshot.router_capabilities},
        )

    if snapshot.external_addresses:
        doc.block(
            "i2p_external_address",
            "External addresses the router is reachable at",
            "gauge",
            [
                ({"protocol": protocol, "address": address}, 1)
                for protocol, address in snapshot.external_addresses
            ],
        )

    counts = snapshot.network_counts
    if counts is not None:
        if counts.routers is not None:
            doc.gauge("i2p_network_routers", "Count of routers in the network",
                      counts.routers)
        if counts.floodfills is not None:
            doc.gauge("i2p_network_floodfills",
                      "Count of floodfill routers in the network", counts.floodfills)
        if counts.leasesets is not None:
            doc.gauge("i2p_network_leasesets", "Count of leasesets in the network",
                      counts.leasesets)

    tunnels = snapshot.tunnel_counts
    if tunnels is not None:
        if tunnels.client is not None:
            doc.gauge("i2p_client_tunnels", "Count of client tunnels", tunnels.client)
        if tunnels.transit is not None:
            doc.gauge("i2p_transit_tunnels", "Count of transit tunnels", tunnels.transit)

    if snapshot.service_statuses:
        doc.block(
            "i2p_service_status",
            "Status of i2pd services (1=enabled, 0=disabled)",
            "gauge",
            [
                ({"service": name}, enabled)
                for name, enabled in sorted(snapshot.service_statuses.items())
            ],
        )

    doc.gauge(
        VERSION_METRIC,
        "I2P webconsole exporter version info",
        1,
        {"version": version},
    )
    return doc.text()
