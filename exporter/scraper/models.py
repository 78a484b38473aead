"""Data models for the scrape pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RawPage:
    """The raw HTTP response for a single web-console fetch."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class DirectionMetrics:
    """Byte total and current rate for one traffic direction.

    Both halves come from the same console field but are parsed
    independently, so either may be ``None`` on its own.
    """

    total_bytes: int | None = None
    rate: float | None = None


@dataclass(frozen=True)
class DataMetrics:
    received: DirectionMetrics = field(default_factory=DirectionMetrics)
    sent: DirectionMetrics = field(default_factory=DirectionMetrics)
    transit: DirectionMetrics = field(default_factory=DirectionMetrics)

    def directions(self) -> list[tuple[str, DirectionMetrics]]:
        """Return ``(name, metrics)`` pairs in received/sent/transit order."""
        return [
            ("received", self.received),
            ("sent", self.sent),
            ("transit", self.transit),
        ]


@dataclass(frozen=True)
class NetworkCounts:
    routers: int | None = None
    floodfills: int | None = None
    leasesets: int | None = None


@dataclass(frozen=True)
class TunnelCounts:
    client: int | None = None
    transit: int | None = None


@dataclass(frozen=True)
class Snapshot:
    """Everything extracted from one web-console page.

    Every field is independently optional: ``None`` (or an empty container)
    means the page did not contain that fragment in a parseable form.
    """

    ipv4_status: str | None = None
    ipv6_status: str | None = None
    tunnel_creation_rate: float | None = None
    data_metrics: DataMetrics = field(default_factory=DataMetrics)
    router_capabilities: str | None = None
    external_addresses: list[tuple[str, str]] = field(default_factory=list)
    network_counts: NetworkCounts | None = None
    tunnel_counts: TunnelCounts | None = None
    service_statuses: dict[str, bool] = field(default_factory=dict)
