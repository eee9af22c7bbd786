"""Probe port definition (endpoint DTO and tagged probe outcomes)."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Endpoint",
    "ProbeOutcome",
    "ProbeSuccess",
    "ProbeUnhealthy",
    "ProbeUnreachable",
]


@dataclass(slots=True, frozen=True)
class Endpoint:
    """Address of one peer instance.

    Attributes:
        ip: IPv4 address of the peer.
        port: TCP port of the peer's liveness responder.
    """

    ip: str
    port: str

    @property
    def ping_url(self) -> str:
        """URL of the peer's liveness path."""
        return f"http://{self.ip}:{self.port}/ping"


@dataclass(slots=True, frozen=True)
class ProbeSuccess:
    """Peer answered with a 2xx status."""

    latency_sec: float


@dataclass(slots=True, frozen=True)
class ProbeUnhealthy:
    """Peer answered, but with a non-2xx status.

    The round trip still happened, so the latency is meaningful.
    """

    latency_sec: float
    status_code: int


@dataclass(slots=True, frozen=True)
class ProbeUnreachable:
    """No response at all (connection refused, timeout, DNS error)."""

    cause: str


ProbeOutcome = ProbeSuccess | ProbeUnhealthy | ProbeUnreachable
