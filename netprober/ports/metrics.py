"""Metrics port definition (interface and DTO)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

__all__ = ["LatencySampleDto", "LatencySinkPort"]


@dataclass(slots=True, frozen=True)
class LatencySampleDto:
    """Immutable record of one measured round trip.

    Attributes:
        peer_name: Logical name of the peer (key in the endpoint map).
        peer_address: IPv4 address of the peer.
        latency_sec: Measured round-trip time in seconds.
        healthy: False when the peer answered with a non-2xx status.
        status_code: HTTP status code of the response.
    """

    peer_name: str
    peer_address: str
    latency_sec: float
    healthy: bool = True
    status_code: int | None = None


class LatencySinkPort(Protocol):
    """Interface for recording peer latency samples.

    Implementations must be safe to call from concurrent probe tasks and
    must never raise: recording is best-effort from the caller's view.
    """

    def observe(self, sample: LatencySampleDto, /) -> None:
        """Record one latency sample.

        Args:
            sample: The sample to record.
        """
        ...
