"""Configuration snapshot port definition (DTO and errors)."""

from __future__ import annotations

from dataclasses import dataclass, field

from netprober.ports.probe import Endpoint

__all__ = ["ConfigSnapshot", "SnapshotError", "SnapshotReadError", "SnapshotDecodeError"]


class SnapshotError(Exception):
    """Base class for configuration snapshot failures."""


class SnapshotReadError(SnapshotError):
    """Configuration source could not be read."""


class SnapshotDecodeError(SnapshotError):
    """Configuration source was read but does not match the schema."""


@dataclass(slots=True, frozen=True)
class ConfigSnapshot:
    """Endpoint set and polling interval decoded during one cycle.

    Attributes:
        polling_period_sec: Seconds to wait before the next cycle. Not
            validated here; the probing engine refuses non-positive values.
        endpoints: Peer name to endpoint mapping.
    """

    polling_period_sec: float
    endpoints: dict[str, Endpoint] = field(default_factory=dict)
