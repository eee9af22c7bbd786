"""Endpoint/interval document loading, re-read on every probing cycle."""

import logging
import math
import re
from ipaddress import IPv4Address
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from netprober.ports.probe import Endpoint
from netprober.ports.snapshot import ConfigSnapshot, SnapshotDecodeError, SnapshotReadError

__all__ = ["ProbeConfig", "EndpointConfig", "load_snapshot", "parse_duration"]

logger = logging.getLogger(__name__)

_NANOSECONDS_PER_SECOND = 1_000_000_000
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_RE = re.compile(r"^[-+]?(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ns|us|µs|ms|s|m|h))+$")
_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: Any) -> float:
    """Convert a duration to seconds.

    Numbers are nanoseconds. Strings use the ``1h2m3.5s`` notation with units
    ns, us, µs, ms, s, m and h, optionally signed; ``"0"`` is also accepted.

    Args:
        value: Raw duration from the configuration document.

    Returns:
        Finite duration in seconds (may be zero or negative).

    Raises:
        ValueError: If the value is not a recognised duration, or is NaN,
            infinite or too large to represent.
    """
    if isinstance(value, bool):
        raise ValueError("duration must be a number of nanoseconds or a duration string")
    if isinstance(value, (int, float)):
        try:
            seconds = value / _NANOSECONDS_PER_SECOND
        except OverflowError as e:
            raise ValueError(f"duration out of range: {value!r}") from e
        return _finite(seconds, value)
    if not isinstance(value, str):
        raise ValueError("duration must be a number of nanoseconds or a duration string")

    text = value.strip()
    if text in ("0", "+0", "-0"):
        return 0.0
    if not _DURATION_RE.match(text):
        raise ValueError(f"invalid duration: {value!r}")

    seconds = sum(
        float(number) * _UNIT_SECONDS[unit] for number, unit in _DURATION_PART_RE.findall(text)
    )
    return _finite(-seconds if text.startswith("-") else seconds, value)


def _finite(seconds: float, raw: Any) -> float:
    if not math.isfinite(seconds):
        raise ValueError(f"duration out of range: {raw!r}")
    return seconds


class EndpointConfig(BaseModel):
    """One peer entry of ``endpointsMap``."""

    model_config = ConfigDict(frozen=True)

    ip: IPv4Address
    port: str

    @field_validator("port", mode="before")
    @classmethod
    def validate_port(cls, v: Any) -> str:
        """Accept a port given as string or number and normalise it to a string.

        Raises:
            ValueError: If the port is not an integer in 1-65535.
        """
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            raise ValueError("port must be a string or an integer")
        text = str(v).strip()
        if not text.isdigit() or not 0 < int(text) < 65536:
            raise ValueError(f"port must be in 1-65535 (got: {v!r})")
        return str(int(text))


class ProbeConfig(BaseModel):
    """Schema of the probing configuration document.

    Attributes:
        endpoints_map: Peer name to endpoint mapping (``endpointsMap``).
        polling_period_sec: Interval between cycles (``pollingPeriod``).
    """

    endpoints_map: dict[str, EndpointConfig] = Field(
        default_factory=dict,
        alias="endpointsMap",
        description="Peers to probe, keyed by logical name.",
    )
    polling_period_sec: float = Field(
        ...,
        alias="pollingPeriod",
        allow_inf_nan=False,
        description="Nanoseconds or duration string; converted to seconds.",
    )

    @field_validator("polling_period_sec", mode="before")
    @classmethod
    def validate_polling_period(cls, v: Any) -> float:
        """Decode ``pollingPeriod`` into seconds."""
        return parse_duration(v)

    def to_snapshot(self) -> ConfigSnapshot:
        """Convert the validated document into the core's snapshot DTO."""
        return ConfigSnapshot(
            polling_period_sec=self.polling_period_sec,
            endpoints={
                name: Endpoint(ip=str(ep.ip), port=ep.port)
                for name, ep in self.endpoints_map.items()
            },
        )


def load_snapshot(path: str | Path) -> ConfigSnapshot:
    """Read and decode the configuration document.

    Either the whole document is valid or nothing is returned.

    Args:
        path: Location of the JSON document.

    Returns:
        Decoded snapshot.

    Raises:
        SnapshotReadError: If the file cannot be read.
        SnapshotDecodeError: If the file is not valid JSON or breaks the schema.
    """
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise SnapshotReadError(f"Cannot read configuration file {path}: {e}") from e

    try:
        config = ProbeConfig.model_validate_json(raw)
    except ValidationError as e:
        raise SnapshotDecodeError(f"Invalid configuration file {path}: {e}") from e

    logger.debug(
        f"Loaded {len(config.endpoints_map)} endpoints from {path}, "
        f"period={config.polling_period_sec}s"
    )
    return config.to_snapshot()
