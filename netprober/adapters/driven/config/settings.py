"""Process configuration loading from environment variables."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

__all__ = [
    "Settings",
    "load_settings",
    "DEFAULT_CONFIG_FILE_PATH",
    "DEFAULT_PONG_PORT",
    "DEFAULT_METRICS_PORT",
    "DEFAULT_PROBE_TIMEOUT_SEC",
]

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_PATH = "/etc/netprober/config.json"
DEFAULT_PONG_PORT = 8080
DEFAULT_METRICS_PORT = 2112
DEFAULT_PROBE_TIMEOUT_SEC = 10.0


class Settings(BaseModel):
    """Runtime configuration for the prober process.

    Attributes:
        config_file_path: Path of the endpoint/interval document.
        pong_port: Port of the liveness responder.
        metrics_port: Port of the Prometheus metrics exporter.
        probe_timeout_sec: Upper bound for a single peer probe.
    """

    config_file_path: str = Field(
        default=DEFAULT_CONFIG_FILE_PATH,
        min_length=1,
        description="Endpoint/interval document, re-read every cycle.",
    )
    pong_port: int = Field(default=DEFAULT_PONG_PORT, gt=0, lt=65536)
    metrics_port: int = Field(default=DEFAULT_METRICS_PORT, gt=0, lt=65536)
    probe_timeout_sec: float = Field(
        default=DEFAULT_PROBE_TIMEOUT_SEC,
        gt=0,
        description="Seconds before an unanswered probe counts as unreachable.",
    )


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be an integer (got: {raw})") from e


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number (got: {raw})") from e


def load_settings() -> Settings:
    """Load and validate settings from the environment.

    Optional environment variables:
    - NET_PROBER_CONFIG_FILE: Path of the endpoint/interval document.
    - HTTP_PORT: Liveness responder port (default 8080).
    - HTTP_PROMETHEUS_PORT: Metrics exporter port (default 2112).
    - PROBE_TIMEOUT_SECONDS: Per-probe timeout (default 10).

    Returns:
        Validated Settings object.

    Raises:
        RuntimeError: If a variable cannot be parsed.
        ValueError: If a value is out of range.
    """
    settings = Settings(
        config_file_path=os.getenv("NET_PROBER_CONFIG_FILE") or DEFAULT_CONFIG_FILE_PATH,
        pong_port=_int_from_env("HTTP_PORT", DEFAULT_PONG_PORT),
        metrics_port=_int_from_env("HTTP_PROMETHEUS_PORT", DEFAULT_METRICS_PORT),
        probe_timeout_sec=_float_from_env("PROBE_TIMEOUT_SECONDS", DEFAULT_PROBE_TIMEOUT_SEC),
    )

    if settings.pong_port == settings.metrics_port:
        raise ValueError(
            f"HTTP_PORT and HTTP_PROMETHEUS_PORT must differ (both {settings.pong_port})"
        )

    logger.info(
        f"Prober configured: config_file={settings.config_file_path}, "
        f"pong_port={settings.pong_port}, "
        f"metrics_port={settings.metrics_port}, "
        f"probe_timeout={settings.probe_timeout_sec}s"
    )

    return settings
