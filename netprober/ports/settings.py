"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass
class SettingsPort:
    """Runtime settings for the prober process.

    Decouples core and wiring from concrete configuration sources.

    Attributes:
        config_file_path: Path of the endpoint/interval document, re-read every cycle.
        pong_port: Port of the liveness responder.
        metrics_port: Port of the Prometheus metrics exporter.
        probe_timeout_sec: Upper bound for a single peer probe.
    """

    config_file_path: str
    pong_port: int
    metrics_port: int
    probe_timeout_sec: float
