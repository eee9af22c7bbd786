"""Prometheus histogram of inter-pod round-trip latency."""

from __future__ import annotations

import logging
from typing import Final

from prometheus_client import CollectorRegistry, Counter, Histogram

from netprober.ports.metrics import LatencySampleDto, LatencySinkPort

__all__ = ["LatencyHistogram", "LATENCY_METRIC", "UNHEALTHY_METRIC"]

logger = logging.getLogger(__name__)

LATENCY_METRIC: Final[str] = "inter_pod_latency_seconds"
UNHEALTHY_METRIC: Final[str] = "inter_pod_unhealthy_responses"

# Intra-cluster RTTs sit well under a second; the top buckets catch
# saturated nodes before the probe timeout kicks in.
DEFAULT_BUCKETS: Final[tuple[float, ...]] = (
    0.0005,
    0.001,
    0.0025,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
)


class LatencyHistogram(LatencySinkPort):
    """Latency sink backed by its own Prometheus registry.

    The registry is owned by this object rather than the process-wide
    default so that the metrics exporter and tests can be handed exactly
    the series this sink writes. prometheus_client metrics lock internally,
    so concurrent probe tasks may call observe() freely.
    """

    def __init__(
        self,
        *,
        registry: CollectorRegistry | None = None,
        buckets: tuple[float, ...] = DEFAULT_BUCKETS,
    ) -> None:
        """Initialize the histogram.

        Args:
            registry: Registry to register into; a fresh one if omitted.
            buckets: Histogram bucket upper bounds in seconds.
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        self._latency = Histogram(
            LATENCY_METRIC,
            "Round-trip time of HTTP pings to peer pods in seconds.",
            labelnames=("peer_name", "peer_ip"),
            buckets=buckets,
            registry=self.registry,
        )
        self._unhealthy = Counter(
            UNHEALTHY_METRIC,
            "Ping responses from peer pods with a non-2xx status.",
            labelnames=("peer_name", "peer_ip", "status_code"),
            registry=self.registry,
        )

    def observe(self, sample: LatencySampleDto) -> None:
        """Record one sample; never raises.

        Args:
            sample: Measured round trip for one peer.
        """
        try:
            self._latency.labels(sample.peer_name, sample.peer_address).observe(
                sample.latency_sec
            )
            if not sample.healthy:
                self._unhealthy.labels(
                    sample.peer_name,
                    sample.peer_address,
                    str(sample.status_code or 0),
                ).inc()
        except Exception as e:  # noqa: BLE001
            logger.error(f"Dropping latency sample for {sample.peer_name}: {e}", exc_info=True)
