"""Probing engine: reload configuration, skip local peers, measure the rest."""

import asyncio
import logging
import math
from collections.abc import Awaitable, Callable, Set

from netprober.ports.metrics import LatencySampleDto, LatencySinkPort
from netprober.ports.probe import (
    Endpoint,
    ProbeOutcome,
    ProbeSuccess,
    ProbeUnhealthy,
    ProbeUnreachable,
)
from netprober.ports.snapshot import ConfigSnapshot, SnapshotError

__all__ = [
    "DEFAULT_POLLING_PERIOD_SEC",
    "ProbingEngine",
    "start_probing_loop",
    "wait_for_next_cycle",
]

logger = logging.getLogger(__name__)

# Used only before the first snapshot has been adopted
DEFAULT_POLLING_PERIOD_SEC = 10.0

LoadSnapshotFn = Callable[[], ConfigSnapshot]
PingFn = Callable[[Endpoint], Awaitable[ProbeOutcome]]


class ProbingEngine:
    """Runs one probing cycle at a time against the configured peers.

    A cycle loads a fresh snapshot, adopts its polling period for the next
    sleep, and probes every endpoint whose address does not belong to this
    host. Nothing that goes wrong inside a cycle escapes it: load failures
    skip the cycle, probe failures skip the peer.
    """

    def __init__(
        self,
        *,
        local_addresses: Set[str],
        load_snapshot_fn: LoadSnapshotFn,
        ping_fn: PingFn,
        sink: LatencySinkPort,
        initial_period_sec: float = DEFAULT_POLLING_PERIOD_SEC,
    ) -> None:
        """Initialize the engine.

        Args:
            local_addresses: IPv4 addresses owned by this host; never probed.
            load_snapshot_fn: Blocking callable returning a fresh snapshot.
            ping_fn: Async function probing one endpoint.
            sink: Destination for measured latencies.
            initial_period_sec: Sleep before the first cycle.
        """
        self._local_addresses = frozenset(local_addresses)
        self._load_snapshot = load_snapshot_fn
        self._ping = ping_fn
        self._sink = sink
        self._polling_period_sec = initial_period_sec

    @property
    def polling_period_sec(self) -> float:
        """Period to sleep before the next cycle."""
        return self._polling_period_sec

    def eligible_peers(self, snapshot: ConfigSnapshot) -> dict[str, Endpoint]:
        """Return the snapshot's endpoints minus those on a local address.

        Only the IP is compared; the port is irrelevant for self-exclusion.
        """
        return {
            name: endpoint
            for name, endpoint in snapshot.endpoints.items()
            if endpoint.ip not in self._local_addresses
        }

    async def run_cycle(self) -> None:
        """Run one load -> exclude -> probe -> record cycle."""
        try:
            snapshot = await asyncio.to_thread(self._load_snapshot)
        except SnapshotError as e:
            logger.warning(f"Skipping cycle, configuration unavailable: {e}")
            return
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error loading configuration: {e}", exc_info=True)
            return

        period = snapshot.polling_period_sec
        if not math.isfinite(period) or period <= 0:
            logger.warning(
                f"Skipping cycle, polling period must be positive and finite "
                f"(got {period}s); "
                f"keeping {self._polling_period_sec}s"
            )
            return

        if period != self._polling_period_sec:
            logger.info(
                f"Polling period changed: {self._polling_period_sec}s -> "
                f"{period}s"
            )
        self._polling_period_sec = period

        peers = self.eligible_peers(snapshot)
        logger.debug(
            f"Probing {len(peers)} of {len(snapshot.endpoints)} configured endpoints"
        )
        if not peers:
            return

        await asyncio.gather(
            *(self._probe_peer(name, endpoint) for name, endpoint in peers.items())
        )

    async def _probe_peer(self, name: str, endpoint: Endpoint) -> None:
        """Probe one peer and record its latency if one was measured."""
        try:
            outcome = await self._ping(endpoint)
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error probing {name} ({endpoint.ip}): {e}", exc_info=True)
            return

        match outcome:
            case ProbeUnreachable(cause=cause):
                logger.warning(f"Peer {name} ({endpoint.ip}) unreachable: {cause}")
            case ProbeUnhealthy(latency_sec=latency, status_code=status):
                logger.error(
                    f"Peer {name} ({endpoint.ip}) answered with status {status} "
                    f"after {latency * 1_000:.1f} ms"
                )
                self._sink.observe(
                    LatencySampleDto(
                        peer_name=name,
                        peer_address=endpoint.ip,
                        latency_sec=latency,
                        healthy=False,
                        status_code=status,
                    )
                )
            case ProbeSuccess(latency_sec=latency):
                logger.info(f"RTT to {name} ({endpoint.ip}): {latency * 1_000:.1f} ms")
                self._sink.observe(
                    LatencySampleDto(
                        peer_name=name,
                        peer_address=endpoint.ip,
                        latency_sec=latency,
                    )
                )


async def wait_for_next_cycle(stop: asyncio.Event, period_sec: float) -> bool:
    """Sleep for one polling period unless a stop is requested first.

    Args:
        stop: Event set on shutdown.
        period_sec: Seconds to wait.

    Returns:
        True if stop was requested, False if the period elapsed.
    """
    try:
        await asyncio.wait_for(stop.wait(), timeout=period_sec)
    except asyncio.TimeoutError:
        return False
    return True


async def start_probing_loop(engine: ProbingEngine, stop: asyncio.Event) -> None:
    """Drive probing cycles until stop is set.

    Each iteration sleeps for the period adopted by the previous cycle, then
    runs one cycle. A period adopted during a cycle therefore governs the
    following sleep only.

    Args:
        engine: Engine running the cycles.
        stop: Event set on shutdown; interrupts the sleep immediately.
    """
    while not stop.is_set():
        if await wait_for_next_cycle(stop, engine.polling_period_sec):
            break
        await engine.run_cycle()

    logger.info("Probing loop stopped.")
