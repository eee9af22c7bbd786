"""Application entrypoint."""

import asyncio
import logging
from functools import partial

from netprober.adapters.driven.config.settings import load_settings
from netprober.adapters.driven.config.snapshot import load_snapshot
from netprober.adapters.driven.http.client import HttpClient
from netprober.adapters.driven.logging.logging_config import configure_logs
from netprober.adapters.driven.metrics.latency_histogram import LatencyHistogram
from netprober.adapters.driven.network.local_addresses import (
    LocalAddressResolutionError,
    resolve_local_addresses,
)
from netprober.adapters.driving.http_servers import HttpServer, make_metrics_app, make_pong_app
from netprober.adapters.driving.signals import make_stop_on_sigterm
from netprober.core.probing_engine import ProbingEngine, start_probing_loop
from netprober.ports.settings import SettingsPort

__all__ = ["main", "run", "start_servers", "stop_servers"]

logger = logging.getLogger(__name__)


async def main() -> int:
    """Start the network prober service.

    Startup sequence:
    1. Configure logging.
    2. Load and validate process settings.
    3. Resolve local addresses (self-exclusion set).
    4. Install SIGTERM/SIGINT handlers.
    5. Start the liveness and metrics servers.
    6. Run the probing loop until SIGTERM/SIGINT.
    7. Drain the servers within the shutdown timeout.

    Returns:
        Process exit status: 0 after a graceful stop, 1 on a startup failure.
    """
    configure_logs()
    logger.info("Starting network prober service...")

    try:
        config = load_settings()
    except (RuntimeError, ValueError) as exc:
        logger.error(
            "Configuration error: %s\n"
            "Hint: check HTTP_PORT, HTTP_PROMETHEUS_PORT and PROBE_TIMEOUT_SECONDS.",
            exc,
        )
        return 1

    # Wrap config into port so the wiring depends on interface (hexagonal)
    settings_port = SettingsPort(
        config_file_path=config.config_file_path,
        pong_port=config.pong_port,
        metrics_port=config.metrics_port,
        probe_timeout_sec=config.probe_timeout_sec,
    )

    try:
        local_addresses = resolve_local_addresses()
    except LocalAddressResolutionError as exc:
        logger.error(f"Cannot determine local addresses, refusing to probe: {exc}")
        return 1

    # Signal handlers go in before the servers bind
    stop = make_stop_on_sigterm()

    sink = LatencyHistogram()
    servers = [
        HttpServer(make_pong_app(), port=settings_port.pong_port, name="Pong"),
        HttpServer(make_metrics_app(sink.registry), port=settings_port.metrics_port, name="Metrics"),
    ]
    if not await start_servers(servers):
        return 1

    try:
        async with HttpClient(timeout_sec=settings_port.probe_timeout_sec) as http:
            engine = ProbingEngine(
                local_addresses=local_addresses,
                load_snapshot_fn=partial(load_snapshot, settings_port.config_file_path),
                ping_fn=http.ping,
                sink=sink,
            )
            try:
                await start_probing_loop(engine, stop)
            except Exception as e:
                logger.error(f"Unhandled exception in probing loop: {e}", exc_info=True)
    finally:
        await stop_servers(servers)

    logger.info("Network prober stopped.")
    return 0


async def start_servers(servers: list[HttpServer]) -> bool:
    """Start every server, rolling back the started ones on a bind failure.

    Args:
        servers: Servers to start, in order.

    Returns:
        True if all servers are listening, False otherwise.
    """
    started: list[HttpServer] = []
    for server in servers:
        try:
            await server.start()
        except OSError as exc:
            logger.error(f"{server.name} server cannot listen on :{server.port}: {exc}")
            await stop_servers(started + [server])
            return False
        started.append(server)
    return True


async def stop_servers(servers: list[HttpServer]) -> None:
    """Stop servers concurrently; each drains within its own shutdown timeout."""
    results = await asyncio.gather(*(s.stop() for s in servers), return_exceptions=True)
    for server, result in zip(servers, results):
        if isinstance(result, Exception):
            logger.error(f"Error shutting down {server.name} server: {result}")


def run() -> None:
    """Console-script entrypoint."""
    try:
        raise SystemExit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")


if __name__ == "__main__":
    run()
