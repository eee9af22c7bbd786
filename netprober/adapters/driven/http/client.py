"""HTTP client adapter measuring round-trip time to peers."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout

from netprober.ports.probe import (
    Endpoint,
    ProbeOutcome,
    ProbeSuccess,
    ProbeUnhealthy,
    ProbeUnreachable,
)

__all__ = ["HttpClient", "UNREACHABLE_ERRORS"]

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 10

# Exceptions meaning no response was received at all
UNREACHABLE_ERRORS = (
    aiohttp.ClientConnectorError,  # Connection refused, DNS failed
    aiohttp.ClientConnectionError,  # Connection dropped
    aiohttp.ClientOSError,  # OS-level network error
    aiohttp.ClientPayloadError,  # Broken response stream
    aiohttp.ClientResponseError,  # Malformed response
    asyncio.TimeoutError,  # Probe timeout
)


class HttpClient:
    """HTTP client issuing single-attempt pings to peer liveness endpoints.

    Features:
    - One GET per ping, no retry: a failed ping is a failed ping.
    - Round-trip time measured on the event loop's monotonic clock.
    - Context manager for proper resource cleanup.
    """

    def __init__(self, timeout_sec: float = PROBE_TIMEOUT) -> None:
        """Initialize HTTP client.

        Args:
            timeout_sec: Upper bound for one ping, connect included.
        """
        self.timeout = ClientTimeout(total=timeout_sec)
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession(timeout=self.timeout)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def ping(self, endpoint: Endpoint) -> ProbeOutcome:
        """Send one GET to the peer's liveness path and time it.

        Args:
            endpoint: Peer to ping.

        Returns:
            ProbeSuccess for a 2xx answer, ProbeUnhealthy for any other
            status, ProbeUnreachable when no answer arrived.

        Raises:
            RuntimeError: If session not initialized.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")

        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            async with self.session.get(endpoint.ping_url, allow_redirects=False) as resp:
                latency = loop.time() - started
                status = resp.status
        except UNREACHABLE_ERRORS as e:
            cause = str(e) or type(e).__name__
            logger.debug(f"Ping to {endpoint.ping_url} failed: {cause}")
            return ProbeUnreachable(cause=cause)

        if not 200 <= status < 300:
            return ProbeUnhealthy(latency_sec=latency, status_code=status)
        return ProbeSuccess(latency_sec=latency)
