"""HTTP servers exposed to peers (liveness) and scrapers (metrics)."""

import logging

from aiohttp import web
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

__all__ = ["HttpServer", "make_pong_app", "make_metrics_app", "SHUTDOWN_TIMEOUT_SEC"]

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT_SEC = 10.0
PONG_BODY = "pong\n"


async def handle_get_ping(request: web.Request) -> web.Response:
    """Answer a peer's ping with a fixed body."""
    logger.debug(f"ping request from {request.remote}")
    return web.Response(text=PONG_BODY)


def make_pong_app() -> web.Application:
    """Build the liveness responder application (GET /ping)."""
    app = web.Application()
    app.router.add_get("/ping", handle_get_ping)
    return app


def make_metrics_app(registry: CollectorRegistry) -> web.Application:
    """Build the metrics exporter application (GET /metrics).

    Args:
        registry: Registry whose current contents are served on each scrape.
    """

    async def handle_get_metrics(request: web.Request) -> web.Response:
        return web.Response(
            body=generate_latest(registry),
            headers={"Content-Type": CONTENT_TYPE_LATEST},
        )

    app = web.Application()
    app.router.add_get("/metrics", handle_get_metrics)
    return app


class HttpServer:
    """aiohttp application bound to a TCP port on all interfaces."""

    def __init__(
        self,
        app: web.Application,
        *,
        port: int,
        name: str,
        shutdown_timeout: float = SHUTDOWN_TIMEOUT_SEC,
    ) -> None:
        """Initialize server.

        Args:
            app: Application to serve.
            port: TCP port to listen on.
            name: Label used in log messages.
            shutdown_timeout: Seconds granted to in-flight requests on stop.
        """
        self.name = name
        self.port = port
        self._runner = web.AppRunner(app, shutdown_timeout=shutdown_timeout)
        self._started = False

    async def start(self) -> None:
        """Bind the port and start serving.

        Raises:
            OSError: If the port cannot be bound.
        """
        await self._runner.setup()
        self._started = True
        site = web.TCPSite(self._runner, port=self.port)
        await site.start()
        logger.info(f"{self.name} server listening on :{self.port}")

    async def stop(self) -> None:
        """Stop accepting connections and drain in-flight requests."""
        if not self._started:
            return
        self._started = False
        await self._runner.cleanup()
        logger.info(f"{self.name} server closed")
