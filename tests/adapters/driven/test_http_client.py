"""Tests for HTTP client adapter."""

import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from netprober.adapters.driven.http.client import HttpClient
from netprober.adapters.driving.http_servers import make_pong_app
from netprober.ports.probe import Endpoint, ProbeSuccess, ProbeUnhealthy, ProbeUnreachable

__all__ = []


def make_status_app(status: int) -> web.Application:
    """Build an app whose /ping answers with the given status."""

    async def handler(request: web.Request) -> web.Response:
        return web.Response(status=status, text="nope")

    app = web.Application()
    app.router.add_get("/ping", handler)
    return app


def make_slow_app(delay_sec: float) -> web.Application:
    """Build an app whose /ping answers after a delay."""

    async def handler(request: web.Request) -> web.Response:
        await asyncio.sleep(delay_sec)
        return web.Response(text="pong\n")

    app = web.Application()
    app.router.add_get("/ping", handler)
    return app


def endpoint_for(server: TestServer) -> Endpoint:
    return Endpoint(ip="127.0.0.1", port=str(server.port))


@pytest.mark.asyncio
async def test_http_client_context_manager() -> None:
    """HTTP client should initialize and close session."""
    client = HttpClient()
    assert client.session is None

    async with client as c:
        assert c.session is not None
        assert c is client

    assert client.session.closed


@pytest.mark.asyncio
async def test_ping_raises_if_session_not_initialized() -> None:
    """ping() should raise if used outside the context manager."""
    client = HttpClient()

    with pytest.raises(RuntimeError, match="Session not initialized"):
        await client.ping(Endpoint(ip="127.0.0.1", port="1"))


@pytest.mark.asyncio
async def test_ping_success_measures_latency() -> None:
    """A 200 answer is a success with a positive, small latency."""
    async with TestServer(make_pong_app(), host="127.0.0.1") as server:
        async with HttpClient(timeout_sec=5) as client:
            outcome = await client.ping(endpoint_for(server))

    assert isinstance(outcome, ProbeSuccess)
    assert 0 < outcome.latency_sec < 5


@pytest.mark.asyncio
async def test_ping_non_2xx_is_unhealthy_with_latency() -> None:
    """A non-2xx answer keeps its latency and status code."""
    async with TestServer(make_status_app(503), host="127.0.0.1") as server:
        async with HttpClient(timeout_sec=5) as client:
            outcome = await client.ping(endpoint_for(server))

    assert isinstance(outcome, ProbeUnhealthy)
    assert outcome.status_code == 503
    assert outcome.latency_sec > 0


@pytest.mark.asyncio
async def test_ping_connection_refused_is_unreachable() -> None:
    """Nothing listening on the port means unreachable."""
    async with HttpClient(timeout_sec=5) as client:
        outcome = await client.ping(Endpoint(ip="127.0.0.1", port=str(unused_port())))

    assert isinstance(outcome, ProbeUnreachable)
    assert outcome.cause


@pytest.mark.asyncio
async def test_ping_timeout_is_unreachable() -> None:
    """A peer slower than the timeout is unreachable, not unhealthy."""
    async with TestServer(make_slow_app(1.0), host="127.0.0.1") as server:
        async with HttpClient(timeout_sec=0.1) as client:
            outcome = await client.ping(endpoint_for(server))

    assert isinstance(outcome, ProbeUnreachable)
