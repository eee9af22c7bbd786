"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal

__all__ = ["make_stop_on_sigterm"]

logger = logging.getLogger(__name__)


def make_stop_on_sigterm() -> asyncio.Event:
    """Return an event that SIGTERM or SIGINT sets.

    The probing loop waits on this event between cycles, so a signal ends
    the current polling sleep at once. After the loop returns, the liveness
    and metrics servers get their drain timeout. Must be called from inside
    the running event loop.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def request_stop(signame: str) -> None:
        if stop.is_set():
            logger.debug(f"{signame} received again, shutdown already in progress")
            return
        logger.info(f"{signame} received, stopping probing and draining servers...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, request_stop, sig.name)

    return stop
