"""Console logging setup for the prober."""

import logging

__all__ = ["configure_logs", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%d/%m/%y %H:%M:%S"

# Marks the handler installed here so repeated calls do not stack handlers
_HANDLER_NAME = "netprober-console"


def configure_logs(app_level: int = logging.DEBUG) -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level with one console handler.
    - aiohttp (including per-request access logs) and asyncio at WARNING,
      so metric scrapes and peer pings do not flood the output.
    - Application loggers (netprober) at app_level.

    Safe to call more than once.

    Args:
        app_level: Level for the netprober logger hierarchy.
    """
    root = logging.getLogger()
    root.setLevel(logging.INFO)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)

    for name in ("aiohttp", "aiohttp.access", "asyncio"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("netprober").setLevel(app_level)
