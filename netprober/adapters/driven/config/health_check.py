"""Healthcheck validator for container orchestration."""

import logging

from netprober.adapters.driven.config.settings import load_settings
from netprober.adapters.driven.config.snapshot import load_snapshot
from netprober.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main"]

logger = logging.getLogger(__name__)


def main() -> int:
    """Run health check for container orchestration.

    Validates:
    - Environment variables parse and are in range.
    - The endpoint/interval document exists and decodes.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        settings = load_settings()
        snapshot = load_snapshot(settings.config_file_path)
    except Exception as exc:
        logger.error(f"Prober healthcheck FAILED: {exc}")
        return 1

    logger.info(f"Prober healthcheck OK ({len(snapshot.endpoints)} endpoints configured)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
