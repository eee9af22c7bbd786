"""Tests for health check validator."""

from unittest.mock import Mock, patch

from netprober.adapters.driven.config.health_check import main
from netprober.ports.snapshot import ConfigSnapshot, SnapshotDecodeError

__all__ = []


def test_health_check_success() -> None:
    """Health check should return 0 when settings and snapshot load."""
    with (
        patch("netprober.adapters.driven.config.health_check.configure_logs"),
        patch("netprober.adapters.driven.config.health_check.load_settings") as mock_load,
        patch("netprober.adapters.driven.config.health_check.load_snapshot") as mock_snapshot,
    ):
        mock_load.return_value = Mock(config_file_path="/etc/netprober/config.json")
        mock_snapshot.return_value = ConfigSnapshot(polling_period_sec=10.0)
        result = main()

    assert result == 0
    mock_snapshot.assert_called_once_with("/etc/netprober/config.json")


def test_health_check_failure_on_settings_error() -> None:
    """Health check should return 1 when settings fail to load."""
    with (
        patch("netprober.adapters.driven.config.health_check.configure_logs"),
        patch("netprober.adapters.driven.config.health_check.load_settings") as mock_load,
    ):
        mock_load.side_effect = RuntimeError("HTTP_PORT must be an integer")
        result = main()

    assert result == 1


def test_health_check_failure_on_snapshot_error() -> None:
    """Health check should return 1 when the document does not decode."""
    with (
        patch("netprober.adapters.driven.config.health_check.configure_logs"),
        patch("netprober.adapters.driven.config.health_check.load_settings"),
        patch("netprober.adapters.driven.config.health_check.load_snapshot") as mock_snapshot,
    ):
        mock_snapshot.side_effect = SnapshotDecodeError("invalid JSON")
        result = main()

    assert result == 1
