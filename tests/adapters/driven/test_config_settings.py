"""Tests for process settings loading and validation."""

import pytest

from netprober.adapters.driven.config.settings import (
    DEFAULT_CONFIG_FILE_PATH,
    Settings,
    load_settings,
)

__all__ = []

ENV_VARS = ("NET_PROBER_CONFIG_FILE", "HTTP_PORT", "HTTP_PROMETHEUS_PORT", "PROBE_TIMEOUT_SECONDS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    """Start every test without prober variables set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_defaults() -> None:
    """Unset variables fall back to the documented defaults."""
    settings = load_settings()

    assert settings.config_file_path == DEFAULT_CONFIG_FILE_PATH
    assert settings.pong_port == 8080
    assert settings.metrics_port == 2112
    assert settings.probe_timeout_sec == 10.0


def test_load_settings_from_env(monkeypatch) -> None:
    """Variables override every default."""
    monkeypatch.setenv("NET_PROBER_CONFIG_FILE", "/tmp/probe.json")
    monkeypatch.setenv("HTTP_PORT", "9000")
    monkeypatch.setenv("HTTP_PROMETHEUS_PORT", "9100")
    monkeypatch.setenv("PROBE_TIMEOUT_SECONDS", "2.5")

    settings = load_settings()

    assert isinstance(settings, Settings)
    assert settings.config_file_path == "/tmp/probe.json"
    assert settings.pong_port == 9000
    assert settings.metrics_port == 9100
    assert settings.probe_timeout_sec == 2.5


def test_load_settings_empty_config_path_uses_default(monkeypatch) -> None:
    """An empty override behaves like an unset one."""
    monkeypatch.setenv("NET_PROBER_CONFIG_FILE", "")

    assert load_settings().config_file_path == DEFAULT_CONFIG_FILE_PATH


def test_load_settings_rejects_non_integer_port(monkeypatch) -> None:
    """Unparsable ports are reported with the variable name."""
    monkeypatch.setenv("HTTP_PORT", "eighty")

    with pytest.raises(RuntimeError, match="HTTP_PORT must be an integer"):
        load_settings()


def test_load_settings_rejects_out_of_range_port(monkeypatch) -> None:
    """Ports outside 1-65535 fail validation."""
    monkeypatch.setenv("HTTP_PROMETHEUS_PORT", "70000")

    with pytest.raises(ValueError):
        load_settings()


def test_load_settings_rejects_non_positive_timeout(monkeypatch) -> None:
    """The probe timeout must be positive."""
    monkeypatch.setenv("PROBE_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValueError):
        load_settings()


def test_load_settings_rejects_unparsable_timeout(monkeypatch) -> None:
    """A non-numeric timeout is reported with the variable name."""
    monkeypatch.setenv("PROBE_TIMEOUT_SECONDS", "soon")

    with pytest.raises(RuntimeError, match="PROBE_TIMEOUT_SECONDS must be a number"):
        load_settings()


def test_load_settings_rejects_shared_port(monkeypatch) -> None:
    """Both servers cannot share one port."""
    monkeypatch.setenv("HTTP_PORT", "2112")

    with pytest.raises(ValueError, match="must differ"):
        load_settings()
