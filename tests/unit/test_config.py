"""Unit tests for configuration module."""

from __future__ import annotations

import pytest

from reldb.infrastructure.config import (
    Config,
    EngineConfig,
    ObservabilityConfig,
    ServerConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test default configuration values."""
        for name in ("RELDB_ENGINE__FOLD_LITERAL_CASE", "RELDB_SERVER__PORT"):
            monkeypatch.delenv(name, raising=False)
        config = Config()

        assert config.engine.fold_literal_case is True
        assert config.engine.max_statement_length == 65536
        assert config.server.port == 8000
        assert config.server.metrics_port == 8001
        assert config.observability.otel_service_name == "reldb"

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nested settings are read from RELDB_<SECTION>__<FIELD> variables."""
        monkeypatch.setenv("RELDB_ENGINE__FOLD_LITERAL_CASE", "false")
        monkeypatch.setenv("RELDB_SERVER__PORT", "9090")

        config = Config()

        assert config.engine.fold_literal_case is False
        assert config.server.port == 9090

    def test_statement_length_too_small(self) -> None:
        with pytest.raises(ValueError):
            EngineConfig(max_statement_length=10)

    def test_invalid_port(self) -> None:
        with pytest.raises(ValueError):
            ServerConfig(port=0)

    def test_log_formats(self) -> None:
        """Test valid log formats."""
        for log_format in ["json", "console"]:
            observability = ObservabilityConfig(log_format=log_format)  # type: ignore
            assert observability.log_format == log_format

        with pytest.raises(ValueError):
            ObservabilityConfig(log_format="xml")  # type: ignore


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(self) -> None:
        """Test that get_config returns the same instance."""
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2
