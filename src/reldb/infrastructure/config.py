"""Configuration management for the relational engine.

Settings are read from ``RELDB_``-prefixed environment variables, with
``__`` separating a section from its field, e.g.
``RELDB_ENGINE__FOLD_LITERAL_CASE=false`` or ``RELDB_SERVER__PORT=9000``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineConfig(BaseModel):
    """Statement interpretation configuration."""

    fold_literal_case: bool = Field(
        default=True,
        description="Lower-case string literal contents along with the rest of the statement",
    )
    max_statement_length: int = Field(
        default=65536, ge=64, description="Maximum length of a single statement in characters"
    )


class ServerConfig(BaseModel):
    """HTTP API configuration."""

    host: str = Field(default="0.0.0.0", description="Address the API binds to")
    port: int = Field(default=8000, ge=1, le=65535, description="HTTP API port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus scrape port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"], description="Origins allowed to call the API"
    )


class ObservabilityConfig(BaseModel):
    """Logging and tracing configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OTLP collector endpoint; spans are not exported when unset"
    )
    otel_service_name: str = Field(default="reldb", description="Service name on exported spans")
    trace_console: bool = Field(default=False, description="Also print finished spans to stdout")


class Config(BaseSettings):
    """Root settings object for an engine process."""

    model_config = SettingsConfigDict(
        env_prefix="RELDB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    engine: EngineConfig = Field(default_factory=EngineConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Process-wide configuration, read from the environment once."""
    return Config()
