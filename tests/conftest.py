"""Pytest configuration and fixtures for reldb tests."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from reldb.application import DatabaseEngine, QueryInterpreter
from reldb.domain.services import Catalog
from reldb.infrastructure.config import Config, EngineConfig
from reldb.infrastructure.metrics import MetricsRegistry


@pytest.fixture
def catalog() -> Catalog:
    """Provide a fresh, empty catalog for each test."""
    return Catalog()


@pytest.fixture
def interpreter(catalog: Catalog) -> QueryInterpreter:
    """Provide an interpreter bound to the test's catalog."""
    return QueryInterpreter(catalog)


@pytest.fixture
def test_config() -> Config:
    """Provide a configuration independent of the environment."""
    return Config(engine=EngineConfig(fold_literal_case=True))


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def engine(
    test_config: Config, catalog: Catalog, metrics_registry: MetricsRegistry
) -> DatabaseEngine:
    """Provide an engine with an isolated catalog and metrics registry."""
    return DatabaseEngine(config=test_config, catalog=catalog, metrics=metrics_registry)


@pytest.fixture
def cities_and_users(interpreter: QueryInterpreter) -> QueryInterpreter:
    """Interpreter with a cidades/usuarios schema linked by a foreign key."""
    interpreter.execute("CREATE TABLE cidades (id INT PRIMARY KEY, nome STRING)")
    interpreter.execute(
        "CREATE TABLE usuarios (id INT PRIMARY KEY, nome STRING, "
        "id_cidade INT REFERENCES cidades(id))"
    )
    return interpreter


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
