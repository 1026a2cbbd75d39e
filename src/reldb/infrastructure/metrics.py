"""Prometheus metrics for the relational engine.

Tests pass their own ``CollectorRegistry`` so that metric names can be
registered once per test.
"""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Every metric an engine records, bound to one collector registry."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        self._registry = registry or REGISTRY

        # Statement metrics
        self.statements_total = Counter(
            "reldb_statements_total",
            "Total number of statements executed",
            ["statement_type", "status"],  # status: success, error
            registry=self._registry,
        )

        self.statement_latency_seconds = Histogram(
            "reldb_statement_latency_seconds",
            "Statement latency in seconds",
            ["statement_type"],  # create, drop, insert, delete, select
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self._registry,
        )

        self.scripts_total = Counter(
            "reldb_scripts_total",
            "Total number of multi-statement scripts executed",
            ["status"],  # completed, aborted
            registry=self._registry,
        )

        # Constraint metrics
        self.constraint_violations_total = Counter(
            "reldb_constraint_violations_total",
            "Total statements rejected by a table constraint",
            ["kind"],
            registry=self._registry,
        )

        # Data metrics
        self.rows_inserted_total = Counter(
            "reldb_rows_inserted_total",
            "Total rows inserted",
            registry=self._registry,
        )

        self.rows_deleted_total = Counter(
            "reldb_rows_deleted_total",
            "Total rows deleted",
            registry=self._registry,
        )

        self.tables = Gauge(
            "reldb_tables",
            "Tables registered across the catalogs of engines recording here",
            registry=self._registry,
        )

        # Server info
        self.info = Info(
            "reldb_engine",
            "Relational engine information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry the metrics are registered with."""
        return self._registry


_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """Install the process-wide registry and serve it for scraping on ``port``.

    Engines created afterwards without an explicit registry record into it.
    """
    global _metrics

    from reldb import __version__

    metrics = MetricsRegistry(registry)
    metrics.info.info({"version": __version__, "column_types": "INT,STRING"})
    start_http_server(port, registry=metrics.registry)

    _metrics = metrics
    return metrics


def get_metrics() -> MetricsRegistry:
    """Process-wide registry, created on first use against the default collector."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
