"""Infrastructure layer - cross-cutting concerns."""

from reldb.infrastructure.config import Config, get_config
from reldb.infrastructure.logging import setup_logging, setup_logging_from_config, get_logger
from reldb.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from reldb.infrastructure.tracing import setup_tracing, get_tracer, statement_span, script_span

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "statement_span",
    "script_span",
]
