"""OpenTelemetry tracing for statement and script execution.

Spans are only exported once ``setup_tracing`` has installed a provider;
until then the OpenTelemetry API hands out no-op spans.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, ContextManager, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

from reldb.domain.errors import EngineError

if TYPE_CHECKING:
    from reldb.infrastructure.config import ObservabilityConfig

_TRACER_NAME = "reldb"

_tracer: trace.Tracer | None = None


def setup_tracing(observability: ObservabilityConfig) -> trace.Tracer:
    """
    Install a tracer provider for the engine.

    Args:
        observability: Supplies the service name, the OTLP collector
            endpoint (e.g. "http://localhost:4317") and whether spans are
            echoed to stdout. No OTLP exporter is attached when the
            endpoint is unset.

    Returns:
        The engine tracer
    """
    global _tracer

    from reldb import __version__

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": observability.otel_service_name,
                "service.version": __version__,
            }
        )
    )
    if observability.otel_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=observability.otel_endpoint, insecure=True))
        )
    if observability.trace_console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(_TRACER_NAME)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the engine tracer, falling back to the global provider."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(_TRACER_NAME)
    return _tracer


@contextmanager
def _engine_span(name: str, **attributes: str | int) -> Generator[trace.Span, None, None]:
    # Engine errors are expected outcomes: mark the span instead of
    # recording a stack trace, then let the error propagate.
    with get_tracer().start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as span:
        for key, value in attributes.items():
            span.set_attribute(f"reldb.{key}", value)
        try:
            yield span
        except EngineError as e:
            span.set_attribute("reldb.error", e.kind)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise


def statement_span(statement_type: str) -> ContextManager[trace.Span]:
    """Span around one statement, tagged with its type and any error kind."""
    return _engine_span("reldb.statement", statement_type=statement_type)


def script_span(statement_count: int) -> ContextManager[trace.Span]:
    """Span around a script run; statement spans nest inside it."""
    return _engine_span("reldb.script", statements=statement_count)
