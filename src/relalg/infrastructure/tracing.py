"""OpenTelemetry tracing configuration."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

TRACER_NAME = "relalg"

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = "relalg",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Set up OpenTelemetry tracing.

    Args:
        service_name: Name of the service for tracing
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Whether to also export spans to the console

    Returns:
        Configured tracer instance
    """
    global _tracer
    from relalg import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True)
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance.

    Without setup_tracing() this is OpenTelemetry's no-op tracer.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


@contextmanager
def operator_span(
    operator: str,
    input_rows: dict[str, int],
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Run an operator inside a `relalg.<operator>` span.

    Args:
        operator: Operator name
        input_rows: Input table name -> row count at call time
        attributes: Extra span attributes

    Yields:
        The created span; callers set `relalg.rows_out` on it
    """
    with get_tracer().start_as_current_span(f"relalg.{operator}") as span:
        span.set_attribute("relalg.operator", operator)
        for table_name, count in input_rows.items():
            span.set_attribute(f"relalg.rows_in.{table_name}", count)
        for key, value in (attributes or {}).items():
            span.set_attribute(key, value)
        yield span
