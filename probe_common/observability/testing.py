"""
Test utilities for the observability stack.

Provides helpers to set up an in-memory tracing exporter, query exported
spans, and read sample values out of an explicit Prometheus registry.
"""

from prometheus_client import CollectorRegistry
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider, ReadableSpan
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.sdk.resources import Resource


def setup_test_tracing(service_name: str = "test-service") -> InMemorySpanExporter:
    """
    Set up a TracerProvider with InMemorySpanExporter for tests.
    Returns the exporter instance so you can inspect spans.
    Forcefully replaces any existing provider to work across multiple tests.
    """
    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    exporter = InMemorySpanExporter()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    # Forcefully replace the global provider (bypass the "already set" guard)
    trace._TRACER_PROVIDER = None
    trace._TRACER_PROVIDER_SET_ONCE._done = False
    trace.set_tracer_provider(provider)
    return exporter


def get_spans_by_name(exporter: InMemorySpanExporter, name: str) -> list[ReadableSpan]:
    """Filter exported spans by operation name."""
    return [s for s in exporter.get_finished_spans() if s.name == name]


def sample_value(registry: CollectorRegistry, name: str, labels: dict | None = None) -> float:
    """
    Return the current value of sample ``name`` with ``labels``, or 0.0 when
    the series has not been created yet.
    """
    value = registry.get_sample_value(name, labels or {})
    return value if value is not None else 0.0
