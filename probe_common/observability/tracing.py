"""
OpenTelemetry tracer setup for OTLP over HTTP.

Tracing is opt-in: ``init_observability`` only calls ``init_tracing`` when
``OTEL_EXPORTER_OTLP_ENDPOINT`` is set. The endpoint may be given either as
the collector base URL (``http://jaeger:4318``) or as the full traces URL.
"""

import os
import logging

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter

logger = logging.getLogger(__name__)

DEFAULT_OTLP_ENDPOINT = "http://localhost:4318"
TRACES_PATH = "/v1/traces"


def traces_endpoint(endpoint: str | None = None) -> str:
    """
    Resolve the OTLP/HTTP traces URL.

    ``None`` falls back to ``OTEL_EXPORTER_OTLP_ENDPOINT``, then
    ``DEFAULT_OTLP_ENDPOINT``. The HTTP exporter does not append the signal
    path itself, so ``/v1/traces`` is added unless already present.
    """
    if endpoint is None:
        endpoint = os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT", DEFAULT_OTLP_ENDPOINT)
    endpoint = endpoint.rstrip("/")
    if endpoint.endswith(TRACES_PATH):
        return endpoint
    return endpoint + TRACES_PATH


def init_tracing(service_name: str, endpoint: str | None = None) -> TracerProvider:
    """
    Install a global tracer provider that batches spans to an OTLP collector.

    Args:
        service_name: Value of the ``service.name`` resource attribute
            (e.g. "probe-service").
        endpoint: Collector URL, see ``traces_endpoint``.

    Returns:
        The installed ``TracerProvider``.
    """
    url = traces_endpoint(endpoint)
    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=url)))
    trace.set_tracer_provider(provider)

    logger.info("Tracing initialized for %s (exporting to %s)", service_name, url)
    return provider


def shutdown_tracing() -> None:
    """Flush pending spans; a provider without ``shutdown`` (the no-op default) is left alone."""
    provider = trace.get_tracer_provider()
    if not hasattr(provider, "shutdown"):
        return
    try:
        provider.shutdown()
    except Exception as e:
        logger.warning("Tracer shutdown warning: %s", e)
    else:
        logger.info("Tracer shutdown complete")
