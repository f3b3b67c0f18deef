"""
Service-specific telemetry for the probe service.

Domain metrics and FastAPI instrumentation that sit on top of the
shared ``probe_common.observability`` module. All metrics live in the
registry passed in by the caller; nothing is registered globally.
"""

import logging
from dataclasses import dataclass

from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

from probe_common.observability import (
    create_counter,
    create_gauge,
    create_histogram,
    register_default_collectors,
    MetricsMiddleware,
)

logger = logging.getLogger("telemetry")

REQUEST_DURATION_BUCKETS = [0.001, 0.005, 0.015, 0.05, 0.1, 0.5, 1, 5]


@dataclass
class ServiceMetrics:
    registry: CollectorRegistry
    http_requests: Counter
    http_request_duration: Histogram
    load_tests: Counter
    active_connections: Gauge


def create_service_metrics(registry: CollectorRegistry) -> ServiceMetrics:
    """Register the service metrics and the process defaults in ``registry``."""
    register_default_collectors(registry)

    return ServiceMetrics(
        registry=registry,
        http_requests=create_counter(
            registry,
            "http_requests_total",
            "Total number of HTTP requests",
            ["method", "path", "status"],
        ),
        http_request_duration=create_histogram(
            registry,
            "http_request_duration_seconds",
            "Duration of HTTP requests in seconds",
            buckets=REQUEST_DURATION_BUCKETS,
            labelnames=["method", "path"],
        ),
        load_tests=create_counter(
            registry,
            "load_tests_total",
            "Total number of load test requests",
        ),
        active_connections=create_gauge(
            registry,
            "active_connections",
            "Number of active connections",
        ),
    )


# ── Initialization ───────────────────────────────────────────────

def init(app, metrics: ServiceMetrics):
    """Wire service-specific telemetry into the FastAPI app.

    * Adds the HTTP-metrics middleware.
    * Instruments FastAPI with OpenTelemetry auto-instrumentation.
    """
    app.add_middleware(
        MetricsMiddleware,
        counter=metrics.http_requests,
        histogram=metrics.http_request_duration,
        in_flight=metrics.active_connections,
    )

    # FastAPI auto-instrumentation (creates spans for every route)
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI instrumentation enabled")
    except Exception as e:
        logger.warning("FastAPI instrumentation failed: %s", e)

    logger.info("Service telemetry initialised")
