"""
probe_common.observability: centralised observability for probe services.

Submodules
----------
logging      Structured JSON logging with OTel trace-context injection.
metrics      Prometheus metric factories and helpers.
tracing      OpenTelemetry tracing (OTLP → Jaeger).
middleware   Reusable Starlette HTTP-metrics middleware.
testing      In-memory tracing exporter & registry helpers for tests.

Quick start
-----------
::

    from prometheus_client import CollectorRegistry
    from probe_common.observability import init_observability, get_logger

    registry = CollectorRegistry()
    init_observability("my-service", "1.0.0", registry=registry)
    logger = get_logger("my-service")
"""

import logging as _logging
import os as _os

from prometheus_client import CollectorRegistry

# ── logging ──────────────────────────────────────────────────────
from .logging import setup_logging, get_logger, read_recent_logs, JsonTraceFormatter

# ── metrics ──────────────────────────────────────────────────────
from .metrics import (
    create_counter,
    create_histogram,
    create_info,
    create_gauge,
    create_service_info,
    register_default_collectors,
    metrics_response,
)

# ── tracing ──────────────────────────────────────────────────────
from .tracing import init_tracing, shutdown_tracing

# ── middleware ────────────────────────────────────────────────────
from .middleware import MetricsMiddleware


# ── bootstrap ────────────────────────────────────────────────────

def init_observability(
    service_name: str,
    version: str,
    *,
    registry: CollectorRegistry,
    log_level: int = _logging.INFO,
    log_file: str | None = None,
    environment: str | None = None,
) -> None:
    """
    One-call bootstrap for logging, tracing, and service-info metrics.

    1. ``setup_logging(log_level, log_file)``
    2. ``init_tracing(service_name)``, only when
       ``OTEL_EXPORTER_OTLP_ENDPOINT`` is set; failures are logged and
       swallowed so they never crash the service.
    3. ``create_service_info(registry, service_name, version, environment)``

    Args:
        service_name: Identifier used in traces and the info metric.
        version: Semantic version of the service.
        registry: Prometheus registry that receives the info metric.
        log_level: Root log level (default ``INFO``).
        log_file: Optional JSON-lines log file.
        environment: Deployment env; defaults to ``$ENVIRONMENT`` or
            ``"development"``.
    """
    # 1. structured JSON logging
    setup_logging(log_level, log_file)
    logger = get_logger(service_name)

    # 2. distributed tracing (conditional)
    if _os.environ.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        try:
            init_tracing(service_name)
        except Exception as exc:
            logger.warning("Tracing init failed (non-fatal): %s", exc)
    else:
        logger.info("Tracing disabled (OTEL_EXPORTER_OTLP_ENDPOINT not set)")

    # 3. Prometheus service-info metric
    create_service_info(
        registry,
        service_name.replace("-", "_"),
        version,
        environment,
    )

    logger.info("Observability initialised for %s v%s", service_name, version)


__all__ = [
    # bootstrap
    "init_observability",
    # logging
    "setup_logging",
    "get_logger",
    "read_recent_logs",
    "JsonTraceFormatter",
    # metrics
    "create_counter",
    "create_histogram",
    "create_info",
    "create_gauge",
    "create_service_info",
    "register_default_collectors",
    "metrics_response",
    # tracing
    "init_tracing",
    "shutdown_tracing",
    # middleware
    "MetricsMiddleware",
]
