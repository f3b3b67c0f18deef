"""
Prometheus metrics factory functions with idempotent registration.

Provides ``create_counter``, ``create_histogram``, ``create_info``,
``create_gauge`` wrappers that safely handle duplicate registrations
against an explicit ``CollectorRegistry``, plus ``create_service_info`` for
the standard service-metadata pattern, ``register_default_collectors`` for
the process/GC/platform collectors, and ``metrics_response`` for generating
a Prometheus HTTP response.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    GCCollector,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)


def _get_or_create(metric_cls, registry: CollectorRegistry, name, documentation, **kwargs):
    """Create a metric or return the existing one if already registered."""
    try:
        return metric_cls(name, documentation, registry=registry, **kwargs)
    except ValueError:
        # Already registered; the registry indexes every exposed sample name
        collector = registry._names_to_collectors.get(name)
        if collector is None:
            raise
        return collector


def create_counter(
    registry: CollectorRegistry,
    name: str,
    documentation: str,
    labelnames: list[str] = None,
) -> Counter:
    """Create (or retrieve) a Prometheus Counter."""
    return _get_or_create(Counter, registry, name, documentation, labelnames=labelnames or [])


def create_histogram(
    registry: CollectorRegistry,
    name: str,
    documentation: str,
    buckets: list[float] = None,
    labelnames: list[str] = None,
) -> Histogram:
    """Create (or retrieve) a Prometheus Histogram."""
    kwargs = {}
    if buckets:
        kwargs["buckets"] = buckets
    if labelnames:
        kwargs["labelnames"] = labelnames
    return _get_or_create(Histogram, registry, name, documentation, **kwargs)


def create_info(registry: CollectorRegistry, name: str, documentation: str) -> Info:
    """Create (or retrieve) a Prometheus Info metric."""
    return _get_or_create(Info, registry, name, documentation)


def create_gauge(
    registry: CollectorRegistry,
    name: str,
    documentation: str,
    labelnames: list[str] = None,
) -> Gauge:
    """Create (or retrieve) a Prometheus Gauge."""
    return _get_or_create(Gauge, registry, name, documentation, labelnames=labelnames or [])


def create_service_info(
    registry: CollectorRegistry,
    service_name: str,
    version: str,
    environment: str | None = None,
) -> Info:
    """
    Create and populate a service-metadata Info metric.

    Args:
        registry: Registry the metric is registered in.
        service_name: Prometheus metric name prefix (e.g. ``"probe_service"``).
        version: Service version string (e.g. ``"1.0.0"``).
        environment: Deployment environment.  Falls back to the
            ``ENVIRONMENT`` env-var, then ``"development"``.

    Returns:
        The populated ``Info`` collector.
    """
    info = create_info(registry, service_name, "Service metadata")
    info.info({
        "version": version,
        "environment": environment or os.environ.get("ENVIRONMENT", "development"),
    })
    return info


def register_default_collectors(registry: CollectorRegistry) -> None:
    """Attach the process, GC and platform collectors to ``registry``."""
    ProcessCollector(registry=registry)
    GCCollector(registry=registry)
    PlatformCollector(registry=registry)


def metrics_response(registry: CollectorRegistry):
    """
    Return Prometheus exposition-format bytes and the matching content-type.

    Returns:
        tuple[bytes, str]: ``(body, content_type)`` ready for an HTTP response.
    """
    return generate_latest(registry), CONTENT_TYPE_LATEST
