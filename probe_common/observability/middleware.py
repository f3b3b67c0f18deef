"""
Reusable ASGI / Starlette middleware for HTTP request metrics.

Usage::

    from prometheus_client import CollectorRegistry
    from probe_common.observability import create_counter, create_gauge, create_histogram
    from probe_common.observability.middleware import MetricsMiddleware

    registry = CollectorRegistry()
    app.add_middleware(
        MetricsMiddleware,
        counter=create_counter(registry, "http_requests_total", "...", ["method", "path", "status"]),
        histogram=create_histogram(registry, "http_request_duration_seconds", "...",
                                   labelnames=["method", "path"]),
        in_flight=create_gauge(registry, "active_connections", "..."),
    )
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from prometheus_client import Counter, Gauge, Histogram

# Path label shared by every request answered with 404.
UNMATCHED_PATH = "<unmatched>"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Starlette middleware that records per-request Prometheus metrics.

    Every request bumps ``in_flight`` while it runs. When it finishes, either
    with a response or with a raised exception (counted as status 500), the
    elapsed time is observed into ``histogram`` and ``counter`` is
    incremented, exactly once. Requests answered with 404 are labelled
    ``UNMATCHED_PATH`` instead of their raw path.

    Args:
        app: The ASGI application.
        counter: A ``prometheus_client.Counter`` with labels
            ``["method", "path", "status"]``.
        histogram: Optional ``Histogram`` with labels ``["method", "path"]``.
        in_flight: Optional unlabelled ``Gauge`` of requests in progress.
        ignored_paths: Optional set of paths to skip
            (e.g. ``{"/metrics"}``).
    """

    def __init__(
        self,
        app,
        counter: Counter,
        histogram: Histogram | None = None,
        in_flight: Gauge | None = None,
        ignored_paths: set[str] | None = None,
    ):
        super().__init__(app)
        self.counter = counter
        self.histogram = histogram
        self.in_flight = in_flight
        self.ignored_paths = ignored_paths or set()

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path in self.ignored_paths:
            return await call_next(request)

        if self.in_flight is not None:
            self.in_flight.inc()
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            elapsed = time.perf_counter() - start
            if status == 404:
                path = UNMATCHED_PATH
            if self.histogram is not None:
                self.histogram.labels(method=request.method, path=path).observe(elapsed)
            self.counter.labels(method=request.method, path=path, status=status).inc()
            if self.in_flight is not None:
                self.in_flight.dec()
