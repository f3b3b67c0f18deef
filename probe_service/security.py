"""
Per-client rate limiting and hardening response headers.

``RateLimitMiddleware`` counts requests per client IP in a fixed window
(1000 per 15 minutes by default) using the ``limits`` library and answers
429 once a client is over it. Kubernetes health checks and Prometheus
scrapes hit ``EXEMPT_PATHS`` and are never limited.

``SecurityHeadersMiddleware`` adds the usual browser hardening headers.
No Content-Security-Policy is sent, so the Swagger UI at ``/api-docs`` keeps
loading its assets.
"""

import logging
import math
import time

from limits import RateLimitItemPerMinute
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

logger = logging.getLogger("security")

EXEMPT_PATHS = frozenset({"/health", "/ready", "/metrics"})

TOO_MANY_REQUESTS_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Fixed-window request limit keyed by client IP.

    Every response on a limited path carries ``RateLimit-Limit``,
    ``RateLimit-Remaining`` and ``RateLimit-Reset`` (seconds). Rejected
    requests also get ``Retry-After``.

    Args:
        app: The ASGI application.
        max_requests: Requests allowed per client per window.
        window_minutes: Window length in minutes.
        exempt_paths: Paths that bypass the limiter entirely.
        storage: ``limits`` storage backend; in-memory when omitted.
    """

    def __init__(
        self,
        app,
        max_requests: int = 1000,
        window_minutes: int = 15,
        exempt_paths=EXEMPT_PATHS,
        storage=None,
    ):
        super().__init__(app)
        self.item = RateLimitItemPerMinute(max_requests, window_minutes)
        self.limiter = FixedWindowRateLimiter(storage or MemoryStorage())
        self.exempt_paths = frozenset(exempt_paths)

    def _headers(self, key: str) -> dict[str, str]:
        stats = self.limiter.get_window_stats(self.item, key)
        reset = max(0, math.ceil(stats.reset_time - time.time()))
        return {
            "RateLimit-Limit": str(self.item.amount),
            "RateLimit-Remaining": str(max(0, stats.remaining)),
            "RateLimit-Reset": str(reset),
        }

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        key = request.client.host if request.client else "unknown"
        if not self.limiter.hit(self.item, key):
            headers = self._headers(key)
            headers["Retry-After"] = headers["RateLimit-Reset"]
            logger.warning("Rate limit exceeded for %s on %s", key, request.url.path)
            return JSONResponse(
                status_code=429,
                content={"error": "Too Many Requests", "message": TOO_MANY_REQUESTS_MESSAGE},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(self._headers(key))
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set ``SECURITY_HEADERS`` on every response that passes through."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
