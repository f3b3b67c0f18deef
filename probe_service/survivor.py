"""
Redis-backed survivor counter.

Every health check bumps ``survivor_count`` in Redis so the value keeps
growing across pod restarts. The increment is best-effort: callers get a
``CounterResult`` carrying either the new value or the error, and decide
how to degrade.
"""

import logging
from dataclasses import dataclass

import redis.asyncio as redis
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

logger = logging.getLogger("survivor")

SURVIVOR_KEY = "survivor_count"


@dataclass(frozen=True)
class CounterResult:
    value: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: int) -> int:
        return self.value if self.ok else default


class SurvivorCounter:
    """Increments the persistent survivor counter.

    Args:
        client: A ``redis.asyncio.Redis`` client.
        key: Redis key holding the counter.
    """

    def __init__(self, client: redis.Redis, key: str = SURVIVOR_KEY):
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, timeout: float) -> "SurvivorCounter":
        client = redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )
        return cls(client)

    async def increment(self) -> CounterResult:
        """INCR the counter; never raises."""
        tracer = trace.get_tracer(__name__)
        with tracer.start_as_current_span(
            "redis INCR",
            kind=SpanKind.CLIENT,
            attributes={
                "db.system": "redis",
                "db.operation": "INCR",
                "db.redis.key": self.key,
            },
        ) as span:
            try:
                value = await self.client.incr(self.key)
            except Exception as exc:
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                logger.warning("Survivor counter increment failed: %s", exc)
                return CounterResult(error=exc)
            span.set_attribute("survivor.count", int(value))
            return CounterResult(value=int(value))

    async def close(self) -> None:
        try:
            await self.client.aclose()
        except Exception as exc:
            logger.debug("Redis close failed: %s", exc)
