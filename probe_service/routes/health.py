import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from probe_common.observability import metrics_response
from probe_service.models.probes import HealthChecks, HealthReport, MemoryReport, ReadinessReport
from probe_service.state import ServiceState, get_service_state

logger = logging.getLogger("health")

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthReport)
async def health(state: ServiceState = Depends(get_service_state)):
    result = await state.survivor.increment()
    memory = state.stats.memory()
    return HealthReport(
        hostname=state.settings.hostname,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=state.stats.uptime_seconds(),
        survivor_count=result.value_or(0),
        memory=MemoryReport(used_mb=memory.used_mb, total_mb=memory.total_mb),
        checks=HealthChecks(memory=memory.status),
    )


@router.get("/ready", response_model=ReadinessReport)
def ready(state: ServiceState = Depends(get_service_state)):
    """Readiness probe. No dependency checks yet; always ready once serving."""
    return ReadinessReport(
        hostname=state.settings.hostname,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/metrics")
def metrics(state: ServiceState = Depends(get_service_state)):
    try:
        body, content_type = metrics_response(state.metrics.registry)
    except Exception as exc:
        logger.error("Error generating metrics: %s", exc)
        return PlainTextResponse(str(exc), status_code=500)
    return Response(content=body, media_type=content_type)
