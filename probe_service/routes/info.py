from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from probe_common.observability import read_recent_logs
from probe_service import APP_DESCRIPTION, APP_NAME, __version__
from probe_service.models.info import ServiceInfo
from probe_service.state import ServiceState, get_service_state

router = APIRouter(prefix="/api", tags=["Info"])

ENDPOINTS = {
    "api": "/api - System info (JSON)",
    "logs": "/api/logs - Recent server logs",
    "health": "/health - Kubernetes liveness probe",
    "ready": "/ready - Kubernetes readiness probe",
    "load": "/load?duration=5 - CPU stress test (duration in seconds)",
    "metrics": "/metrics - Prometheus metrics",
    "chaos": "POST /chaos/kill - Terminate this pod",
    "docs": "/api-docs - Interactive API documentation",
}

RECENT_LOG_LIMIT = 100


@router.get("", response_model=ServiceInfo)
def service_info(state: ServiceState = Depends(get_service_state)):
    return ServiceInfo(
        application=APP_NAME,
        version=__version__,
        description=APP_DESCRIPTION,
        hostname=state.settings.hostname,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=state.stats.uptime_seconds(),
        endpoints=ENDPOINTS,
    )


@router.get("/logs")
def recent_logs(state: ServiceState = Depends(get_service_state)) -> list[dict]:
    """Last log lines written by this process, newest first."""
    return read_recent_logs(state.settings.log_file, limit=RECENT_LOG_LIMIT)
