"""
CPU stress endpoint.

``GET /load?duration=N`` keeps a core busy for N seconds (default 5,
at most 30) so the HorizontalPodAutoscaler has something to react to.

Where the loop runs depends on ``LOAD_EXECUTION_MODE``:
  threadpool  runs on the server's worker threads; other requests keep flowing.
  legacy      "legacy single-threaded emulation": runs on the event loop itself,
              blocking every other request on this process until it ends.
"""

import logging

from fastapi import APIRouter, Depends, Query
from starlette.concurrency import run_in_threadpool

from probe_service.config import LOAD_MODE_LEGACY
from probe_service.load import parse_duration, run_load
from probe_service.models.load import LoadTestResult
from probe_service.state import ServiceState, get_service_state

logger = logging.getLogger("load")

router = APIRouter(tags=["Load"])

COMPLETED_MESSAGE = (
    "CPU stress test completed. This simulates the load that pulls down your "
    "system. The HorizontalPodAutoscaler will scale up pods to resist it."
)


@router.get("/load", response_model=LoadTestResult)
async def load(
    duration: str | None = Query(default=None, description="Seconds to run (1-30, default 5)"),
    state: ServiceState = Depends(get_service_state),
):
    seconds = parse_duration(duration)
    settings = state.settings

    state.metrics.load_tests.inc()
    logger.info(
        "[LOAD] Starting CPU stress test for %d seconds on %s (mode=%s)",
        seconds,
        settings.hostname,
        settings.load_execution_mode,
    )

    if settings.load_execution_mode == LOAD_MODE_LEGACY:
        run = run_load(seconds, settings.load_batch_size)
    else:
        run = await run_in_threadpool(run_load, seconds, settings.load_batch_size)

    logger.info(
        "[LOAD] Completed CPU stress test: %d iterations in %.2fs",
        run.iterations,
        run.actual_seconds,
    )

    return LoadTestResult(
        hostname=settings.hostname,
        requested_duration_seconds=run.requested_seconds,
        actual_duration_seconds=run.actual_seconds,
        iterations=run.iterations,
        message=COMPLETED_MESSAGE,
    )
