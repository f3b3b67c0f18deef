from fastapi import APIRouter, BackgroundTasks, Depends

from probe_service.models.load import ChaosResponse
from probe_service.state import ServiceState, get_service_state

router = APIRouter(prefix="/chaos", tags=["Chaos"])


@router.post("/kill", response_model=ChaosResponse)
def kill(background: BackgroundTasks, state: ServiceState = Depends(get_service_state)):
    """
    Terminate this process with exit code 1 shortly after responding.

    Recovery is left to the orchestrator's restart policy.
    """
    background.add_task(state.chaos.schedule_kill)
    return ChaosResponse(message="Goodbye cruel world! (Process terminating)")
