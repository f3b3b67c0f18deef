from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LoadTestResult(BaseModel):
    """Outcome of a CPU stress run."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["completed"] = "completed"
    hostname: str
    requested_duration_seconds: int = Field(alias="requestedDurationSeconds", ge=1, le=30)
    actual_duration_seconds: float = Field(alias="actualDurationSeconds")
    iterations: int = Field(description="Completed work batches")
    message: str


class ChaosResponse(BaseModel):
    status: Literal["dying"] = "dying"
    message: str
