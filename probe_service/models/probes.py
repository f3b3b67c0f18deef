"""Pydantic models for the health and readiness probes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MemoryReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    used_mb: int = Field(alias="usedMB", description="Resident memory of the process in MB")
    total_mb: int = Field(alias="totalMB", description="Physical memory of the host in MB")


class HealthChecks(BaseModel):
    server: Literal["running"] = "running"
    memory: Literal["ok", "warning"]


class HealthReport(BaseModel):
    """Liveness probe payload."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["healthy"] = "healthy"
    hostname: str
    timestamp: datetime = Field(alias="timestampUTC")
    uptime_seconds: float = Field(alias="uptimeSeconds")
    survivor_count: int = Field(
        alias="survivorCount",
        description="Persistent health-check counter; 0 when the store is unreachable",
    )
    memory: MemoryReport
    checks: HealthChecks


class ReadinessReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ready: bool = True
    hostname: str
    timestamp: datetime = Field(alias="timestampUTC")
