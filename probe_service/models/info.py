from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ServiceInfo(BaseModel):
    """Service metadata and endpoint directory served at ``/api``."""

    model_config = ConfigDict(populate_by_name=True)

    application: str
    version: str
    description: str
    hostname: str
    timestamp: datetime = Field(alias="timestampUTC")
    uptime_seconds: float = Field(alias="uptimeSeconds")
    endpoints: dict[str, str]


class NotFoundResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str = "Not Found"
    message: str
    available_endpoints: list[str] = Field(alias="availableEndpoints")


class ErrorResponse(BaseModel):
    error: str = "Internal Server Error"
    message: str
