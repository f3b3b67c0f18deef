from .probes import MemoryReport, HealthChecks, HealthReport, ReadinessReport
from .load import LoadTestResult, ChaosResponse
from .info import ServiceInfo, NotFoundResponse, ErrorResponse

__all__ = [
    "MemoryReport",
    "HealthChecks",
    "HealthReport",
    "ReadinessReport",
    "LoadTestResult",
    "ChaosResponse",
    "ServiceInfo",
    "NotFoundResponse",
    "ErrorResponse",
]
