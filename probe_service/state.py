"""
Process-wide service state.

Built once by ``create_app()`` and stored on ``app.state.service``; route
handlers receive it through the ``get_service_state`` dependency.
"""

from dataclasses import dataclass

from fastapi import Request

from probe_service.chaos import ChaosController
from probe_service.config import Settings
from probe_service.survivor import SurvivorCounter
from probe_service.system import ProcessStats
from probe_service.telemetry import ServiceMetrics


@dataclass
class ServiceState:
    settings: Settings
    metrics: ServiceMetrics
    survivor: SurvivorCounter
    stats: ProcessStats
    chaos: ChaosController


def get_service_state(request: Request) -> ServiceState:
    return request.app.state.service
