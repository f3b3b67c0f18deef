from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import CollectorRegistry
from starlette.exceptions import HTTPException as StarletteHTTPException

from probe_common.observability import init_observability, get_logger, shutdown_tracing

from probe_service import APP_DESCRIPTION, APP_NAME, __version__
from probe_service import telemetry
from probe_service.chaos import ChaosController
from probe_service.config import Settings
from probe_service.models.info import ErrorResponse, NotFoundResponse
from probe_service.routes import health_router, load_router, chaos_router, info_router
from probe_service.state import ServiceState
from probe_service.survivor import SurvivorCounter
from probe_service.security import RateLimitMiddleware, SecurityHeadersMiddleware
from probe_service.system import ProcessStats

SERVICE_NAME = "probe-service"

AVAILABLE_ENDPOINTS = [
    "/api",
    "/api/logs",
    "/health",
    "/ready",
    "/load",
    "/metrics",
    "/chaos/kill",
    "/api-docs",
]

logger = get_logger(SERVICE_NAME)


def create_app(
    settings: Settings | None = None,
    *,
    survivor: SurvivorCounter | None = None,
    chaos: ChaosController | None = None,
    stats: ProcessStats | None = None,
) -> FastAPI:
    """Build the service with its own metrics registry and collaborators."""
    settings = settings or Settings.from_env()
    registry = CollectorRegistry()

    # Bootstrap logging + tracing + service-info in one call
    init_observability(
        SERVICE_NAME,
        __version__,
        registry=registry,
        log_level=settings.log_level_value,
        log_file=settings.log_file,
        environment=settings.environment,
    )

    state = ServiceState(
        settings=settings,
        metrics=telemetry.create_service_metrics(registry),
        survivor=survivor or SurvivorCounter.from_url(
            settings.redis_url, settings.redis_timeout_seconds
        ),
        stats=stats or ProcessStats(),
        chaos=chaos or ChaosController(settings.chaos_exit_delay_seconds),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Server started",
            extra={"port": settings.port, "hostname": settings.hostname},
        )
        yield
        await state.survivor.close()
        # Flush remaining traces before shutdown
        shutdown_tracing()
        logger.info("Server stopped")

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
        docs_url="/api-docs",
    )
    app.state.service = state

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(
            "%s %s",
            request.method,
            request.url.path,
            extra={
                "method": request.method,
                "url": str(request.url),
                "ip": request.client.host if request.client else None,
            },
        )
        return await call_next(request)

    # Last added runs first: headers, CORS, limiter, then request logging
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_minutes=settings.rate_limit_window_minutes,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.add_middleware(SecurityHeadersMiddleware)

    app.include_router(health_router)
    app.include_router(load_router)
    app.include_router(chaos_router)
    app.include_router(info_router)

    @app.exception_handler(StarletteHTTPException)
    async def route_not_found(request: Request, exc: StarletteHTTPException):
        if exc.status_code not in (404, 405):
            return await http_exception_handler(request, exc)
        logger.warning("404 Not Found: %s %s", request.method, request.url.path)
        body = NotFoundResponse(
            message=f"Route {request.method} {request.url.path} not found",
            available_endpoints=AVAILABLE_ENDPOINTS,
        )
        return JSONResponse(status_code=404, content=body.model_dump(by_alias=True))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(
            "Internal Server Error: %s",
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        message = "An error occurred" if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=ErrorResponse(message=message).model_dump())

    # Request metrics + OTel instrumentation (outermost middleware)
    try:
        telemetry.init(app, state.metrics)
    except Exception as e:
        logger.warning(f"Telemetry init skipped: {e}")

    return app


app = create_app()
