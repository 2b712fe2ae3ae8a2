from datetime import datetime, timezone

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from kpi_gateway.core.config import Settings, get_settings
from kpi_gateway.core.logging import CORRELATION_HEADER, configure_logging, get_logger, request_context
from kpi_gateway.core.metrics import set_instrumentation_enabled
from kpi_gateway.routers.auth import router as auth_router
from kpi_gateway.routers.exceptions import register_exception_handlers, unexpected_error_response
from kpi_gateway.routers.kpi import router as kpi_router
from kpi_gateway.routers.system import router as system_router
from kpi_gateway.services.backend import BackendClient
from kpi_gateway.services.gateway import KpiGateway

logger = get_logger("kpi_gateway.main", component="app")

_CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
_CORS_HEADERS = ["Content-Type", "Authorization", CORRELATION_HEADER]


async def _bind_correlation_id(request: Request, call_next):
    with request_context(
        request.headers.get(CORRELATION_HEADER),
        method=request.method,
        path=request.url.path,
    ) as correlation_id:
        try:
            response = await call_next(request)
        except Exception:
            response = unexpected_error_response(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


def create_app(
    settings: Settings | None = None,
    *,
    backend_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the gateway around an explicit settings object.

    `backend_transport` replaces the network transport of the backend client;
    tests pass an `httpx.MockTransport` here.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, environment=settings.environment, service=settings.app_name)
    set_instrumentation_enabled(settings.debug_instrumentation_enabled)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.started_at = datetime.now(timezone.utc)
    app.state.gateway = KpiGateway(
        settings,
        BackendClient(
            settings.backend_url,
            timeout=settings.backend_timeout_sec,
            transport=backend_transport,
        ),
    )
    register_exception_handlers(app)

    # Last added runs first: CORS answers preflights before anything else.
    app.middleware("http")(_bind_correlation_id)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.allowed_origin],
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
        expose_headers=[CORRELATION_HEADER],
    )

    app.include_router(system_router)
    app.include_router(auth_router)
    app.include_router(kpi_router)

    logger.info(
        "gateway_configured",
        extra={
            "structured_data": {
                "environment": settings.environment,
                "allowed_origin": settings.allowed_origin,
                "upload_max_bytes": settings.upload_max_bytes,
                "upload_safe_bytes": settings.upload_safe_bytes,
            }
        },
    )
    return app
