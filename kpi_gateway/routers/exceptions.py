from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from kpi_gateway.core.errors import BackendError, GatewayError
from kpi_gateway.core.logging import get_logger
from kpi_gateway.i18n import GatewayErrorMessages

logger = get_logger("kpi_gateway.routers.exceptions", component="router")


def error_envelope(message: str) -> dict[str, Any]:
    return {"result": "error", "message": message}


def register_exception_handlers(app: FastAPI) -> None:
    """Register the one translator from error kinds to `{result, message}` responses."""

    @app.exception_handler(GatewayError)
    async def _handle_gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        status_code = getattr(exc, "status_code", 400)
        log = logger.error if isinstance(exc, BackendError) else logger.info
        log(
            "request_failed",
            extra={
                "structured_data": {
                    "path": request.url.path,
                    "error": exc.error_code,
                    "status_code": status_code,
                    "reason": exc.message,
                    "detail": exc.detail,
                }
            },
        )
        return JSONResponse(status_code=status_code, content=error_envelope(exc.message))

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info(
            "request_malformed",
            extra={"structured_data": {"path": request.url.path, "errors": exc.errors()}},
        )
        return JSONResponse(status_code=400, content=error_envelope(GatewayErrorMessages.REQUEST_INVALID))


def unexpected_error_response(request: Request) -> JSONResponse:
    """Log the active exception and answer with the generic 500 envelope.

    Called from the correlation middleware rather than registered as an
    `Exception` handler, which Starlette would run outside CORS.
    """

    logger.exception("request_crashed", extra={"structured_data": {"path": request.url.path}})
    return JSONResponse(status_code=500, content=error_envelope(GatewayErrorMessages.BACKEND_ERROR))
