from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import HTMLResponse

from kpi_gateway.core.config import Settings
from kpi_gateway.core.formatting import format_decimal
from kpi_gateway.core.metrics import get_counters, get_metrics
from kpi_gateway.i18n import GeneralMessages
from kpi_gateway.routers.dependencies import get_app_settings

router = APIRouter(tags=["system"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index():
    return GeneralMessages.INDEX_BANNER


@router.get("/health")
def health(request: Request, settings: Settings = Depends(get_app_settings)):
    """Liveness plus a summary of backend traffic seen by this process.

    The backend itself is not contacted; a hung script host must not make the
    gateway look unhealthy to a load balancer.
    """
    started_at: datetime = request.app.state.started_at
    uptime = (datetime.now(timezone.utc) - started_at).total_seconds()
    counters = get_counters()
    metrics = get_metrics()
    backend_calls = sum(
        count for label, count in counters.items() if label.startswith("backend.calls.")
    )
    return {
        "status": "healthy",
        "started_at": started_at.isoformat(),
        "uptime_seconds": format_decimal(uptime, decimals=2),
        "environment": settings.environment,
        "backend": {
            "calls": int(backend_calls),
            "errors": int(counters.get("backend.errors", 0)),
        },
        "metrics_summary": {
            "tracked_operations": len(metrics),
            "tracked_counters": len(counters),
        },
    }


@router.get("/favicon.ico", include_in_schema=False)
def favicon():
    """Empty favicon to prevent 404 noise in logs."""
    return Response(status_code=204)
