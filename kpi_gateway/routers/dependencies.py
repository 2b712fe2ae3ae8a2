from fastapi import Request

from kpi_gateway.core.config import Settings
from kpi_gateway.services.gateway import KpiGateway


def get_gateway(request: Request) -> KpiGateway:
    return request.app.state.gateway


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
