from typing import Optional

from fastapi import APIRouter, Depends

from kpi_gateway.routers.dependencies import get_gateway
from kpi_gateway.schemas.auth import LoginRequest, RegisterRequest
from kpi_gateway.services.gateway import KpiGateway

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register")
async def register(
    payload: Optional[RegisterRequest] = None,
    gateway: KpiGateway = Depends(get_gateway),
):
    return await gateway.register(payload or RegisterRequest())


@router.post("/login")
async def login(
    payload: Optional[LoginRequest] = None,
    gateway: KpiGateway = Depends(get_gateway),
):
    return await gateway.login(payload or LoginRequest())
