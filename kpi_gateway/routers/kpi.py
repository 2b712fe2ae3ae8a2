from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from kpi_gateway.routers.dependencies import get_gateway
from kpi_gateway.schemas.kpi import EmailRequest, KpiBatchRequest
from kpi_gateway.services.gateway import KpiGateway

router = APIRouter(prefix="/api", tags=["kpi"])


@router.post("/kpi-batch")
async def submit_kpi_batch(
    payload: Optional[KpiBatchRequest] = None,
    gateway: KpiGateway = Depends(get_gateway),
):
    return await gateway.submit_kpi_batch(payload or KpiBatchRequest())


@router.get("/indikator-data")
async def get_indicator_data(gateway: KpiGateway = Depends(get_gateway)):
    return await gateway.get_indicator_data()


@router.get("/kpi-my")
async def get_my_kpi(
    email: Optional[str] = Query(default=None),
    gateway: KpiGateway = Depends(get_gateway),
):
    return await gateway.get_my_kpi(email)


@router.post("/kpi-update")
async def update_kpi(
    kpi_key: Optional[str] = Form(default=None, alias="kpiKey"),
    email: Optional[str] = Form(default=None),
    actual: Optional[str] = Form(default=None),
    # Collected as a list so a repeated part is rejected instead of overwritten
    bukti_files: Optional[List[UploadFile]] = File(default=None, alias="buktiFile"),
    gateway: KpiGateway = Depends(get_gateway),
):
    async with gateway.open_attachment(bukti_files) as attachment:
        return await gateway.update_kpi(
            kpi_key=kpi_key,
            email=email,
            actual=actual,
            attachment=attachment,
        )


@router.post("/kpi-by-user")
async def get_kpi_by_user(
    payload: Optional[EmailRequest] = None,
    gateway: KpiGateway = Depends(get_gateway),
):
    return await gateway.get_kpi_by_user(payload.email if payload else None)


@router.post("/kpi-submitted")
async def get_submitted_kpi(
    payload: Optional[EmailRequest] = None,
    gateway: KpiGateway = Depends(get_gateway),
):
    return await gateway.get_submitted_kpi(payload.email if payload else None)
