from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Mapping

from kpi_gateway.core.config import Settings
from kpi_gateway.core.errors import BackendError, ValidationError
from kpi_gateway.core.logging import get_logger
from kpi_gateway.core.metrics import inc_counter
from kpi_gateway.i18n import AuthMessages, KpiMessages
from kpi_gateway.schemas.auth import LoginRequest, RegisterRequest
from kpi_gateway.schemas.kpi import ActionTag, KpiBatchRequest, UploadedFile
from kpi_gateway.services.attachments import UploadParts, encode_data_uri, open_attachment
from kpi_gateway.services.backend import BackendClient
from kpi_gateway.services.indicators import cross_validate_indicators, extract_master_records
from kpi_gateway.services.validation import (
    check_attachment_size,
    require_email,
    validate_kpi_batch,
    validate_kpi_update,
    validate_login,
    validate_register,
)

__all__ = ["KpiGateway"]

logger = get_logger("kpi_gateway.services.gateway", component="service")


class KpiGateway:
    """Validate, tag and forward client requests to the backend.

    Every operation makes its backend call(s) through `_forward`, which swaps
    the generic backend failure for the operation's own localized message.
    """

    def __init__(self, settings: Settings, backend: BackendClient) -> None:
        self.settings = settings
        self.backend = backend

    async def _forward(
        self,
        action: ActionTag,
        payload: Mapping[str, Any] | None,
        failure_message: str,
    ) -> Any:
        try:
            return await self.backend.call(action, payload)
        except BackendError as exc:
            raise BackendError(failure_message, detail=exc.detail) from exc

    # --- auth ---
    async def register(self, payload: RegisterRequest) -> Any:
        validate_register(payload)
        return await self._forward(
            ActionTag.REGISTER,
            {"email": payload.email, "password": payload.password, "name": payload.name},
            AuthMessages.REGISTER_FAILED,
        )

    async def login(self, payload: LoginRequest) -> Any:
        validate_login(payload)
        return await self._forward(
            ActionTag.LOGIN,
            {"email": payload.email, "password": payload.password},
            AuthMessages.LOGIN_FAILED,
        )

    # --- indicators ---
    async def get_indicator_data(self) -> Any:
        return await self._forward(ActionTag.GET_INDIKATOR_DATA, None, KpiMessages.INDICATOR_FETCH_FAILED)

    async def submit_kpi_batch(self, payload: KpiBatchRequest) -> Any:
        """Forward the batch only after every item passes the master cross-check."""

        items = validate_kpi_batch(payload)
        master_response = await self._forward(ActionTag.GET_INDIKATOR_DATA, None, KpiMessages.BATCH_FAILED)
        master = extract_master_records(master_response)
        try:
            cross_validate_indicators(
                items,
                payload.nama,
                master,
                marker=self.settings.variable_target_marker,
            )
        except ValidationError as exc:
            inc_counter("kpi_batch.rejected")
            logger.info(
                "kpi_batch_rejected",
                extra={
                    "structured_data": {
                        "nama": payload.nama,
                        "item_count": len(items),
                        "reason": exc.message,
                    }
                },
            )
            raise
        return await self._forward(ActionTag.KPI_BATCH, payload.model_dump(), KpiMessages.BATCH_FAILED)

    # --- per-user lookups ---
    async def get_my_kpi(self, email: Any) -> Any:
        email = require_email(email)
        return await self._forward(ActionTag.GET_KPI_BY_USER, {"email": email}, KpiMessages.USER_KPI_FETCH_FAILED)

    async def get_kpi_by_user(self, email: Any) -> Any:
        email = require_email(email)
        return await self._forward(ActionTag.GET_KPI_BY_USER, {"email": email}, KpiMessages.KPI_BY_USER_FETCH_FAILED)

    async def get_submitted_kpi(self, email: Any) -> Any:
        email = require_email(email)
        return await self._forward(ActionTag.GET_SUBMITTED_KPI, {"email": email}, KpiMessages.SUBMITTED_FETCH_FAILED)

    # --- update ---
    def open_attachment(self, uploads: UploadParts) -> AbstractAsyncContextManager[UploadedFile | None]:
        return open_attachment(
            uploads,
            max_bytes=self.settings.upload_max_bytes,
            allowed_types=self.settings.allowed_upload_types,
        )

    async def update_kpi(
        self,
        *,
        kpi_key: Any,
        email: Any,
        actual: Any = None,
        attachment: UploadedFile | None = None,
    ) -> Any:
        validate_kpi_update(kpi_key, email)
        check_attachment_size(attachment, self.settings.upload_safe_bytes)
        payload: dict[str, Any] = {"id": kpi_key, "email": email, "bukti": encode_data_uri(attachment)}
        if actual is not None:
            payload["actual"] = actual
        return await self._forward(ActionTag.UPDATE_KPI, payload, KpiMessages.UPDATE_FAILED)
