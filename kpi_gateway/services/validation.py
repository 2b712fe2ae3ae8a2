from __future__ import annotations

"""Presence checks run before any backend call."""

from typing import Any, List

from kpi_gateway.core.errors import PayloadTooLarge, ValidationError
from kpi_gateway.i18n import AuthMessages, KpiMessages, UploadMessages, render_size_message
from kpi_gateway.schemas.auth import LoginRequest, RegisterRequest
from kpi_gateway.schemas.kpi import KpiBatchRequest, UploadedFile

__all__ = [
    "is_present",
    "validate_register",
    "validate_login",
    "require_email",
    "validate_kpi_batch",
    "validate_kpi_update",
    "check_attachment_size",
]


def is_present(value: Any) -> bool:
    """A field counts as present when it is a non-empty string."""

    return isinstance(value, str) and value != ""


def validate_register(payload: RegisterRequest) -> None:
    if not (is_present(payload.email) and is_present(payload.password) and is_present(payload.name)):
        raise ValidationError(AuthMessages.REGISTER_FIELDS_REQUIRED)


def validate_login(payload: LoginRequest) -> None:
    if not (is_present(payload.email) and is_present(payload.password)):
        raise ValidationError(AuthMessages.LOGIN_FIELDS_REQUIRED)


def require_email(email: Any) -> str:
    if not is_present(email):
        raise ValidationError(KpiMessages.EMAIL_REQUIRED)
    return email


def validate_kpi_batch(payload: KpiBatchRequest) -> List[Any]:
    """Return the submitted indicator list once it is a non-empty list and `nama` is set."""

    items = payload.indikator_list
    if not isinstance(items, list) or not items:
        raise ValidationError(KpiMessages.INDICATOR_LIST_INVALID)
    if not is_present(payload.nama):
        raise ValidationError(KpiMessages.NAMA_REQUIRED)
    return items


def validate_kpi_update(kpi_key: Any, email: Any) -> None:
    if not (is_present(kpi_key) and is_present(email)):
        raise ValidationError(KpiMessages.KPI_KEY_REQUIRED)


def check_attachment_size(attachment: UploadedFile | None, safe_bytes: int) -> None:
    """Soft ceiling: a file exactly at `safe_bytes` passes, one byte more does not."""

    if attachment is not None and attachment.size > safe_bytes:
        raise PayloadTooLarge(render_size_message(UploadMessages.SAFE_SIZE, safe_bytes))
