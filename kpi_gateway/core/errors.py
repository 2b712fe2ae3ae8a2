from __future__ import annotations

"""Gateway error hierarchy; each kind carries its HTTP status and default text."""

from typing import Any

from kpi_gateway.i18n.id_messages import GatewayErrorMessages

__all__ = [
    "GatewayError",
    "ValidationError",
    "PayloadTooLarge",
    "UnsupportedMediaType",
    "BackendError",
    "ConfigurationError",
]


class GatewayError(Exception):
    """Base class for errors translated into the `{result, message}` envelope."""

    status_code: int = 400
    error_code: str = "gateway_error"
    default_message: str = GatewayErrorMessages.GATEWAY_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        final_message = message or self.default_message
        super().__init__(final_message)
        self.message = final_message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(GatewayError, ValueError):
    """Raised when a required request field is missing or malformed."""

    error_code = "validation_error"
    default_message = GatewayErrorMessages.VALIDATION_ERROR
    status_code = 400


class PayloadTooLarge(GatewayError):
    """Raised when an uploaded attachment exceeds a size ceiling."""

    error_code = "payload_too_large"
    default_message = GatewayErrorMessages.PAYLOAD_TOO_LARGE
    status_code = 413


class UnsupportedMediaType(GatewayError):
    """Raised when an attachment MIME type is outside the allow-list."""

    error_code = "unsupported_media_type"
    default_message = GatewayErrorMessages.UNSUPPORTED_MEDIA_TYPE
    status_code = 400


class BackendError(GatewayError):
    """Raised when the backend call fails or reports an unusable result."""

    error_code = "backend_error"
    default_message = GatewayErrorMessages.BACKEND_ERROR
    status_code = 500


class ConfigurationError(GatewayError):
    """Raised when server-side configuration is invalid or incomplete."""

    error_code = "configuration_error"
    status_code = 500
    default_message = GatewayErrorMessages.CONFIGURATION_ERROR
