"""Indonesian user-facing texts.

Usage:
    >>> from kpi_gateway.i18n import UploadMessages, render_size_message
    >>> render_size_message(UploadMessages.SAFE_SIZE, 3 * 1024 * 1024)
    'File terlalu besar. Maksimal 3 MB agar aman di sistem.'
"""

from __future__ import annotations

from kpi_gateway.core.formatting import format_megabytes
from kpi_gateway.i18n.id_messages import (
    AuthMessages,
    GatewayErrorMessages,
    GeneralMessages,
    KpiMessages,
    UploadMessages,
)

__all__ = [
    "AuthMessages",
    "GatewayErrorMessages",
    "GeneralMessages",
    "KpiMessages",
    "UploadMessages",
    "render_size_message",
]


def render_size_message(template: str, size_bytes: int) -> str:
    """Fill a ``{size}`` placeholder with the ceiling expressed in megabytes."""

    return template.format(size=format_megabytes(size_bytes))
