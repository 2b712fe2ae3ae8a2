from __future__ import annotations

import base64
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Sequence, Union

from fastapi import UploadFile

from kpi_gateway.core.errors import PayloadTooLarge, UnsupportedMediaType, ValidationError
from kpi_gateway.core.logging import get_logger
from kpi_gateway.i18n import UploadMessages, render_size_message
from kpi_gateway.schemas.kpi import UploadedFile

__all__ = ["open_attachment", "single_upload", "encode_data_uri"]

logger = get_logger("kpi_gateway.services.attachments", component="service")

_FALLBACK_MIME = "application/octet-stream"

UploadParts = Union[UploadFile, Sequence[UploadFile], None]


def _as_parts(uploads: UploadParts) -> List[UploadFile]:
    if uploads is None:
        return []
    if isinstance(uploads, UploadFile):
        return [uploads]
    return list(uploads)


def single_upload(parts: Sequence[UploadFile]) -> UploadFile | None:
    """Return the one named file part; a second named part is rejected."""

    named = [part for part in parts if part.filename]
    if len(named) > 1:
        logger.info(
            "attachment_count_rejected",
            extra={"structured_data": {"file_count": len(named)}},
        )
        raise ValidationError(UploadMessages.SINGLE_FILE_ONLY)
    return named[0] if named else None


@asynccontextmanager
async def open_attachment(
    uploads: UploadParts,
    *,
    max_bytes: int,
    allowed_types: Sequence[str] = (),
) -> AsyncIterator[UploadedFile | None]:
    """Load the request's single uploaded file for the duration of the block.

    Yields ``None`` when no file was sent (missing part, or a part without a
    filename). More than one file, a MIME type outside the allow-list and a
    file over ``max_bytes`` are rejected here. The multipart parser has
    already spooled the part to a temporary file; reading stops at
    ``max_bytes + 1`` so only that much is ever held in memory. Every part is
    closed on every exit path.
    """
    parts = _as_parts(uploads)
    try:
        upload = single_upload(parts)
        if upload is None:
            yield None
            return
        mime_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
        if allowed_types and mime_type not in {t.lower() for t in allowed_types}:
            logger.info(
                "attachment_type_rejected",
                extra={"structured_data": {"mime_type": mime_type, "upload_filename": upload.filename}},
            )
            raise UnsupportedMediaType(UploadMessages.TYPE_NOT_ALLOWED)
        content = await upload.read(max_bytes + 1)
        if len(content) > max_bytes:
            logger.info(
                "attachment_over_transport_limit",
                extra={"structured_data": {"max_bytes": max_bytes, "upload_filename": upload.filename}},
            )
            raise PayloadTooLarge(render_size_message(UploadMessages.MAX_SIZE, max_bytes))
        yield UploadedFile(
            content=content,
            mime_type=mime_type or _FALLBACK_MIME,
            filename=upload.filename,
        )
    finally:
        for part in parts:
            await part.close()


def encode_data_uri(attachment: UploadedFile | None) -> str:
    """``data:<mime>;base64,<data>`` for a file, ``""`` when there is none."""

    if attachment is None:
        return ""
    encoded = base64.b64encode(attachment.content).decode("ascii")
    return f"data:{attachment.mime_type};base64,{encoded}"
