"""JSON log lines stamped with the request they belong to.

Every record carries the service name and, inside `request_context`, the
correlation id plus the request method and path, so one grep on a
correlation id returns the inbound request, each backend call it made and
the error it ended with.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Union
from uuid import uuid4

CORRELATION_HEADER = "X-Correlation-ID"

_REQUEST_FIELDS: ContextVar[Optional[Mapping[str, Any]]] = ContextVar("request_fields", default=None)


class JsonFormatter(logging.Formatter):
    """One JSON object per record: base fields, request fields, then structured data."""

    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - override
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            payload["service"] = self.service
        payload.update(_REQUEST_FIELDS.get() or {})
        structured = getattr(record, "structured_data", None)
        if isinstance(structured, Mapping):
            payload.update(structured)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


class StructuredAdapter(logging.LoggerAdapter):
    """Merge the adapter's default fields with a call's ``structured_data``."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        structured: Dict[str, Any] = dict(self.extra or {})
        extra = kwargs.get("extra")
        if not isinstance(extra, dict):
            extra = {}
        call_fields = extra.get("structured_data")
        if isinstance(call_fields, Mapping):
            structured.update(call_fields)
        extra["structured_data"] = structured
        kwargs["extra"] = extra
        return msg, kwargs


_CONFIGURED_ATTR = "_kpi_gateway_configured"


def _resolve_level(level: Union[int, str], environment: str) -> int:
    numeric = level if isinstance(level, int) else logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    if environment in ("dev", "test") and numeric == logging.INFO:
        return logging.DEBUG
    if environment == "prod":
        return max(numeric, logging.INFO)
    return numeric


def configure_logging(
    *,
    level: Union[int, str] = logging.INFO,
    environment: str = "dev",
    service: str | None = None,
) -> None:
    """Install the JSON handler on the root logger once per process.

    An INFO level is lowered to DEBUG in 'dev' and 'test' so every forwarded
    action is visible; 'prod' never goes below INFO.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_ATTR, False):
        return

    effective_level = _resolve_level(level, environment)
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter(service=service))
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(effective_level)
    # httpx logs every request at INFO; the backend client logs its own events
    logging.getLogger("httpx").setLevel(max(effective_level, logging.WARNING))
    setattr(root, _CONFIGURED_ATTR, True)


def get_logger(name: str, **defaults: Any) -> StructuredAdapter:
    return StructuredAdapter(logging.getLogger(name), defaults)


def get_correlation_id() -> str | None:
    fields = _REQUEST_FIELDS.get() or {}
    return fields.get("correlation_id")


@contextmanager
def request_context(correlation_id: str | None = None, **fields: Any) -> Iterator[str]:
    """Bind a correlation id (given or fresh uuid4) and request fields for the block."""

    cid = correlation_id or str(uuid4())
    token = _REQUEST_FIELDS.set({"correlation_id": cid, **fields})
    try:
        yield cid
    finally:
        _REQUEST_FIELDS.reset(token)


__all__ = [
    "CORRELATION_HEADER",
    "JsonFormatter",
    "StructuredAdapter",
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "request_context",
]
