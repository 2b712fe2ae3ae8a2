from __future__ import annotations

from typing import Any, Mapping

import httpx

from kpi_gateway.core.errors import BackendError
from kpi_gateway.core.logging import get_logger
from kpi_gateway.core.metrics import inc_counter, timer
from kpi_gateway.schemas.kpi import ActionTag

__all__ = ["BackendClient"]

logger = get_logger("kpi_gateway.services.backend", component="backend")


class BackendClient:
    """Single-endpoint client for the spreadsheet script backend.

    Contract: POST {base_url} with JSON ``{"action": <tag>, ...fields}``.
    Response JSON: ``{"result": "success" | "error", "message": ...}``,
    returned to the caller untouched. The script host answers POSTs with a
    redirect, so redirects are followed. Each call is attempted once.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        options: dict[str, Any] = {"follow_redirects": True}
        if self.timeout is not None:
            options["timeout"] = self.timeout
        if self._transport is not None:
            options["transport"] = self._transport
        return httpx.AsyncClient(**options)

    async def call(self, action: ActionTag, payload: Mapping[str, Any] | None = None) -> Any:
        """Forward one action and return the decoded JSON body.

        The action tag always wins over an ``action`` key smuggled in the
        payload. Transport failures, non-2xx statuses and non-JSON bodies
        raise BackendError.
        """
        body: dict[str, Any] = {"action": action.value}
        body.update({key: value for key, value in (payload or {}).items() if key != "action"})
        inc_counter(f"backend.calls.{action.value}")
        logger.debug("backend_call", extra={"structured_data": {"action": action.value}})
        try:
            with timer(f"backend.call.{action.value}"):
                async with self._client() as client:
                    response = await client.post(self.base_url, json=body)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self._log_failure(action, exc)
            raise BackendError(detail=str(exc)) from exc
        except ValueError as exc:
            self._log_failure(action, exc)
            raise BackendError(detail="invalid JSON body") from exc

    def _log_failure(self, action: ActionTag, exc: Exception) -> None:
        inc_counter("backend.errors")
        logger.warning(
            "backend_call_failed",
            extra={
                "structured_data": {
                    "action": action.value,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                }
            },
        )
