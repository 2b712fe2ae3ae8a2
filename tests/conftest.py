import json
import os
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("BACKEND_URL", "https://script.example.test/macros/exec")

from kpi_gateway.core.config import Settings
from kpi_gateway.core.metrics import metrics_registry, set_instrumentation_enabled
from kpi_gateway.main import create_app

BACKEND_URL = "https://script.example.test/macros/exec"
ALLOWED_ORIGIN = "http://localhost:3000"


class FakeBackend:
    """Stands in for the script backend behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self._replies: dict[str, tuple[int, Any, Exception | None]] = {}
        self.default_reply: Any = {"result": "success", "message": "ok"}

    def reply(
        self,
        action: str,
        body: Any = None,
        *,
        status_code: int = 200,
        error: Exception | None = None,
    ) -> None:
        self._replies[action] = (status_code, body, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        status_code, body, error = self._replies.get(
            payload.get("action"), (200, self.default_reply, None)
        )
        if error is not None:
            raise error
        return httpx.Response(status_code, json=body)

    @property
    def actions(self) -> list[str]:
        return [request["action"] for request in self.requests]

    def last(self) -> dict[str, Any]:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics_registry.reset()
    set_instrumentation_enabled(True)
    yield
    metrics_registry.reset()


@pytest.fixture()
def settings():
    return Settings(
        backend_url=BACKEND_URL,
        environment="test",
        allowed_origin=ALLOWED_ORIGIN,
    )


@pytest.fixture()
def backend():
    return FakeBackend()


@pytest.fixture()
def app(settings, backend):
    return create_app(settings, backend_transport=httpx.MockTransport(backend.handler))


@pytest.fixture()
def client(app):
    return TestClient(app)
