from kpi_gateway.core.logging import CORRELATION_HEADER

ALLOWED_ORIGIN = "http://localhost:3000"


def test_index_banner(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert response.text == "<h1>Ini adalah API Indikator KPI</h1>"


def test_health_reports_backend_traffic_without_calling_backend(client, backend):
    client.post("/api/kpi-by-user", json={"email": "alice@kantor.id"})
    backend.requests.clear()

    response = client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["environment"] == "test"
    assert payload["backend"] == {"calls": 1, "errors": 0}
    assert payload["uptime_seconds"] >= 0
    assert backend.requests == []


def test_favicon_is_empty(client):
    assert client.get("/favicon.ico").status_code == 204


def test_cors_preflight_allows_configured_origin(client):
    response = client.options(
        "/api/login",
        headers={
            "Origin": ALLOWED_ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


def test_cors_rejects_other_origins(client):
    response = client.options(
        "/api/login",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_correlation_id_is_echoed(client):
    response = client.get("/api/kpi-my", params={"email": "a@b.id"}, headers={CORRELATION_HEADER: "req-42"})
    assert response.headers[CORRELATION_HEADER] == "req-42"


def test_correlation_id_is_generated_when_absent(client):
    response = client.get("/api/kpi-my")
    assert response.status_code == 400
    assert response.headers[CORRELATION_HEADER]


def test_unexpected_error_keeps_cors_and_correlation_headers(app, client):
    async def _explode():
        raise RuntimeError("boom")

    app.add_api_route("/api/explode", _explode, methods=["GET"])

    response = client.get("/api/explode", headers={"Origin": ALLOWED_ORIGIN, CORRELATION_HEADER: "req-500"})

    assert response.status_code == 500
    assert response.json() == {"result": "error", "message": "Terjadi kesalahan pada server."}
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
    assert response.headers[CORRELATION_HEADER] == "req-500"
