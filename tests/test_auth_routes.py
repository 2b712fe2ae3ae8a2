import httpx


def test_register_forwards_fields(client, backend):
    backend.reply("register", {"result": "success", "message": "Registrasi berhasil"})

    response = client.post(
        "/api/register",
        json={"email": "ani@kantor.id", "password": "rahasia", "name": "Ani"},
    )

    assert response.status_code == 200
    assert response.json() == {"result": "success", "message": "Registrasi berhasil"}
    assert backend.requests == [
        {"action": "register", "email": "ani@kantor.id", "password": "rahasia", "name": "Ani"}
    ]


def test_register_missing_name_is_rejected_without_backend_call(client, backend):
    response = client.post("/api/register", json={"email": "ani@kantor.id", "password": "rahasia"})

    assert response.status_code == 400
    assert response.json() == {"result": "error", "message": "Email, password, dan nama wajib diisi!"}
    assert backend.requests == []


def test_register_without_body_is_rejected(client, backend):
    response = client.post("/api/register")

    assert response.status_code == 400
    assert response.json()["message"] == "Email, password, dan nama wajib diisi!"
    assert backend.requests == []


def test_register_with_non_string_field_is_a_clean_400(client, backend):
    response = client.post("/api/register", json={"email": ["x"], "password": "p", "name": "n"})

    assert response.status_code == 400
    assert response.json() == {"result": "error", "message": "Format permintaan tidak valid."}
    assert backend.requests == []


def test_register_backend_failure_maps_to_localized_500(client, backend):
    backend.reply("register", error=httpx.ConnectError("down"))

    response = client.post(
        "/api/register",
        json={"email": "ani@kantor.id", "password": "rahasia", "name": "Ani"},
    )

    assert response.status_code == 500
    assert response.json() == {"result": "error", "message": "Terjadi kesalahan saat registrasi."}


def test_login_relays_backend_error_body_unchanged(client, backend):
    backend.reply("login", {"result": "error", "message": "Password salah"})

    response = client.post("/api/login", json={"email": "ani@kantor.id", "password": "salah"})

    assert response.status_code == 200
    assert response.json() == {"result": "error", "message": "Password salah"}
    assert backend.last() == {"action": "login", "email": "ani@kantor.id", "password": "salah"}


def test_login_requires_credentials(client, backend):
    response = client.post("/api/login", json={"email": "ani@kantor.id"})

    assert response.status_code == 400
    assert response.json()["message"] == "Email dan password wajib diisi!"
    assert backend.requests == []


def test_login_backend_http_error(client, backend):
    backend.reply("login", {"oops": True}, status_code=502)

    response = client.post("/api/login", json={"email": "ani@kantor.id", "password": "x"})

    assert response.status_code == 500
    assert response.json() == {"result": "error", "message": "Terjadi kesalahan saat login."}
