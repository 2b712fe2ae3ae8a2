import pytest

from kpi_gateway.core.errors import PayloadTooLarge, ValidationError
from kpi_gateway.schemas.auth import LoginRequest, RegisterRequest
from kpi_gateway.schemas.kpi import KpiBatchRequest, UploadedFile
from kpi_gateway.services.validation import (
    check_attachment_size,
    is_present,
    require_email,
    validate_kpi_batch,
    validate_kpi_update,
    validate_login,
    validate_register,
)

SAFE_BYTES = 3 * 1024 * 1024


def test_is_present():
    assert is_present("a")
    assert not is_present("")
    assert not is_present(None)
    assert not is_present(5)


@pytest.mark.parametrize(
    "fields",
    [
        {"password": "x", "name": "Ani"},
        {"email": "a@b.id", "name": "Ani"},
        {"email": "a@b.id", "password": "x"},
        {"email": "", "password": "x", "name": "Ani"},
    ],
)
def test_register_requires_all_fields(fields):
    with pytest.raises(ValidationError) as exc_info:
        validate_register(RegisterRequest(**fields))
    assert exc_info.value.message == "Email, password, dan nama wajib diisi!"


def test_register_accepts_complete_payload():
    validate_register(RegisterRequest(email="a@b.id", password="x", name="Ani"))


def test_login_requires_email_and_password():
    with pytest.raises(ValidationError):
        validate_login(LoginRequest(email="a@b.id"))
    validate_login(LoginRequest(email="a@b.id", password="x"))


def test_require_email():
    assert require_email("a@b.id") == "a@b.id"
    with pytest.raises(ValidationError) as exc_info:
        require_email(None)
    assert exc_info.value.message == "Email wajib dikirim"


@pytest.mark.parametrize("indikator_list", [None, [], "Sales", {"indikator_kpi": "Sales"}])
def test_kpi_batch_requires_non_empty_list(indikator_list):
    with pytest.raises(ValidationError) as exc_info:
        validate_kpi_batch(KpiBatchRequest(indikator_list=indikator_list, nama="Alice"))
    assert exc_info.value.message == "Indikator KPI tidak valid."


def test_kpi_batch_requires_nama():
    with pytest.raises(ValidationError) as exc_info:
        validate_kpi_batch(KpiBatchRequest(indikator_list=[{"indikator_kpi": "Sales"}]))
    assert exc_info.value.message == "Nama wajib diisi."


def test_kpi_batch_returns_items():
    items = [{"indikator_kpi": "Sales", "target": "100"}]
    assert validate_kpi_batch(KpiBatchRequest(indikator_list=items, nama="Alice")) == items


@pytest.mark.parametrize("kpi_key,email", [(None, "a@b.id"), ("K-1", None), ("", "a@b.id")])
def test_kpi_update_requires_key_and_email(kpi_key, email):
    with pytest.raises(ValidationError):
        validate_kpi_update(kpi_key, email)


def test_attachment_exactly_at_safe_cap_is_accepted():
    check_attachment_size(UploadedFile(content=b"x" * SAFE_BYTES, mime_type="image/png"), SAFE_BYTES)


def test_attachment_one_byte_over_safe_cap_is_rejected():
    with pytest.raises(PayloadTooLarge) as exc_info:
        check_attachment_size(
            UploadedFile(content=b"x" * (SAFE_BYTES + 1), mime_type="image/png"), SAFE_BYTES
        )
    assert exc_info.value.status_code == 413
    assert exc_info.value.message == "File terlalu besar. Maksimal 3 MB agar aman di sistem."


def test_missing_attachment_passes_size_check():
    check_attachment_size(None, SAFE_BYTES)
