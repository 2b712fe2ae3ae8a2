"""Localized Indonesian message constants used across routers/services.

Every text that reaches the web client lives here so the frontend sees the
same wording regardless of which layer produced the error.
"""


class GatewayErrorMessages:
    """Default messages per error kind."""

    GATEWAY_ERROR: str = "Terjadi kesalahan pada gateway"
    VALIDATION_ERROR: str = "Data tidak valid"
    REQUEST_INVALID: str = "Format permintaan tidak valid."
    PAYLOAD_TOO_LARGE: str = "Ukuran file terlalu besar."
    UNSUPPORTED_MEDIA_TYPE: str = "Tipe file tidak diizinkan. Maksimal JPG, PNG, atau PDF."
    BACKEND_ERROR: str = "Terjadi kesalahan pada server."
    CONFIGURATION_ERROR: str = "Konfigurasi sistem tidak valid"


class AuthMessages:
    """Register/login flow messages."""

    REGISTER_FIELDS_REQUIRED: str = "Email, password, dan nama wajib diisi!"
    LOGIN_FIELDS_REQUIRED: str = "Email dan password wajib diisi!"
    REGISTER_FAILED: str = "Terjadi kesalahan saat registrasi."
    LOGIN_FAILED: str = "Terjadi kesalahan saat login."


class KpiMessages:
    """KPI submission and lookup messages."""

    EMAIL_REQUIRED: str = "Email wajib dikirim"
    INDICATOR_LIST_INVALID: str = "Indikator KPI tidak valid."
    NAMA_REQUIRED: str = "Nama wajib diisi."
    INDICATOR_NOT_FOUND: str = 'Indikator "{indikator}" tidak ditemukan.'
    TARGET_IMMUTABLE: str = 'Target untuk indikator "{indikator}" tidak boleh diubah.'
    MASTER_DATA_FAILED: str = "Gagal validasi indikator (master data)."
    BATCH_FAILED: str = "Gagal mengirim KPI."
    INDICATOR_FETCH_FAILED: str = "Gagal mengambil indikator!"
    USER_KPI_FETCH_FAILED: str = "Gagal mengambil KPI user"
    KPI_BY_USER_FETCH_FAILED: str = "Gagal mengambil data KPI"
    SUBMITTED_FETCH_FAILED: str = "Gagal mengambil Tabungan yang sudah dikirim"
    KPI_KEY_REQUIRED: str = "kpiKey dan email wajib dikirim"
    UPDATE_FAILED: str = "Gagal update KPI"


class UploadMessages:
    """Attachment limits; size values are rendered from settings."""

    TYPE_NOT_ALLOWED: str = "Tipe file tidak diizinkan. Maksimal JPG, PNG, atau PDF."
    MAX_SIZE: str = "Ukuran file maksimal {size} MB."
    SAFE_SIZE: str = "File terlalu besar. Maksimal {size} MB agar aman di sistem."
    SINGLE_FILE_ONLY: str = "Hanya satu file bukti yang boleh diunggah."


class GeneralMessages:
    """Plain texts for informational endpoints."""

    INDEX_BANNER: str = "<h1>Ini adalah API Indikator KPI</h1>"
