import os
from functools import lru_cache

from typing import Annotated, Literal, Optional

from pydantic import Field, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from kpi_gateway.core.errors import ConfigurationError


_MEGABYTE = 1024 * 1024


def _load_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(detail=f"Missing required environment variable: {name}")
    return value


class Settings(BaseSettings):
    """Strongly typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="API Indikator KPI")
    environment: Literal["dev", "test", "staging", "prod"] = Field(default="dev")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    backend_url: str = Field(
        default_factory=lambda: _load_required_env("BACKEND_URL"),
        description="Single POST endpoint of the spreadsheet script backend",
    )
    backend_timeout_sec: Optional[float] = Field(
        default=None,
        gt=0,
        description="Outbound timeout; None keeps the httpx transport default",
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)
    allowed_origin: str = Field(default="http://localhost:3000")

    # Two staged limits: the transport cap rejects while buffering, the safe cap
    # is checked afterwards with its own message.
    upload_max_bytes: int = Field(default=5 * _MEGABYTE, ge=1)
    upload_safe_bytes: int = Field(default=3 * _MEGABYTE, ge=1)
    allowed_upload_types: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["image/jpeg", "image/png", "application/pdf"],
        description="Empty list disables the MIME allow-list",
    )

    variable_target_marker: str = Field(default="fluktuatif", min_length=1)

    debug_instrumentation_enabled: bool = Field(default=True)

    @field_validator("backend_url", mode="before")
    @classmethod
    def _normalize_backend_url(cls, value: object) -> str:
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if not isinstance(value, str) or not value.strip():
            raise ValueError("BACKEND_URL must be a non-empty URL string")
        return value.strip()

    @field_validator("allowed_upload_types", mode="before")
    @classmethod
    def _split_upload_types(cls, value: object) -> object:
        # Accept "image/png,application/pdf" from plain env files
        if isinstance(value, str):
            return [part.strip().lower() for part in value.split(",") if part.strip()]
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_upload_limits(self) -> "Settings":
        # The safe-size message could never fire above the transport cap
        if self.upload_safe_bytes > self.upload_max_bytes:
            raise ConfigurationError(
                detail=(
                    f"UPLOAD_SAFE_BYTES ({self.upload_safe_bytes}) exceeds "
                    f"UPLOAD_MAX_BYTES ({self.upload_max_bytes})"
                )
            )
        return self

    @computed_field(return_type=bool)
    def is_production(self) -> bool:
        return self.environment == "prod"


@lru_cache
def get_settings() -> Settings:
    return Settings()
