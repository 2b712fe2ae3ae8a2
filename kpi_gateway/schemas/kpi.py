from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActionTag(str, Enum):
    """Discriminator the backend dispatches on."""

    REGISTER = "register"
    LOGIN = "login"
    GET_INDIKATOR_DATA = "getIndikatorData"
    KPI_BATCH = "kpiBatch"
    GET_KPI_BY_USER = "getKpiByUser"
    UPDATE_KPI = "updateKPI"
    GET_SUBMITTED_KPI = "getSubmittedKPI"


class EmailRequest(BaseModel):
    email: str | None = None


class KpiBatchRequest(BaseModel):
    """Batch of indicator values; unknown client fields are forwarded as-is."""

    model_config = ConfigDict(extra="allow")

    indikator_list: Any = None
    nama: Any = None


class IndicatorMasterRecord(BaseModel):
    """Backend-authoritative indicator definition."""

    model_config = ConfigDict(extra="ignore")

    nama: Any = None
    indikator_kpi: Any = None
    target: Any = None


class IndicatorSubmissionItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    indikator_kpi: Any = None
    target: Any = None


@dataclass(slots=True)
class UploadedFile:
    """Attachment bytes held only for the lifetime of one request."""

    content: bytes
    mime_type: str
    filename: str = ""

    @property
    def size(self) -> int:
        return len(self.content)
