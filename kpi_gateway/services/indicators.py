"""Cross-check submitted KPI targets against the backend master list.

The master list is authoritative: a submitted indicator must exist for the
subject (`nama`), and its target may only differ from the master target when
the master marks that target as variable (e.g. ``"Fluktuatif"``). The first
violation rejects the whole batch.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Sequence

from kpi_gateway.core.errors import BackendError, ValidationError
from kpi_gateway.i18n import KpiMessages
from kpi_gateway.schemas.kpi import IndicatorMasterRecord, IndicatorSubmissionItem

__all__ = [
    "extract_master_records",
    "normalize_target",
    "is_variable_target",
    "find_master_record",
    "cross_validate_indicators",
]


def extract_master_records(response: Any) -> List[IndicatorMasterRecord]:
    """Pull master records out of a `getIndikatorData` response.

    Raises BackendError when the backend did not report success. A `message`
    that is not a list yields an empty master list; non-mapping entries are
    skipped so they can never match.
    """
    if not isinstance(response, Mapping) or response.get("result") != "success":
        raise BackendError(KpiMessages.MASTER_DATA_FAILED)
    rows = response.get("message") or []
    if not isinstance(rows, list):
        return []
    return [IndicatorMasterRecord.model_validate(row) for row in rows if isinstance(row, Mapping)]


def normalize_target(value: Any) -> str:
    """Lower-cased text form of a target; falsy values become ``""``."""

    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value or "").lower()


def is_variable_target(master_target: Any, marker: str) -> bool:
    return marker.lower() in normalize_target(master_target)


def find_master_record(
    master: Sequence[IndicatorMasterRecord], nama: Any, indikator_kpi: Any
) -> IndicatorMasterRecord | None:
    for record in master:
        if record.nama == nama and record.indikator_kpi == indikator_kpi:
            return record
    return None


def cross_validate_indicators(
    submitted: Sequence[Any],
    nama: Any,
    master: Sequence[IndicatorMasterRecord],
    *,
    marker: str,
) -> None:
    """Raise ValidationError naming the first indicator that breaks the master policy."""

    for raw_item in submitted:
        item = (
            IndicatorSubmissionItem.model_validate(raw_item)
            if isinstance(raw_item, Mapping)
            else IndicatorSubmissionItem()
        )
        label = "" if item.indikator_kpi is None else str(item.indikator_kpi)
        record = find_master_record(master, nama, item.indikator_kpi)
        if record is None:
            raise ValidationError(
                KpiMessages.INDICATOR_NOT_FOUND.format(indikator=label),
                detail={"indikator_kpi": label},
            )
        if is_variable_target(record.target, marker):
            continue
        if normalize_target(record.target) != normalize_target(item.target):
            raise ValidationError(
                KpiMessages.TARGET_IMMUTABLE.format(indikator=label),
                detail={"indikator_kpi": label},
            )
