"""Formatting helpers shared by messages and diagnostics."""

from __future__ import annotations

from typing import Optional

__all__ = ["format_decimal", "format_megabytes"]

_BYTES_PER_MEGABYTE = 1024 * 1024


def format_decimal(value: Optional[float], *, decimals: int = 2) -> Optional[float]:
    """Round a nullable float, passing ``None`` through."""

    if value is None:
        return None
    return round(float(value), decimals)


def format_megabytes(size_bytes: int) -> str:
    """Render a byte ceiling the way users read it: ``3`` or ``2.5``."""

    megabytes = size_bytes / _BYTES_PER_MEGABYTE
    if megabytes.is_integer():
        return str(int(megabytes))
    return f"{megabytes:.1f}".rstrip("0").rstrip(".")
