from __future__ import annotations

from typing import Optional

from ..core.exceptions import InvalidInput


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInput(f"{field_name} is required")
    return str(value).strip()


def require_range(value: float, field_name: str, low: float, high: float) -> float:
    if value is None or not (low <= value <= high):
        raise InvalidInput(f"{field_name} must be between {low} and {high}")
    return value
