from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required", code="missing-field")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_list(value: Any, field_name: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f"{field_name} array is required", code="missing-field")
    return value


def require_mapping(value: Any, field_name: str) -> dict:
    if not isinstance(value, dict):
        raise ValidationError(f"{field_name} must be an object")
    return value
