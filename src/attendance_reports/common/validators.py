from __future__ import annotations

from ..core.exceptions import ValidationError


def require_positive(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{field_name} must be a positive integer, got {value!r}")
    return value


def require_non_negative(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field_name} must be zero or greater, got {value!r}")
    return value
