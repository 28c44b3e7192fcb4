from __future__ import annotations

import math
from typing import Any, Type

from ..core.exceptions import DomainError, ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_finite_number(
    value: Any,
    field_name: str,
    *,
    error_cls: Type[DomainError] = ValidationError,
    **error_kwargs: Any,
) -> float:
    """Coerce to float, refusing booleans, blanks, NaN and infinities."""

    if isinstance(value, bool) or value is None:
        raise error_cls(f"{field_name} phải là số (nhận được {value!r})", **error_kwargs)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise error_cls(f"{field_name} phải là số (nhận được {value!r})", **error_kwargs) from None
    if not math.isfinite(number):
        raise error_cls(f"{field_name} phải là số hữu hạn (nhận được {value!r})", **error_kwargs)
    return number


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} phải là số nguyên")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} phải là số nguyên (nhận được {value!r})") from None
