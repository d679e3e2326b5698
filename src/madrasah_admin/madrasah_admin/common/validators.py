from __future__ import annotations

from ..core.constants import MAX_BILLING_DAY, MIN_BILLING_DAY
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def is_valid_billing_day(value) -> bool:
    return isinstance(value, int) and MIN_BILLING_DAY <= value <= MAX_BILLING_DAY


def require_month(value: str) -> tuple[int, int]:
    """Validate a YYYY-MM month string and return (year, month)."""
    parts = (value or "").strip().split("-")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValidationError("Invalid month format. Expected YYYY-MM")
    year, month = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValidationError("Invalid month format. Expected YYYY-MM")
    return year, month
