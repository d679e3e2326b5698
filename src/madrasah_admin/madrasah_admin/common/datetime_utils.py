from __future__ import annotations

from datetime import date, datetime

from ..core.constants import ROSTER_TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError("Invalid date format. Expected YYYY-MM-DD")


def parse_iso_datetime(value: str) -> datetime:
    """Parse a full ISO 8601 timestamp; a trailing 'Z' is read as UTC."""
    v = (value or "").strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"Invalid timestamp: {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def format_clock(value: datetime) -> str:
    return value.strftime(ROSTER_TIME_FORMAT)
