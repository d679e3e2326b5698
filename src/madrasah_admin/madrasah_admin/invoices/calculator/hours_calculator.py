from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ...core.constants import LATE_AFTER_HOURS, OVERDUE_AFTER_HOURS
from ...core.enums import InvoiceStatus
from ...core.exceptions import InvalidDateError
from .base import InvoiceStatusCalculator


class HoursPastDueCalculator(InvoiceStatusCalculator):
    """Standard rule: PAID if paid, else PENDING < 48h past due <= LATE < 96h <= OVERDUE.

    Thresholds are measured in elapsed hours, not calendar days. A due date in
    the future is simply PENDING. DRAFT invoices must be filtered out by the
    caller; this calculator never returns DRAFT.
    """

    def __init__(self, *, late_after_hours: int = LATE_AFTER_HOURS, overdue_after_hours: int = OVERDUE_AFTER_HOURS):
        if not 0 <= late_after_hours < overdue_after_hours:
            raise ValueError("late_after_hours must be >= 0 and below overdue_after_hours")
        self._late_after = timedelta(hours=late_after_hours)
        self._overdue_after = timedelta(hours=overdue_after_hours)

    def compute_status(self, due_date: datetime, now: datetime, paid_at: Optional[datetime]) -> InvoiceStatus:
        if paid_at is not None:
            return InvoiceStatus.PAID

        past_due = self._elapsed(due_date, now)
        if past_due >= self._overdue_after:
            return InvoiceStatus.OVERDUE
        if past_due >= self._late_after:
            return InvoiceStatus.LATE
        return InvoiceStatus.PENDING

    @staticmethod
    def _elapsed(due_date: datetime, now: datetime) -> timedelta:
        if not isinstance(due_date, datetime):
            raise InvalidDateError(f"Invoice due date is missing or invalid: {due_date!r}")
        if not isinstance(now, datetime):
            raise InvalidDateError(f"Current time is missing or invalid: {now!r}")
        try:
            return now - due_date
        except TypeError as e:
            # naive vs aware
            raise InvalidDateError(f"Cannot compare {due_date!r} with {now!r}") from e
