from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.validators import is_valid_billing_day, require_month


def get_payment_due_date(month: str, billing_day: Optional[int]) -> Optional[datetime]:
    """Due date for a "YYYY-MM" month given the org's billing day.

    The due date is the end of the billing day so the whole day counts.
    Returns None when the org has no usable billing day (unset or not 1..28).
    """
    if not is_valid_billing_day(billing_day):
        return None
    year, month_num = require_month(month)
    return datetime(year, month_num, billing_day, 23, 59, 59, 999999)
