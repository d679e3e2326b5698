from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import InvoiceStatus, PaymentMethod


@dataclass(frozen=True)
class Invoice:
    """Domain entity: a monthly fee owed for one student.

    `status` holds only what is persisted (DRAFT, PENDING or PAID); LATE and
    OVERDUE are derived on read from `due_date`.
    """

    invoice_id: int
    org_id: str
    student_id: str
    month: str
    amount_pence: int
    due_date: datetime
    status: InvoiceStatus
    paid_at: Optional[datetime] = None
    payment_method: Optional[PaymentMethod] = None

    @property
    def is_draft(self) -> bool:
        return self.status == InvoiceStatus.DRAFT
