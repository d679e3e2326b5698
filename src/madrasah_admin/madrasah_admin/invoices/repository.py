from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import InvoiceStatus, PaymentMethod
from .model import Invoice


class InvoiceRepository(Protocol):
    def list_for_org(self, org_id: str) -> Sequence[Invoice]:
        raise NotImplementedError

    def get_by_id(self, org_id: str, invoice_id: int) -> Optional[Invoice]:
        raise NotImplementedError

    def exists_for_month(self, org_id: str, student_id: str, month: str) -> bool:
        raise NotImplementedError

    def create(
        self,
        *,
        org_id: str,
        student_id: str,
        month: str,
        amount_pence: int,
        due_date: datetime,
        status: InvoiceStatus,
    ) -> int:
        raise NotImplementedError

    def mark_paid(self, *, invoice_id: int, paid_at: datetime, method: PaymentMethod) -> bool:
        """Set paid_at only if it is still unset. Returns False otherwise."""

        raise NotImplementedError
