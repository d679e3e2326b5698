from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.money import format_pence
from ..core.enums import InvoiceStatus, PaymentMethod
from ..core.exceptions import NotFoundError, ValidationError
from .calculator.base import InvoiceStatusCalculator
from .calculator.hours_calculator import HoursPastDueCalculator
from .due_dates import get_payment_due_date
from .model import Invoice
from .repository import InvoiceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusSummary:
    counts: dict[str, int]
    outstanding_pence: dict[str, int]

    @property
    def total_outstanding_pence(self) -> int:
        return sum(self.outstanding_pence.values())


class InvoiceService:
    def __init__(self, invoices: InvoiceRepository, *, calculator: Optional[InvoiceStatusCalculator] = None):
        self._invoices = invoices
        self._calculator = calculator or HoursPastDueCalculator()

    def derive_status(self, invoice: Invoice, now: datetime) -> InvoiceStatus:
        if invoice.is_draft:
            return InvoiceStatus.DRAFT
        if invoice.status == InvoiceStatus.PAID:
            return InvoiceStatus.PAID
        return self._calculator.compute_status(invoice.due_date, now, invoice.paid_at)

    def list_invoices(
        self,
        org_id: str,
        *,
        now: Optional[datetime] = None,
        status: Optional[InvoiceStatus] = None,
    ) -> list[dict]:
        now = now or now_local()
        out = []
        for inv in self._invoices.list_for_org(org_id):
            derived = self.derive_status(inv, now)
            if status is not None and derived != status:
                continue
            out.append(self._to_ui(inv, derived))
        return out

    def get_invoice(self, org_id: str, invoice_id: int, *, now: Optional[datetime] = None) -> dict:
        inv = self._require(org_id, invoice_id)
        return self._to_ui(inv, self.derive_status(inv, now or now_local()))

    def record_payment(
        self,
        org_id: str,
        invoice_id: int,
        *,
        method: PaymentMethod,
        paid_at: Optional[datetime] = None,
    ) -> None:
        inv = self._require(org_id, invoice_id)
        if inv.is_draft:
            raise ValidationError("Draft invoices cannot be paid")
        if inv.paid_at is not None or inv.status == InvoiceStatus.PAID:
            raise ValidationError("Invoice has already been paid")

        paid_at = paid_at or now_local()
        if not self._invoices.mark_paid(invoice_id=inv.invoice_id, paid_at=paid_at, method=method):
            raise ValidationError("Invoice has already been paid")
        logger.info("Invoice %s paid by %s at %s", inv.invoice_id, method.value, paid_at.isoformat())

    def status_summary(self, org_id: str, *, now: Optional[datetime] = None) -> StatusSummary:
        now = now or now_local()
        counts = {s.value: 0 for s in InvoiceStatus}
        outstanding = {s.value: 0 for s in (InvoiceStatus.PENDING, InvoiceStatus.LATE, InvoiceStatus.OVERDUE)}

        for inv in self._invoices.list_for_org(org_id):
            derived = self.derive_status(inv, now)
            counts[derived.value] += 1
            if derived.value in outstanding:
                outstanding[derived.value] += int(inv.amount_pence)

        return StatusSummary(counts=counts, outstanding_pence=outstanding)

    def create_invoice(
        self,
        org_id: str,
        *,
        student_id: str,
        month: str,
        amount_pence: int,
        billing_day: Optional[int],
        draft: bool = False,
    ) -> int:
        if int(amount_pence) <= 0:
            raise ValidationError("Invoice amount must be positive")
        due_date = get_payment_due_date(month, billing_day)
        if due_date is None:
            raise ValidationError("Billing day must be between 1 and 28")

        invoice_id = self._invoices.create(
            org_id=org_id,
            student_id=student_id,
            month=month,
            amount_pence=int(amount_pence),
            due_date=due_date,
            status=InvoiceStatus.DRAFT if draft else InvoiceStatus.PENDING,
        )
        logger.info("Created invoice %s for student %s (%s)", invoice_id, student_id, month)
        return invoice_id

    def generate_monthly(
        self,
        org_id: str,
        *,
        month: str,
        billing_day: Optional[int],
        student_amounts: Mapping[str, int],
    ) -> list[int]:
        """Create one PENDING invoice per student for the month, skipping existing ones."""
        created = []
        for student_id, amount in student_amounts.items():
            if self._invoices.exists_for_month(org_id, student_id, month):
                continue
            created.append(
                self.create_invoice(
                    org_id,
                    student_id=student_id,
                    month=month,
                    amount_pence=amount,
                    billing_day=billing_day,
                )
            )
        logger.info("Generated %d invoices for %s (org %s)", len(created), month, org_id)
        return created

    def _require(self, org_id: str, invoice_id: int) -> Invoice:
        inv = self._invoices.get_by_id(org_id, int(invoice_id))
        if not inv:
            raise NotFoundError("Invoice not found")
        return inv

    def _to_ui(self, inv: Invoice, status: InvoiceStatus) -> dict:
        return {
            "id": inv.invoice_id,
            "student_id": inv.student_id,
            "month": inv.month,
            "amount_pence": inv.amount_pence,
            "amount": format_pence(inv.amount_pence),
            "due_date": inv.due_date.isoformat(),
            "paid_at": inv.paid_at.isoformat() if inv.paid_at else None,
            "payment_method": inv.payment_method.value if inv.payment_method else None,
            "status": status.value,
        }
