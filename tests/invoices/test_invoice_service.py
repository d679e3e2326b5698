from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

import pytest

from madrasah_admin.core.enums import InvoiceStatus, PaymentMethod
from madrasah_admin.core.exceptions import NotFoundError, ValidationError
from madrasah_admin.invoices.model import Invoice
from madrasah_admin.invoices.service import InvoiceService

ORG = "org-1"
DUE = datetime(2025, 1, 1, 0, 0)


class InMemoryInvoices:
    def __init__(self, invoices=()):
        self._by_id: dict[int, Invoice] = {i.invoice_id: i for i in invoices}
        self._next_id = max(self._by_id, default=0) + 1

    def list_for_org(self, org_id: str):
        return [i for i in self._by_id.values() if i.org_id == org_id]

    def get_by_id(self, org_id: str, invoice_id: int) -> Optional[Invoice]:
        inv = self._by_id.get(invoice_id)
        return inv if inv and inv.org_id == org_id else None

    def exists_for_month(self, org_id, student_id, month) -> bool:
        return any(
            i.org_id == org_id and i.student_id == student_id and i.month == month for i in self._by_id.values()
        )

    def create(self, *, org_id, student_id, month, amount_pence, due_date, status) -> int:
        invoice_id = self._next_id
        self._next_id += 1
        self._by_id[invoice_id] = Invoice(
            invoice_id=invoice_id,
            org_id=org_id,
            student_id=student_id,
            month=month,
            amount_pence=amount_pence,
            due_date=due_date,
            status=status,
        )
        return invoice_id

    def mark_paid(self, *, invoice_id, paid_at, method) -> bool:
        inv = self._by_id[invoice_id]
        if inv.paid_at is not None:
            return False
        self._by_id[invoice_id] = replace(inv, status=InvoiceStatus.PAID, paid_at=paid_at, payment_method=method)
        return True


def _invoice(invoice_id: int, *, status=InvoiceStatus.PENDING, amount=2500, paid_at=None, org_id=ORG) -> Invoice:
    return Invoice(
        invoice_id=invoice_id,
        org_id=org_id,
        student_id=f"s{invoice_id}",
        month="2025-01",
        amount_pence=amount,
        due_date=DUE,
        status=status,
        paid_at=paid_at,
    )


def test_list_derives_status_and_formats_amount():
    repo = InMemoryInvoices([_invoice(1, amount=1250)])
    svc = InvoiceService(repo)

    rows = svc.list_invoices(ORG, now=DUE + timedelta(hours=60))

    assert rows[0]["status"] == "LATE"
    assert rows[0]["amount"] == "£12.50"
    assert rows[0]["amount_pence"] == 1250
    assert rows[0]["due_date"] == "2025-01-01T00:00:00"


def test_drafts_are_never_passed_to_the_calculator():
    class ExplodingCalculator:
        def compute_status(self, due_date, now, paid_at):
            raise AssertionError("calculator called for a draft")

    repo = InMemoryInvoices([_invoice(1, status=InvoiceStatus.DRAFT)])
    svc = InvoiceService(repo, calculator=ExplodingCalculator())

    assert svc.list_invoices(ORG, now=DUE + timedelta(days=30))[0]["status"] == "DRAFT"


def test_filter_by_derived_status():
    repo = InMemoryInvoices([_invoice(1), _invoice(2, paid_at=DUE)])
    svc = InvoiceService(repo)

    overdue = svc.list_invoices(ORG, now=DUE + timedelta(days=5), status=InvoiceStatus.OVERDUE)

    assert [r["id"] for r in overdue] == [1]


def test_other_orgs_invoices_are_not_visible():
    repo = InMemoryInvoices([_invoice(1, org_id="other")])
    svc = InvoiceService(repo)

    assert svc.list_invoices(ORG, now=DUE) == []
    with pytest.raises(NotFoundError):
        svc.get_invoice(ORG, 1, now=DUE)


def test_record_payment_sets_paid_once():
    repo = InMemoryInvoices([_invoice(1)])
    svc = InvoiceService(repo)
    paid_at = DUE + timedelta(days=9)

    svc.record_payment(ORG, 1, method=PaymentMethod.CASH, paid_at=paid_at)
    view = svc.get_invoice(ORG, 1, now=DUE + timedelta(days=40))

    assert view["status"] == "PAID"
    assert view["paid_at"] == paid_at.isoformat()
    assert view["payment_method"] == "CASH"

    with pytest.raises(ValidationError):
        svc.record_payment(ORG, 1, method=PaymentMethod.CARD)


def test_draft_cannot_be_paid():
    svc = InvoiceService(InMemoryInvoices([_invoice(1, status=InvoiceStatus.DRAFT)]))
    with pytest.raises(ValidationError):
        svc.record_payment(ORG, 1, method=PaymentMethod.BANK_TRANSFER)


def test_status_summary_counts_and_outstanding():
    repo = InMemoryInvoices(
        [
            _invoice(1, amount=1000),
            _invoice(2, amount=2000),
            _invoice(3, amount=500, paid_at=DUE),
            _invoice(4, status=InvoiceStatus.DRAFT),
        ]
    )
    svc = InvoiceService(repo)

    summary = svc.status_summary(ORG, now=DUE + timedelta(hours=100))

    assert summary.counts["OVERDUE"] == 2
    assert summary.counts["PAID"] == 1
    assert summary.counts["DRAFT"] == 1
    assert summary.outstanding_pence["OVERDUE"] == 3000
    assert summary.total_outstanding_pence == 3000


def test_generate_monthly_skips_existing_and_uses_billing_day():
    existing = replace(_invoice(1), student_id="s-a", month="2025-02")
    repo = InMemoryInvoices([existing])
    svc = InvoiceService(repo)

    created = svc.generate_monthly(ORG, month="2025-02", billing_day=5, student_amounts={"s-a": 3000, "s-b": 3000})

    assert len(created) == 1
    new = repo.get_by_id(ORG, created[0])
    assert new.student_id == "s-b"
    assert new.status == InvoiceStatus.PENDING
    assert new.due_date == datetime(2025, 2, 5, 23, 59, 59, 999999)


def test_create_invoice_requires_billing_day():
    svc = InvoiceService(InMemoryInvoices())
    with pytest.raises(ValidationError):
        svc.create_invoice(ORG, student_id="s", month="2025-02", amount_pence=100, billing_day=None)
