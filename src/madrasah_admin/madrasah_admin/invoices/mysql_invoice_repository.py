from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import InvoiceStatus, PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Invoice
from .repository import InvoiceRepository

_COLUMNS = "invoice_id, org_id, student_id, month, amount_pence, due_date, status, paid_at, payment_method"


def _row_to_invoice(r: dict) -> Invoice:
    return Invoice(
        invoice_id=int(r["invoice_id"]),
        org_id=str(r["org_id"]),
        student_id=str(r["student_id"]),
        month=str(r["month"]),
        amount_pence=int(r["amount_pence"]),
        due_date=r["due_date"],
        status=InvoiceStatus(r["status"]),
        paid_at=r.get("paid_at"),
        payment_method=PaymentMethod(r["payment_method"]) if r.get("payment_method") else None,
    )


class MySQLInvoiceRepository(InvoiceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_org(self, org_id: str) -> Sequence[Invoice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM invoices
                WHERE org_id=%s
                ORDER BY due_date DESC, invoice_id DESC
                """,
                (org_id,),
            )
            return [_row_to_invoice(r) for r in fetchall(cur)]

    def get_by_id(self, org_id: str, invoice_id: int) -> Optional[Invoice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM invoices WHERE org_id=%s AND invoice_id=%s",
                (org_id, int(invoice_id)),
            )
            r = fetchone(cur)
            return _row_to_invoice(r) if r else None

    def exists_for_month(self, org_id: str, student_id: str, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM invoices WHERE org_id=%s AND student_id=%s AND month=%s",
                (org_id, student_id, month),
            )
            return fetchone(cur) is not None

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO invoices(org_id, student_id, month, amount_pence, due_date, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (org_id, student_id, month, int(amount_pence), due_date, status.value),
            )
            return int(cur.lastrowid)

    def mark_paid(self, *, invoice_id: int, paid_at: datetime, method: PaymentMethod) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE invoices
                SET status='PAID', paid_at=%s, payment_method=%s
                WHERE invoice_id=%s AND paid_at IS NULL AND status <> 'DRAFT'
                """,
                (paid_at, method.value, int(invoice_id)),
            )
            return cur.rowcount > 0
