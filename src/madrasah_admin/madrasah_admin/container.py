from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import LATE_AFTER_HOURS, OVERDUE_AFTER_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .invoices.calculator.hours_calculator import HoursPastDueCalculator
from .invoices.mysql_invoice_repository import MySQLInvoiceRepository
from .invoices.service import InvoiceService
from .leads.mailer import SmtpConfig, SmtpMailer
from .leads.mysql_lead_repository import MySQLLeadRepository
from .leads.repository import Mailer
from .leads.service import LeadOutreachService
from .students.mysql_student_repository import MySQLStudentRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    students_repo: MySQLStudentRepository
    attendance_repo: MySQLAttendanceRepository
    invoices_repo: MySQLInvoiceRepository
    leads_repo: MySQLLeadRepository

    invoice_service: InvoiceService
    attendance_service: AttendanceService
    lead_outreach_service: LeadOutreachService


def build_container(
    *,
    db_config: Mapping,
    late_after_hours: int = LATE_AFTER_HOURS,
    overdue_after_hours: int = OVERDUE_AFTER_HOURS,
    smtp_config: Optional[Mapping] = None,
    mailer: Optional[Mailer] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    students_repo = MySQLStudentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    invoices_repo = MySQLInvoiceRepository(conn)
    leads_repo = MySQLLeadRepository(conn)

    invoice_service = InvoiceService(
        invoices_repo,
        calculator=HoursPastDueCalculator(
            late_after_hours=late_after_hours,
            overdue_after_hours=overdue_after_hours,
        ),
    )
    attendance_service = AttendanceService(attendance_repo, students_repo)
    if mailer is None:
        mailer = SmtpMailer(SmtpConfig.from_mapping(smtp_config or {}))
    lead_outreach_service = LeadOutreachService(leads_repo, mailer)

    return Container(
        conn=conn,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        invoices_repo=invoices_repo,
        leads_repo=leads_repo,
        invoice_service=invoice_service,
        attendance_service=attendance_service,
        lead_outreach_service=lead_outreach_service,
    )
