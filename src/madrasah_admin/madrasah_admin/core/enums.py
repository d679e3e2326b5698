from __future__ import annotations

from enum import Enum


class InvoiceStatus(str, Enum):
    """Invoice status. DRAFT and PAID are stored; the rest are derived on read."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    LATE = "LATE"
    OVERDUE = "OVERDUE"
    PAID = "PAID"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"
    CARD = "CARD"


class AttendanceStatus(str, Enum):
    """Attendance status stored per (student, class, date)."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    UNMARKED = "UNMARKED"


class LeadStatus(str, Enum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    FOLLOW_UP = "FOLLOW_UP"
    DEMO_BOOKED = "DEMO_BOOKED"
    WON = "WON"
    LOST = "LOST"


class LeadEmailStage(str, Enum):
    """Outreach email sequence, in send order."""

    INITIAL = "INITIAL"
    FOLLOW_UP_1 = "FOLLOW_UP_1"
    FOLLOW_UP_2 = "FOLLOW_UP_2"
    FINAL = "FINAL"


class Role(str, Enum):
    """User roles used for endpoint permissions."""

    OWNER = "OWNER"
    ADMIN = "ADMIN"
    STAFF = "STAFF"
    PARENT = "PARENT"
