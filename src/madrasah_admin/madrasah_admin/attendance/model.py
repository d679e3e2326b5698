from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance for a class on a date."""

    class_id: str
    student_id: str
    date: date
    status: AttendanceStatus
    time: Optional[str] = None


@dataclass(frozen=True)
class RosterEntry:
    """One row of the marking roster for a (class, date) session."""

    student_id: str
    status: AttendanceStatus
    time: Optional[str] = None
    first_name: str = ""
    last_name: str = ""

    @property
    def name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_record(self, class_id: str, on_date: date) -> AttendanceRecord:
        return AttendanceRecord(
            class_id=class_id,
            student_id=self.student_id,
            date=on_date,
            status=self.status,
            time=self.time,
        )
