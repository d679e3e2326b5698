from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from functools import partial
from typing import Optional, Sequence

from ..common.datetime_utils import format_clock, now_local
from ..core.constants import EMPTY_ROSTER_MESSAGE
from ..core.enums import AttendanceStatus
from ..core.exceptions import EmptyRosterError, NotFoundError, ValidationError
from ..students.model import SchoolClass
from ..students.repository import StudentRepository
from .model import AttendanceRecord, RosterEntry
from .reconciler import AttendanceSession, MARKED_STATUSES, TIMED_STATUSES, build_roster, coerce_clock
from .repository import AttendanceRepository
from .selection import RosterSelection
from .stats import attendance_rate

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, students: StudentRepository):
        self._attendance = attendance
        self._students = students

    def get_class(self, org_id: str, class_id: str) -> SchoolClass:
        klass = self._students.get_class(org_id, class_id)
        if not klass:
            raise NotFoundError("Class not found")
        return klass

    def load_roster(
        self,
        org_id: str,
        class_id: str,
        on_date: date,
        *,
        now: Optional[datetime] = None,
    ) -> list[RosterEntry]:
        self.get_class(org_id, class_id)
        enrolled = self._students.list_enrolled(class_id)
        persisted = self._attendance.list_for_class_and_date(org_id, class_id, on_date)
        return build_roster(class_id, on_date, enrolled, persisted, now=now or now_local())

    def open_session(
        self,
        org_id: str,
        class_id: str,
        on_date: date,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        return AttendanceSession(class_id, on_date, self.load_roster(org_id, class_id, on_date, now=now))

    def selection(self, org_id: str, *, class_id: Optional[str] = None, on_date: Optional[date] = None) -> RosterSelection:
        return RosterSelection(partial(self.open_session, org_id), class_id=class_id, on_date=on_date)

    def save_roster(
        self,
        org_id: str,
        class_id: str,
        on_date: date,
        roster: Sequence[RosterEntry],
        *,
        now: Optional[datetime] = None,
    ) -> list[RosterEntry]:
        """Persist the whole roster as one batch, then return it re-read from storage."""
        if not roster:
            raise EmptyRosterError(EMPTY_ROSTER_MESSAGE)
        self.get_class(org_id, class_id)

        now = now or now_local()
        records = [self._normalize(entry, class_id, on_date, now) for entry in roster]
        self._attendance.save_batch(org_id=org_id, class_id=class_id, on_date=on_date, records=records)
        logger.info("Saved attendance for class %s on %s (%d students)", class_id, on_date.isoformat(), len(records))

        return self.load_roster(org_id, class_id, on_date, now=now)

    def save_session(self, org_id: str, session: AttendanceSession, *, now: Optional[datetime] = None) -> AttendanceSession:
        """Save a session; on failure its entries are left as they were."""
        if not len(session):
            raise EmptyRosterError(EMPTY_ROSTER_MESSAGE)

        session.begin_save()
        try:
            fresh = self.save_roster(org_id, session.class_id, session.date, session.entries, now=now)
        except Exception:
            logger.warning("Attendance save failed for %s; roster kept for retry", session.key)
            raise
        finally:
            session.end_save()

        session.replace_entries(fresh)
        return session

    def class_stats(self, org_id: str, class_id: str, *, start: date, end: date) -> dict:
        if end < start:
            raise ValidationError("End date must not be before start date")
        self.get_class(org_id, class_id)
        records = self._attendance.list_for_class_between(org_id, class_id, start_date=start, end_date=end)

        counts = {s.value: 0 for s in AttendanceStatus}
        for r in records:
            counts[r.status.value] += 1
        return {
            "class_id": class_id,
            "start": start.isoformat(),
            "end": end.isoformat(),
            "counts": counts,
            "attendance_rate": attendance_rate(records),
        }

    @staticmethod
    def _normalize(entry: RosterEntry, class_id: str, on_date: date, now: datetime) -> AttendanceRecord:
        if entry.status not in MARKED_STATUSES:
            raise ValidationError(f"Student {entry.student_id} has no attendance status")
        record = entry.to_record(class_id, on_date)
        record = replace(record, time=coerce_clock(record.time))
        if entry.status in TIMED_STATUSES and not record.time:
            return replace(record, time=format_clock(now))
        if entry.status == AttendanceStatus.ABSENT and record.time is not None:
            return replace(record, time=None)
        return record

    @staticmethod
    def to_ui(klass: SchoolClass, roster: Sequence[RosterEntry]) -> dict:
        return {
            "id": klass.class_id,
            "name": klass.name,
            "teacher": klass.teacher_name or "Unassigned",
            "students": [
                {
                    "id": e.student_id,
                    "name": e.name,
                    "status": e.status.value,
                    "time": e.time,
                }
                for e in roster
            ],
        }
