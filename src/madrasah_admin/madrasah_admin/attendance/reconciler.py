from __future__ import annotations

import locale
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import format_clock, now_local
from ..core.constants import ROSTER_TIME_FORMAT
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..students.model import Student
from .model import AttendanceRecord, RosterEntry


MARKED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE})
TIMED_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


def _collation_key(value: str) -> str:
    return locale.strxfrm((value or "").casefold())


def roster_sort_key(entry: RosterEntry) -> tuple[str, str]:
    return (_collation_key(entry.first_name), _collation_key(entry.last_name))


def build_roster(
    class_id: str,
    on_date: date,
    enrolled_students: Iterable[Student],
    persisted: Iterable[AttendanceRecord],
    *,
    now: datetime,
) -> list[RosterEntry]:
    """Merge persisted attendance with the default-present roster.

    A persisted PRESENT/ABSENT/LATE record is kept as stored. Students with no
    record (or an UNMARKED one) default to PRESENT at `now`, which is captured
    once so every defaulted entry shares the same time.
    """
    by_student = {
        r.student_id: r for r in persisted if r.class_id == class_id and r.date == on_date
    }
    default_time = format_clock(now)

    roster = []
    for student in enrolled_students:
        if student.is_archived:
            continue
        record = by_student.get(student.student_id)
        if record is not None and record.status in MARKED_STATUSES:
            status, time = record.status, record.time
        else:
            status, time = AttendanceStatus.PRESENT, default_time
        roster.append(
            RosterEntry(
                student_id=student.student_id,
                status=status,
                time=time,
                first_name=student.first_name,
                last_name=student.last_name,
            )
        )

    roster.sort(key=roster_sort_key)
    return roster


def apply_status(entry: RosterEntry, new_status: AttendanceStatus, *, now: datetime) -> RosterEntry:
    """ABSENT clears the time; PRESENT/LATE always take a fresh one."""
    if new_status == AttendanceStatus.ABSENT:
        return replace(entry, status=new_status, time=None)
    return replace(entry, status=new_status, time=format_clock(now))


def coerce_marked_status(value) -> AttendanceStatus:
    try:
        status = AttendanceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")
    if status not in MARKED_STATUSES:
        raise ValidationError("Attendance can only be marked PRESENT, LATE or ABSENT")
    return status


def coerce_clock(value) -> Optional[str]:
    """Validate a roster time; blank means no time, anything else must be HH:MM."""
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Invalid attendance time: {value!r}. Expected HH:MM")
    try:
        return datetime.strptime(value.strip(), ROSTER_TIME_FORMAT).strftime(ROSTER_TIME_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid attendance time: {value!r}. Expected HH:MM")


class AttendanceSession:
    """In-memory roster for one (class_id, date) pair.

    Edits stay local until the roster is saved through AttendanceService.
    """

    def __init__(self, class_id: str, on_date: date, entries: Sequence[RosterEntry]):
        self._class_id = class_id
        self._date = on_date
        self._entries = list(entries)
        self._saving = False

    @property
    def key(self) -> tuple[str, date]:
        return (self._class_id, self._date)

    @property
    def class_id(self) -> str:
        return self._class_id

    @property
    def date(self) -> date:
        return self._date

    @property
    def entries(self) -> list[RosterEntry]:
        return list(self._entries)

    @property
    def is_saving(self) -> bool:
        return self._saving

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, student_id: str) -> RosterEntry:
        for entry in self._entries:
            if entry.student_id == student_id:
                return entry
        raise NotFoundError(f"Student {student_id} is not on this roster")

    def set_status(self, student_id: str, new_status, *, now: Optional[datetime] = None) -> RosterEntry:
        status = coerce_marked_status(new_status)
        for i, entry in enumerate(self._entries):
            if entry.student_id == student_id:
                updated = apply_status(entry, status, now=now or now_local())
                self._entries[i] = updated
                return updated
        raise NotFoundError(f"Student {student_id} is not on this roster")

    def mark_all(self, new_status, *, now: Optional[datetime] = None) -> None:
        status = coerce_marked_status(new_status)
        now = now or now_local()
        self._entries = [apply_status(e, status, now=now) for e in self._entries]

    def counts(self) -> dict[str, int]:
        out = {s.value: 0 for s in MARKED_STATUSES}
        for entry in self._entries:
            out[entry.status.value] = out.get(entry.status.value, 0) + 1
        return out

    def begin_save(self) -> None:
        if self._saving:
            raise ValidationError("Attendance is already being saved")
        self._saving = True

    def end_save(self) -> None:
        self._saving = False

    def replace_entries(self, entries: Sequence[RosterEntry]) -> None:
        self._entries = list(entries)
