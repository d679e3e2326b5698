from datetime import date, datetime

import pytest

from madrasah_admin.attendance.model import AttendanceRecord
from madrasah_admin.attendance.reconciler import AttendanceSession, build_roster, coerce_clock
from madrasah_admin.core.enums import AttendanceStatus
from madrasah_admin.core.exceptions import NotFoundError, ValidationError
from madrasah_admin.students.model import Student

CLASS_ID = "class-1"
DAY = date(2025, 1, 6)
NOW = datetime(2025, 1, 6, 9, 15)

S1 = Student("s1", "Ahmed", "Hassan")
S2 = Student("s2", "Fatima", "Ali")
S3 = Student("s3", "Yusuf", "Patel")


def test_no_persisted_records_defaults_everyone_present_with_one_time():
    roster = build_roster(CLASS_ID, DAY, [S3, S1, S2], [], now=NOW)

    assert len(roster) == 3
    assert {e.status for e in roster} == {AttendanceStatus.PRESENT}
    assert {e.time for e in roster} == {"09:15"}


def test_persisted_absent_overrides_default():
    persisted = [AttendanceRecord(CLASS_ID, "s2", DAY, AttendanceStatus.ABSENT, None)]

    roster = build_roster(CLASS_ID, DAY, [S1, S2, S3], persisted, now=NOW)

    assert [(e.student_id, e.status, e.time) for e in roster] == [
        ("s1", AttendanceStatus.PRESENT, "09:15"),
        ("s2", AttendanceStatus.ABSENT, None),
        ("s3", AttendanceStatus.PRESENT, "09:15"),
    ]


def test_persisted_late_keeps_its_time_and_unmarked_is_defaulted():
    persisted = [
        AttendanceRecord(CLASS_ID, "s1", DAY, AttendanceStatus.LATE, "08:40"),
        AttendanceRecord(CLASS_ID, "s3", DAY, AttendanceStatus.UNMARKED, None),
    ]

    roster = {e.student_id: e for e in build_roster(CLASS_ID, DAY, [S1, S3], persisted, now=NOW)}

    assert (roster["s1"].status, roster["s1"].time) == (AttendanceStatus.LATE, "08:40")
    assert (roster["s3"].status, roster["s3"].time) == (AttendanceStatus.PRESENT, "09:15")


def test_archived_students_are_left_out():
    archived = Student("s4", "Bilal", "Khan", is_archived=True)
    roster = build_roster(CLASS_ID, DAY, [S1, archived], [], now=NOW)
    assert [e.student_id for e in roster] == ["s1"]


def test_records_for_another_date_are_ignored():
    other_day = [AttendanceRecord(CLASS_ID, "s1", date(2025, 1, 5), AttendanceStatus.ABSENT, None)]
    roster = build_roster(CLASS_ID, DAY, [S1], other_day, now=NOW)
    assert roster[0].status == AttendanceStatus.PRESENT


def test_sorted_by_first_then_last_name_ignoring_case():
    students = [
        Student("a", "zainab", "Omar"),
        Student("b", "Adam", "Yusuf"),
        Student("c", "adam", "Bashir"),
    ]
    roster = build_roster(CLASS_ID, DAY, students, [], now=NOW)
    assert [e.student_id for e in roster] == ["c", "b", "a"]


def test_absent_then_present_gets_a_fresh_time():
    session = AttendanceSession(CLASS_ID, DAY, build_roster(CLASS_ID, DAY, [S1], [], now=NOW))

    absent = session.set_status("s1", AttendanceStatus.ABSENT, now=datetime(2025, 1, 6, 9, 30))
    assert absent.time is None

    present = session.set_status("s1", "PRESENT", now=datetime(2025, 1, 6, 9, 45))
    assert present.time == "09:45"
    assert session.get("s1").time == "09:45"


def test_late_recaptures_time():
    session = AttendanceSession(CLASS_ID, DAY, build_roster(CLASS_ID, DAY, [S1], [], now=NOW))
    session.set_status("s1", AttendanceStatus.LATE, now=datetime(2025, 1, 6, 10, 5))
    assert (session.get("s1").status, session.get("s1").time) == (AttendanceStatus.LATE, "10:05")


def test_set_status_rejects_unmarked_and_unknown_students():
    session = AttendanceSession(CLASS_ID, DAY, build_roster(CLASS_ID, DAY, [S1], [], now=NOW))

    with pytest.raises(ValidationError):
        session.set_status("s1", AttendanceStatus.UNMARKED)
    with pytest.raises(ValidationError):
        session.set_status("s1", "HOLIDAY")
    with pytest.raises(NotFoundError):
        session.set_status("nobody", AttendanceStatus.ABSENT)


def test_mark_all_and_counts():
    session = AttendanceSession(CLASS_ID, DAY, build_roster(CLASS_ID, DAY, [S1, S2, S3], [], now=NOW))
    session.mark_all(AttendanceStatus.ABSENT, now=NOW)
    session.set_status("s2", AttendanceStatus.LATE, now=NOW)

    assert session.counts() == {"PRESENT": 0, "ABSENT": 2, "LATE": 1}


def test_entries_are_a_copy():
    session = AttendanceSession(CLASS_ID, DAY, build_roster(CLASS_ID, DAY, [S1], [], now=NOW))
    session.entries.clear()
    assert len(session) == 1


def test_coerce_clock_accepts_hh_mm_and_blank():
    assert coerce_clock("09:10") == "09:10"
    assert coerce_clock("9:05") == "09:05"
    assert coerce_clock(None) is None
    assert coerce_clock("") is None


@pytest.mark.parametrize("bad", ["banana", 930, "24:00", "09:10:00", " "])
def test_coerce_clock_rejects_anything_else(bad):
    with pytest.raises(ValidationError, match="HH:MM"):
        coerce_clock(bad)
