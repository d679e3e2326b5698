from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_clock, as_date, db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        class_id=str(r["class_id"]),
        student_id=str(r["student_id"]),
        date=as_date(r["date"]),
        status=AttendanceStatus(r["status"]),
        time=as_clock(r.get("time")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_class_and_date(self, org_id: str, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, student_id, date, status, time
                FROM attendance
                WHERE org_id=%s AND class_id=%s AND date=%s
                """,
                (org_id, class_id, on_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_class_between(
        self,
        org_id: str,
        class_id: str,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, student_id, date, status, time
                FROM attendance
                WHERE org_id=%s AND class_id=%s AND date BETWEEN %s AND %s
                ORDER BY date
                """,
                (org_id, class_id, start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def save_batch(
        self,
        *,
        org_id: str,
        class_id: str,
        on_date: date,
        records: Sequence[AttendanceRecord],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance(org_id, class_id, student_id, date, status, time)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), time=VALUES(time)
                """,
                [(org_id, class_id, r.student_id, on_date, r.status.value, r.time) for r in records],
            )
