from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass, Student
from .repository import StudentRepository


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_class(self, org_id: str, class_id: str) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, org_id, name, teacher_name, is_archived
                FROM classes
                WHERE class_id=%s AND org_id=%s AND is_archived=0
                """,
                (class_id, org_id),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SchoolClass(
                class_id=str(r["class_id"]),
                org_id=str(r["org_id"]),
                name=r["name"],
                teacher_name=r.get("teacher_name"),
                is_archived=bool(r["is_archived"]),
            )

    def list_enrolled(self, class_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.student_id, s.first_name, s.last_name, s.is_archived
                FROM student_classes sc
                JOIN students s ON s.student_id = sc.student_id
                WHERE sc.class_id=%s
                """,
                (class_id,),
            )
            return [
                Student(
                    student_id=str(r["student_id"]),
                    first_name=r["first_name"],
                    last_name=r["last_name"],
                    is_archived=bool(r["is_archived"]),
                )
                for r in fetchall(cur)
            ]
