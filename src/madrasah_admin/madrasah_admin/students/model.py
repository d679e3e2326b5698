from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Student:
    student_id: str
    first_name: str
    last_name: str
    is_archived: bool = False


@dataclass(frozen=True)
class SchoolClass:
    class_id: str
    org_id: str
    name: str
    teacher_name: Optional[str] = None
    is_archived: bool = False
