from __future__ import annotations

from typing import Iterable

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


def attendance_rate(records: Iterable[AttendanceRecord]) -> float:
    """Percentage of marked records that were PRESENT or LATE, to one decimal."""
    attended = 0
    marked = 0
    for r in records:
        if r.status == AttendanceStatus.UNMARKED:
            continue
        marked += 1
        if r.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
            attended += 1
    if not marked:
        return 0.0
    return round(attended * 100 / marked, 1)
