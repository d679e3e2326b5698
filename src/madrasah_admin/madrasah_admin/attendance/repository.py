from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_class_and_date(self, org_id: str, class_id: str, on_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_class_between(
        self,
        org_id: str,
        class_id: str,
        *,
        start_date: date,
        end_date: date,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save_batch(
        self,
        *,
        org_id: str,
        class_id: str,
        on_date: date,
        records: Sequence[AttendanceRecord],
    ) -> None:
        """Upsert every record for (class_id, on_date) in one transaction."""

        raise NotImplementedError
