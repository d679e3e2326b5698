from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass, Student


class StudentRepository(Protocol):
    def get_class(self, org_id: str, class_id: str) -> Optional[SchoolClass]:
        """Active (non-archived) class in the org, or None."""

        raise NotImplementedError

    def list_enrolled(self, class_id: str) -> Sequence[Student]:
        """Every student linked to the class, archived ones included."""

        raise NotImplementedError
