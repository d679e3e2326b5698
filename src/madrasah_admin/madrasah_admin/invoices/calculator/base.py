from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...core.enums import InvoiceStatus


class InvoiceStatusCalculator(ABC):
    """Calculator interface (Strategy Pattern for invoice status)."""

    @abstractmethod
    def compute_status(self, due_date: datetime, now: datetime, paid_at: Optional[datetime]) -> InvoiceStatus:
        raise NotImplementedError
