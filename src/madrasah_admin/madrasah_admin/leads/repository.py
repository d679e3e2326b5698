from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ..core.enums import LeadEmailStage, LeadStatus
from .model import Lead, LeadActivity


class LeadRepository(Protocol):
    def get_by_id(self, lead_id: str) -> Optional[Lead]:
        raise NotImplementedError

    def update_outreach(
        self,
        *,
        lead_id: str,
        last_email_stage: Optional[LeadEmailStage],
        sent_at: datetime,
        next_contact_at: datetime,
        outreach_completed: bool,
        status: LeadStatus,
    ) -> bool:
        raise NotImplementedError

    def add_activity(self, activity: LeadActivity) -> None:
        raise NotImplementedError


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, text: str, sender_name: str) -> None:
        raise NotImplementedError
