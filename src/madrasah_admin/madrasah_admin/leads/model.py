from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import LeadEmailStage, LeadStatus


@dataclass(frozen=True)
class Lead:
    """A prospective madrasah tracked through owner outreach."""

    lead_id: str
    org_name: str
    contact_email: Optional[str]
    status: LeadStatus = LeadStatus.NEW
    last_email_stage: Optional[LeadEmailStage] = None
    last_email_sent_at: Optional[datetime] = None
    last_contact_at: Optional[datetime] = None
    next_contact_at: Optional[datetime] = None
    email_outreach_completed: bool = False


@dataclass(frozen=True)
class LeadActivity:
    lead_id: str
    type: str
    description: str
    created_at: datetime
