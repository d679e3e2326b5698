from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import NEXT_CONTACT_DAYS
from ..core.enums import LeadEmailStage, LeadStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Lead, LeadActivity
from .repository import LeadRepository, Mailer
from .stages import STAGE_LABELS, has_been_sent, next_stage, parse_template

logger = logging.getLogger(__name__)


class LeadOutreachService:
    def __init__(self, leads: LeadRepository, mailer: Mailer):
        self._leads = leads
        self._mailer = mailer

    def suggested_template(self, lead: Lead) -> Optional[LeadEmailStage]:
        if lead.email_outreach_completed:
            return None
        return next_stage(lead.last_email_stage)

    def send_email(
        self,
        lead_id: str,
        *,
        template: Optional[str],
        subject: str,
        body: str,
        sender_name: str = "Madrasah OS",
        now: Optional[datetime] = None,
    ) -> Lead:
        now = now or now_local()
        subject = require_non_empty(subject, "Subject")
        body = require_non_empty(body, "Body")
        stage = parse_template(template)

        lead = self._leads.get_by_id(lead_id)
        if not lead:
            raise NotFoundError("Lead not found")
        if not lead.contact_email:
            raise ValidationError("Lead has no email address")
        if lead.last_email_sent_at and lead.last_email_sent_at.date() == now.date():
            raise ValidationError("You already sent an email to this madrasah today.")
        if stage is not None and has_been_sent(lead.last_email_stage, stage):
            raise ValidationError(
                f"This template ({stage.value}) has already been sent. Each template can only be sent once."
            )

        self._mailer.send(to=lead.contact_email, subject=subject, text=body, sender_name=sender_name)

        # CUSTOM emails keep the current stage
        new_stage = stage if stage is not None else lead.last_email_stage
        new_status = LeadStatus.CONTACTED if lead.status == LeadStatus.NEW else lead.status
        next_contact_at = now + timedelta(days=NEXT_CONTACT_DAYS)
        completed = new_stage == LeadEmailStage.FINAL

        self._leads.update_outreach(
            lead_id=lead.lead_id,
            last_email_stage=new_stage,
            sent_at=now,
            next_contact_at=next_contact_at,
            outreach_completed=completed,
            status=new_status,
        )
        label = f"Sent {STAGE_LABELS[stage].lower()} email" if stage else "Sent email"
        description = f"{label}: {subject}"
        self._leads.add_activity(LeadActivity(lead_id=lead.lead_id, type="EMAIL", description=description, created_at=now))
        logger.info("Lead %s: %s (stage=%s)", lead.lead_id, description, new_stage.value if new_stage else None)

        return replace(
            lead,
            status=new_status,
            last_email_stage=new_stage,
            last_email_sent_at=now,
            last_contact_at=now,
            next_contact_at=next_contact_at,
            email_outreach_completed=completed,
        )
