from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from madrasah_admin.core.enums import LeadEmailStage, LeadStatus
from madrasah_admin.core.exceptions import MailDeliveryError, NotFoundError, ValidationError
from madrasah_admin.leads.model import Lead
from madrasah_admin.leads.service import LeadOutreachService

NOW = datetime(2025, 3, 10, 11, 0)


class RecordingMailer:
    def __init__(self):
        self.sent = []

    def send(self, *, to, subject, text, sender_name):
        self.sent.append({"to": to, "subject": subject, "text": text, "sender_name": sender_name})


class RefusingMailer:
    def send(self, **kwargs):
        raise MailDeliveryError("Could not deliver email to info@alnoor.test")


class InMemoryLeads:
    def __init__(self, leads):
        self.by_id = {lead.lead_id: lead for lead in leads}
        self.activities = []

    def get_by_id(self, lead_id):
        return self.by_id.get(lead_id)

    def update_outreach(self, *, lead_id, last_email_stage, sent_at, next_contact_at, outreach_completed, status):
        self.by_id[lead_id] = replace(
            self.by_id[lead_id],
            last_email_stage=last_email_stage,
            last_email_sent_at=sent_at,
            last_contact_at=sent_at,
            next_contact_at=next_contact_at,
            email_outreach_completed=outreach_completed,
            status=status,
        )
        return True

    def add_activity(self, activity):
        self.activities.append(activity)


def _setup(**lead_fields):
    lead = Lead(lead_id="l1", org_name="Al-Noor Madrasah", contact_email="info@alnoor.test", **lead_fields)
    repo = InMemoryLeads([lead])
    mailer = RecordingMailer()
    return LeadOutreachService(repo, mailer), repo, mailer


def test_first_initial_email_advances_stage_and_status():
    svc, repo, mailer = _setup()

    lead = svc.send_email("l1", template="INITIAL", subject="Salaam", body="Hello", sender_name="Owner", now=NOW)

    assert lead.last_email_stage == LeadEmailStage.INITIAL
    assert lead.status == LeadStatus.CONTACTED
    assert lead.next_contact_at == NOW + timedelta(days=7)
    assert not lead.email_outreach_completed
    assert repo.by_id["l1"] == lead
    assert mailer.sent[0]["to"] == "info@alnoor.test"
    assert repo.activities[0].description == "Sent initial email: Salaam"
    assert svc.suggested_template(lead) == LeadEmailStage.FOLLOW_UP_1


def test_final_email_completes_outreach():
    svc, _, _ = _setup(status=LeadStatus.CONTACTED, last_email_stage=LeadEmailStage.FOLLOW_UP_2)

    lead = svc.send_email("l1", template="FINAL", subject="Last note", body="...", now=NOW)

    assert lead.email_outreach_completed
    assert lead.status == LeadStatus.CONTACTED
    assert svc.suggested_template(lead) is None


def test_custom_email_keeps_stage():
    svc, repo, _ = _setup(last_email_stage=LeadEmailStage.FOLLOW_UP_1)

    lead = svc.send_email("l1", template="CUSTOM", subject="Quick q", body="Are you free?", now=NOW)

    assert lead.last_email_stage == LeadEmailStage.FOLLOW_UP_1
    assert repo.activities[0].description == "Sent email: Quick q"


def test_template_already_sent_is_rejected():
    svc, _, mailer = _setup(last_email_stage=LeadEmailStage.FOLLOW_UP_1)

    with pytest.raises(ValidationError, match="already been sent"):
        svc.send_email("l1", template="INITIAL", subject="s", body="b", now=NOW)
    assert mailer.sent == []


def test_only_one_email_per_day():
    svc, _, _ = _setup(last_email_sent_at=NOW.replace(hour=8))

    with pytest.raises(ValidationError, match="today"):
        svc.send_email("l1", template="CUSTOM", subject="s", body="b", now=NOW)


def test_requires_subject_body_and_address():
    svc, repo, _ = _setup()
    with pytest.raises(ValidationError):
        svc.send_email("l1", template="INITIAL", subject="", body="b", now=NOW)

    repo.by_id["l1"] = replace(repo.by_id["l1"], contact_email=None)
    with pytest.raises(ValidationError, match="no email"):
        svc.send_email("l1", template="INITIAL", subject="s", body="b", now=NOW)


def test_missing_lead():
    svc, _, _ = _setup()
    with pytest.raises(NotFoundError):
        svc.send_email("nope", template="INITIAL", subject="s", body="b", now=NOW)


def test_failed_delivery_leaves_lead_untouched():
    lead = Lead(lead_id="l1", org_name="Al-Noor Madrasah", contact_email="info@alnoor.test")
    repo = InMemoryLeads([lead])
    svc = LeadOutreachService(repo, RefusingMailer())

    with pytest.raises(MailDeliveryError):
        svc.send_email("l1", template="INITIAL", subject="Salaam", body="Hello", now=NOW)

    assert repo.by_id["l1"] == lead
    assert repo.activities == []
