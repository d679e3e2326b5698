from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import LeadEmailStage, LeadStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Lead, LeadActivity
from .repository import LeadRepository


class MySQLLeadRepository(LeadRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, lead_id: str) -> Optional[Lead]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT lead_id, org_name, contact_email, status, last_email_stage, last_email_sent_at,
                       last_contact_at, next_contact_at, email_outreach_completed
                FROM leads
                WHERE lead_id=%s
                """,
                (lead_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Lead(
                lead_id=str(r["lead_id"]),
                org_name=r["org_name"],
                contact_email=r.get("contact_email"),
                status=LeadStatus(r["status"]),
                last_email_stage=LeadEmailStage(r["last_email_stage"]) if r.get("last_email_stage") else None,
                last_email_sent_at=r.get("last_email_sent_at"),
                last_contact_at=r.get("last_contact_at"),
                next_contact_at=r.get("next_contact_at"),
                email_outreach_completed=bool(r.get("email_outreach_completed")),
            )

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leads
                SET last_email_stage=%s, last_email_sent_at=%s, last_contact_at=%s,
                    next_contact_at=%s, email_outreach_completed=%s, status=%s
                WHERE lead_id=%s
                """,
                (
                    last_email_stage.value if last_email_stage else None,
                    sent_at,
                    sent_at,
                    next_contact_at,
                    int(outreach_completed),
                    status.value,
                    lead_id,
                ),
            )
            return cur.rowcount > 0

    def add_activity(self, activity: LeadActivity) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO lead_activities(lead_id, type, description, created_at)
                VALUES(%s,%s,%s,%s)
                """,
                (activity.lead_id, activity.type, activity.description, activity.created_at),
            )
