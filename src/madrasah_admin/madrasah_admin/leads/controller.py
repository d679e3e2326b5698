from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import json_error, role_required
from ..core.enums import Role
from ..core.exceptions import MailDeliveryError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    service = container.lead_outreach_service

    @app.route("/api/owner/leads/<lead_id>/send-email", methods=["POST"], endpoint="api_lead_send_email")
    @role_required(Role.OWNER)
    def api_lead_send_email(lead_id: str):
        try:
            data = request.get_json(silent=True) or {}
            lead = service.send_email(
                lead_id,
                template=data.get("template"),
                subject=data.get("subject", ""),
                body=data.get("body", ""),
                sender_name=session.get("name") or "Madrasah OS",
            )
            suggested = service.suggested_template(lead)
            return jsonify(
                {
                    "success": True,
                    "lead": {
                        "id": lead.lead_id,
                        "status": lead.status.value,
                        "lastEmailStage": lead.last_email_stage.value if lead.last_email_stage else None,
                        "lastEmailSentAt": lead.last_email_sent_at.isoformat() if lead.last_email_sent_at else None,
                        "nextContactAt": lead.next_contact_at.isoformat() if lead.next_contact_at else None,
                        "emailOutreachCompleted": lead.email_outreach_completed,
                        "suggestedTemplate": suggested.value if suggested else None,
                    },
                }
            ), 200
        except ValidationError as e:
            return json_error(str(e), 400)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except MailDeliveryError as e:
            return json_error(str(e), 502)
        except Exception:
            logger.exception("Failed to send email to lead %s", lead_id)
            return json_error("Failed to send email", 500)
