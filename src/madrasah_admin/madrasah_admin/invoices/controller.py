from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..common.web import current_org_id, json_error, role_required
from ..core.enums import InvoiceStatus, PaymentMethod, Role
from ..core.exceptions import DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    service = container.invoice_service

    @app.route("/api/invoices", methods=["GET"], endpoint="api_invoices")
    @role_required(Role.ADMIN, Role.STAFF)
    def api_invoices():
        try:
            raw_status = (request.args.get("status") or "").strip().upper()
            try:
                status = InvoiceStatus(raw_status) if raw_status else None
            except ValueError:
                raise ValidationError(f"Unknown invoice status: {raw_status}")
            invoices = service.list_invoices(current_org_id(), status=status)
            return jsonify({"success": True, "invoices": invoices}), 200
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Failed to list invoices")
            return json_error("Failed to fetch invoices", 500)

    @app.route("/api/invoices/summary", methods=["GET"], endpoint="api_invoices_summary")
    @role_required(Role.ADMIN, Role.STAFF)
    def api_invoices_summary():
        try:
            summary = service.status_summary(current_org_id())
            return jsonify(
                {
                    "success": True,
                    "counts": summary.counts,
                    "outstanding_pence": summary.outstanding_pence,
                    "total_outstanding_pence": summary.total_outstanding_pence,
                }
            ), 200
        except Exception:
            logger.exception("Failed to build invoice summary")
            return json_error("Failed to fetch invoice summary", 500)

    @app.route("/api/invoices/<int:invoice_id>", methods=["GET"], endpoint="api_invoice_detail")
    @role_required(Role.ADMIN, Role.STAFF)
    def api_invoice_detail(invoice_id: int):
        try:
            return jsonify({"success": True, "invoice": service.get_invoice(current_org_id(), invoice_id)}), 200
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("Failed to load invoice %s", invoice_id)
            return json_error("Failed to fetch invoice", 500)

    @app.route("/api/invoices/<int:invoice_id>/record-payment", methods=["POST"], endpoint="api_invoice_record_payment")
    @role_required(Role.ADMIN)
    def api_invoice_record_payment(invoice_id: int):
        try:
            data = request.get_json(silent=True) or {}
            try:
                method = PaymentMethod(str(data.get("method", "")).strip().upper())
            except ValueError:
                raise ValidationError("Payment method must be CASH, BANK_TRANSFER or CARD")
            paid_at = parse_iso_datetime(data["paid_at"]) if data.get("paid_at") else None

            org_id = current_org_id()
            service.record_payment(org_id, invoice_id, method=method, paid_at=paid_at)
            return jsonify({"success": True, "invoice": service.get_invoice(org_id, invoice_id)}), 200
        except NotFoundError as e:
            return json_error(str(e), 404)
        except DomainError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Failed to record payment for invoice %s", invoice_id)
            return json_error("Failed to record payment", 500)
