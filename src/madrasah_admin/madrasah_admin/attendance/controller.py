from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_org_id, json_error, role_required
from ..core.enums import Role
from ..core.exceptions import EmptyRosterError, NotFoundError, ValidationError
from .model import RosterEntry
from .reconciler import coerce_clock, coerce_marked_status

logger = logging.getLogger(__name__)


def register(app: Flask, container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/class/<class_id>", methods=["GET"], endpoint="api_class_attendance")
    @role_required(Role.ADMIN, Role.STAFF)
    def api_class_attendance(class_id: str):
        try:
            date_param = request.args.get("date")
            if not date_param:
                raise ValidationError("Date parameter is required")
            on_date = parse_iso_date(date_param)

            org_id = current_org_id()
            klass = service.get_class(org_id, class_id)
            roster = service.load_roster(org_id, class_id, on_date)
            return jsonify(service.to_ui(klass, roster)), 200
        except ValidationError as e:
            return json_error(str(e), 400)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("Failed to fetch attendance for class %s", class_id)
            return json_error("Failed to fetch attendance", 500)

    @app.route("/api/attendance/bulk", methods=["POST"], endpoint="api_attendance_bulk")
    @role_required(Role.ADMIN, Role.STAFF)
    def api_attendance_bulk():
        try:
            data = request.get_json(silent=True) or {}
            class_id = str(data.get("classId") or "").strip()
            if not class_id:
                raise ValidationError("classId is required")
            on_date = parse_iso_date(str(data.get("date") or ""))

            roster = [
                RosterEntry(
                    student_id=str(item["studentId"]),
                    status=coerce_marked_status(item.get("status")),
                    time=coerce_clock(item.get("time")),
                )
                for item in data.get("attendance") or []
            ]

            org_id = current_org_id()
            fresh = service.save_roster(org_id, class_id, on_date, roster)
            klass = service.get_class(org_id, class_id)
            return jsonify({"success": True, **service.to_ui(klass, fresh)}), 200
        except EmptyRosterError as e:
            return json_error(str(e), 400)
        except (ValidationError, KeyError, TypeError) as e:
            message = str(e) if isinstance(e, ValidationError) else "Invalid attendance payload"
            return json_error(message, 400)
        except NotFoundError as e:
            return json_error(str(e), 404)
        except Exception:
            logger.exception("Bulk attendance save failed")
            return json_error("Failed to update attendance", 500)
