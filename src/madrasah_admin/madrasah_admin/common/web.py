from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def role_required(*roles: Role):
    """Allow only signed-in users whose session role is one of `roles`.

    Org-scoped roles must also carry an org_id in the session.
    """
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return json_error("Unauthorized", 401)
            if session.get("role") not in allowed:
                return json_error("Forbidden", 403)
            if session.get("role") != Role.OWNER.value and not session.get("org_id"):
                return json_error("No organisation selected", 401)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_org_id() -> str:
    return str(session["org_id"])
