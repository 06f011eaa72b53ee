from __future__ import annotations

import logging
from functools import wraps
from typing import Tuple

from flask import Flask, jsonify, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ConfigurationMissing, InvalidInput

logger = logging.getLogger(__name__)


def current_viewer() -> Tuple[str, Role]:
    """(user_id, role) of the signed-in user.

    The session is filled by the identity provider's login flow.
    """
    try:
        return str(session["user_id"]), Role(session["role"])
    except (KeyError, ValueError):
        raise AuthorizationError("unknown session role") from None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Login required"}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Login required"}), 401
        if session.get("role") != Role.ADMIN.value:
            return jsonify({"success": False, "message": "Admin only"}), 403
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(InvalidInput)
    def _invalid_input(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def _forbidden(e):
        return jsonify({"success": False, "message": str(e)}), 403

    @app.errorhandler(ConfigurationMissing)
    def _not_configured(e):
        logger.error("[attendance] %s", e)
        return jsonify({"success": False, "message": str(e)}), 503
