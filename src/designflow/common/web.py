"""Helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any

from flask import current_app, jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def api_errors(message: str):
    """Map domain exceptions to HTTP codes; anything else becomes a 500 with ``message``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except ValidationError as e:
                return json_error(str(e), 400)
            except AuthenticationError as e:
                return json_error(str(e), 401)
            except AuthorizationError as e:
                return json_error(str(e), 403)
            except NotFoundError as e:
                return json_error(str(e), 404)
            except Exception:
                logger.exception("%s %s failed", request.method, request.path)
                return json_error(message, 500)

        return wrapper

    return decorator


def _auth_enforced() -> bool:
    return bool(current_app.config.get("AUTH_REQUIRED", False))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _auth_enforced() and "user_id" not in session:
            return json_error("Faça login para continuar", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if _auth_enforced():
            if "user_id" not in session:
                return json_error("Faça login para continuar", 401)
            if session.get("role") != Role.ADMIN.value:
                return json_error("Você não tem permissão", 403)
        return view(*args, **kwargs)

    return wrapper
