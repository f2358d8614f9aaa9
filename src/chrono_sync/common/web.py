from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, StorageError, ValidationError

log = logging.getLogger(__name__)


def login_required(user_service):
    """Resolve the signed-in user into `g.user`; AuthenticationError otherwise."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.user = user_service.require_user()
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return jsonify({"success": False, "message": str(e)}), 401

    @app.errorhandler(StorageError)
    def _storage(e):
        log.error("Storage failure: %s", e)
        return jsonify({"success": False, "message": "Could not save attendance data"}), 500

    @app.errorhandler(HTTPException)
    def _http(e):
        return jsonify({"success": False, "message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def _unexpected(e):
        log.exception("Unhandled error")
        return jsonify({"success": False, "message": "Internal error"}), 500
