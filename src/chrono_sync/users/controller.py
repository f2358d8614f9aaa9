from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..common.web import login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .model import User


def user_to_json(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "department": user.department,
        "position": user.position,
        "avatar_url": user.avatar_url,
        "theme_color": user.theme_color,
        "is_dark_mode": user.is_dark_mode,
    }


def register(app: Flask, container: Container) -> None:
    auth = login_required(container.user_service)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or request.form
        user = container.auth_service.login(data.get("email", ""))
        return jsonify({"success": True, "message": "Signed in", "user": user_to_json(user)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        # No-op success when nobody is signed in.
        container.auth_service.logout()
        return jsonify({"success": True, "message": "Signed out"})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @auth
    def me():
        return jsonify(
            {
                "success": True,
                "user": user_to_json(g.user),
                "settings": container.user_service.settings.as_dict(),
            }
        )

    @app.route("/api/preferences", methods=["GET", "POST"], endpoint="preferences")
    def preferences():
        # Works signed out too: the login screen follows the machine settings.
        users = container.user_service
        if request.method == "POST":
            data = request.get_json(silent=True) or {}
            if "theme_color" in data:
                users.set_theme(str(data["theme_color"] or ""))
            if "is_dark_mode" in data:
                if not isinstance(data["is_dark_mode"], bool):
                    raise ValidationError("is_dark_mode must be true or false")
                users.set_dark_mode(data["is_dark_mode"])
        return jsonify({"success": True, "settings": users.settings.as_dict()})
