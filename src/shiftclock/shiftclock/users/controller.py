from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import current_user, login_required, manager_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.permanent = bool(data.get("remember"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.display_name
        session["role"] = s_user.role.value
        return jsonify({"success": True, "user": {"id": s_user.user_id, "name": s_user.display_name, "role": s_user.role.value}})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/register", methods=["POST"], endpoint="register")
    def register_user():
        data = request.get_json(silent=True) or {}
        user_id = container.user_service.register(
            email=data.get("email", ""),
            name=data.get("name"),
            password=data.get("password", ""),
        )
        return jsonify({"success": True, "id": user_id}), 201

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        user = container.user_service.get(current_user().user_id)
        return jsonify(user.as_dict())

    @app.route("/api/me", methods=["PUT"], endpoint="me_update")
    @login_required
    def me_update():
        data = request.get_json(silent=True) or {}
        role = data.get("role")
        try:
            role = Role(role) if role else None
        except ValueError:
            raise ValidationError(f"Unknown role: {role!r}") from None

        me = current_user()
        user = container.user_service.update_profile(current=me, user_id=me.user_id, name=data.get("name"), role=role)
        session["name"] = user.display_name
        session["role"] = user.role.value
        return jsonify(user.as_dict())

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @manager_required
    def users_list():
        return jsonify([u.as_dict() for u in container.user_service.list_users()])
