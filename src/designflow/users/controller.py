from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, api_errors, json_body, json_error
from ..container import Container
from .model import User


def to_json(user: User) -> dict:
    return {
        "id": user.user_id,
        "name": user.name,
        "role": user.role.value,
        "avatarUrl": user.avatar_url,
        "avatarColor": user.avatar_color,
        "active": user.active,
    }


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes"}


def register(app: Flask, container: Container) -> None:
    # ============ AUTH ============
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    @api_errors("Erro interno")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("name", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["role"] = user.role.value
        return jsonify(to_json(user))

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @api_errors("Erro interno")
    def me():
        if "user_id" not in session:
            return json_error("Não autenticado", 401)
        return jsonify(to_json(container.user_service.get_user(session["user_id"])))

    @app.route("/api/auth/change-password", methods=["PUT"], endpoint="auth_change_password")
    @api_errors("Erro ao alterar senha")
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            user_id=data.get("userId") or "",
            old_password=data.get("oldPassword") or "",
            new_password=data.get("newPassword") or "",
        )
        return jsonify({"success": True, "message": "Senha alterada com sucesso"})

    # ============ USERS ============
    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @api_errors("Erro ao buscar usuários")
    def list_users():
        return jsonify([to_json(u) for u in container.user_service.list_users()])

    @app.route("/api/users/designers", methods=["GET"], endpoint="users_designers")
    @api_errors("Erro ao buscar designers")
    def list_designers():
        return jsonify([to_json(u) for u in container.user_service.list_designers()])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    @api_errors("Erro ao criar usuário")
    def create_user():
        data = json_body()
        user = container.user_service.create_user(
            name=data.get("name", ""),
            password=data.get("password"),
            role=data.get("role"),
            avatar_color=data.get("avatarColor"),
            avatar_url=data.get("avatarUrl"),
        )
        return jsonify(to_json(user))

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    @api_errors("Erro ao atualizar usuário")
    def update_user(user_id: str):
        data = json_body()
        container.user_service.update_user(
            user_id,
            name=data.get("name"),
            password=data.get("password"),
            active=data.get("active"),
            avatar_color=data.get("avatarColor"),
            avatar_url=data.get("avatarUrl"),
        )
        return jsonify({"success": True})

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    @api_errors("Erro ao remover usuário")
    def delete_user(user_id: str):
        container.user_service.delete_user(user_id, cascade=_flag(request.args.get("cascade")))
        return jsonify({"success": True})
