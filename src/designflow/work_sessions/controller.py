from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import api_errors, json_body, login_required
from ..container import Container
from .model import WorkSession


def to_json(s: WorkSession) -> dict:
    return {"id": s.session_id, "userId": s.user_id, "timestamp": s.timestamp}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/work-sessions", methods=["GET"], endpoint="work_sessions_list")
    @api_errors("Erro ao buscar sessões")
    def list_sessions():
        sessions = container.work_session_service.list_sessions(
            user_id=request.args.get("userId"),
            start_ms=request.args.get("startDate"),
            end_ms=request.args.get("endDate"),
        )
        return jsonify([to_json(s) for s in sessions])

    @app.route("/api/work-sessions", methods=["POST"], endpoint="work_sessions_create")
    @login_required
    @api_errors("Erro ao criar sessão")
    def clock_in():
        session = container.work_session_service.clock_in(json_body().get("userId") or "")
        return jsonify(to_json(session))
