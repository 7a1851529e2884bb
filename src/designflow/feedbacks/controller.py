from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, api_errors, json_body, login_required
from ..container import Container
from .model import Feedback


def to_json(f: Feedback) -> dict:
    out = {
        "id": f.feedback_id,
        "designerId": f.designer_id,
        "designerName": f.designer_name,
        "adminName": f.admin_name,
        "imageUrls": list(f.image_urls),
        "comment": f.comment,
        "createdAt": f.created_at,
        "viewed": f.viewed,
    }
    if f.viewed_at is not None:
        out["viewedAt"] = f.viewed_at
    return out


def register(app: Flask, container: Container) -> None:
    @app.route("/api/feedbacks", methods=["GET"], endpoint="feedbacks_list")
    @api_errors("Erro ao buscar feedbacks")
    def list_feedbacks():
        items = container.feedback_service.list_feedbacks(designer_id=request.args.get("designerId"))
        return jsonify([to_json(f) for f in items])

    @app.route("/api/feedbacks", methods=["POST"], endpoint="feedbacks_create")
    @admin_required
    @api_errors("Erro ao criar feedback")
    def create_feedback():
        data = json_body()
        feedback = container.feedback_service.create(
            designer_id=data.get("designerId") or "",
            designer_name=data.get("designerName") or "",
            admin_name=data.get("adminName") or "",
            image_urls=data.get("imageUrls"),
            comment=data.get("comment"),
        )
        return jsonify(to_json(feedback))

    @app.route("/api/feedbacks/<feedback_id>/view", methods=["PUT"], endpoint="feedbacks_view")
    @login_required
    @api_errors("Erro ao marcar como visto")
    def mark_viewed(feedback_id: str):
        container.feedback_service.mark_viewed(feedback_id)
        return jsonify({"success": True})

    @app.route("/api/feedbacks/<feedback_id>", methods=["DELETE"], endpoint="feedbacks_delete")
    @admin_required
    @api_errors("Erro ao remover feedback")
    def delete_feedback(feedback_id: str):
        container.feedback_service.delete(feedback_id)
        return jsonify({"success": True})
