from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, api_errors, json_body
from ..container import Container
from .model import ArtType


def to_json(art: ArtType) -> dict:
    return {
        "id": art.art_type_id,
        "label": art.label,
        "points": art.points,
        "order": art.order,
        "isVariation": art.is_variation,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/art-types", methods=["GET"], endpoint="art_types_list")
    @api_errors("Erro ao buscar tipos de arte")
    def list_art_types():
        return jsonify([to_json(a) for a in container.art_type_service.list_art_types()])

    @app.route("/api/art-types", methods=["POST"], endpoint="art_types_create")
    @admin_required
    @api_errors("Erro ao criar tipo de arte")
    def create_art_type():
        data = json_body()
        art = container.art_type_service.create(
            label=data.get("label", ""),
            points=data.get("points"),
            is_variation=data.get("isVariation"),
        )
        return jsonify(to_json(art))

    @app.route("/api/art-types/reorder", methods=["PUT"], endpoint="art_types_reorder")
    @admin_required
    @api_errors("Erro ao reordenar")
    def reorder_art_types():
        container.art_type_service.reorder(json_body().get("artTypes"))
        return jsonify({"success": True})

    @app.route("/api/art-types/<art_type_id>", methods=["PUT"], endpoint="art_types_update")
    @admin_required
    @api_errors("Erro ao atualizar tipo de arte")
    def update_art_type(art_type_id: str):
        data = json_body()
        container.art_type_service.update(
            art_type_id,
            label=data.get("label"),
            points=data.get("points"),
            order=data.get("order"),
            is_variation=data.get("isVariation"),
        )
        return jsonify({"success": True})

    @app.route("/api/art-types/<art_type_id>", methods=["DELETE"], endpoint="art_types_delete")
    @admin_required
    @api_errors("Erro ao remover tipo de arte")
    def delete_art_type(art_type_id: str):
        container.art_type_service.delete(art_type_id)
        return jsonify({"success": True})
