from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import api_errors, json_body, login_required
from ..container import Container
from .model import Demand, DemandItem


def item_to_json(item: DemandItem) -> dict:
    return {
        "artTypeId": item.art_type_id,
        "artTypeLabel": item.art_type_label,
        "pointsPerUnit": item.points_per_unit,
        "quantity": item.quantity,
        "variationQuantity": item.variation_quantity,
        "variationPoints": item.variation_points,
        "totalPoints": item.total_points,
        "isVariation": item.is_variation,
    }


def to_json(demand: Demand) -> dict:
    return {
        "id": demand.demand_id,
        "userId": demand.user_id,
        "userName": demand.user_name,
        "items": [item_to_json(i) for i in demand.items],
        "totalQuantity": demand.total_quantity,
        "totalPoints": demand.total_points,
        "timestamp": demand.timestamp,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/demands", methods=["GET"], endpoint="demands_list")
    @api_errors("Erro ao buscar demandas")
    def list_demands():
        demands = container.demand_service.list_demands(
            user_id=request.args.get("userId"),
            start_ms=request.args.get("startDate"),
            end_ms=request.args.get("endDate"),
        )
        return jsonify([to_json(d) for d in demands])

    @app.route("/api/demands", methods=["POST"], endpoint="demands_create")
    @login_required
    @api_errors("Erro ao criar demanda")
    def create_demand():
        data = json_body()
        demand = container.demand_service.create_demand(
            user_id=data.get("userId") or "",
            user_name=data.get("userName"),
            items=data.get("items"),
        )
        return jsonify(to_json(demand))

    @app.route("/api/demands/<demand_id>", methods=["DELETE"], endpoint="demands_delete")
    @login_required
    @api_errors("Erro ao remover demanda")
    def delete_demand(demand_id: str):
        container.demand_service.delete_demand(demand_id)
        return jsonify({"success": True})
