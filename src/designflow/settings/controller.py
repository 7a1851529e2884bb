from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, api_errors, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/settings", methods=["GET"], endpoint="settings_get")
    @api_errors("Erro ao buscar configurações")
    def get_settings():
        s = container.settings_service.get_settings()
        if s is None:
            return jsonify({})
        return jsonify(
            {
                "logoUrl": s.logo_url,
                "brandTitle": s.brand_title,
                "loginSubtitle": s.login_subtitle,
                "variationPoints": s.variation_points,
            }
        )

    @app.route("/api/settings", methods=["PUT"], endpoint="settings_update")
    @admin_required
    @api_errors("Erro ao atualizar configurações")
    def update_settings():
        data = json_body()
        container.settings_service.update(
            logo_url=data.get("logoUrl"),
            brand_title=data.get("brandTitle"),
            login_subtitle=data.get("loginSubtitle"),
            variation_points=data.get("variationPoints"),
        )
        return jsonify({"success": True})
