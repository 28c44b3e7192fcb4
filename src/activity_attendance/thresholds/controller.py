from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, json_errors
from ..container import Container
from .editor import parse_edit


def register(app: Flask, container: Container) -> None:
    service = container.threshold_service

    @app.route("/api/activities/<activity_id>/thresholds", methods=["GET"], endpoint="api_thresholds_get")
    @json_errors
    def get_thresholds(activity_id: str):
        return jsonify({"success": True, "thresholds": service.load(activity_id).to_dict()})

    @app.route("/api/activities/<activity_id>/thresholds", methods=["PUT"], endpoint="api_thresholds_edit")
    @json_errors
    def edit_thresholds(activity_id: str):
        edit = parse_edit(json_body())
        updated = service.edit(activity_id, edit)
        return jsonify({"success": True, "thresholds": updated.to_dict()})

    @app.route("/api/activities/<activity_id>/thresholds", methods=["DELETE"], endpoint="api_thresholds_reset")
    @json_errors
    def reset_thresholds(activity_id: str):
        return jsonify({"success": True, "thresholds": service.reset(activity_id).to_dict()})
