"""Studio settings and message template endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from dress_studio.api.deps import get_services, parse_body
from dress_studio.api.schemas import SettingValue
from dress_studio.services.errors import ValidationError

settings_bp = Blueprint("settings", __name__, url_prefix="/api/settings")


@settings_bp.route("", methods=["GET"])
def get_settings():
    return jsonify(get_services().settings_service.get_all())


@settings_bp.route("/bulk", methods=["POST"])
def update_bulk():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Expected a JSON object of settings")
    values = {
        str(key): None if value is None else str(value)
        for key, value in payload.items()
    }
    get_services().settings_service.set_many(values)
    return jsonify({"success": True})


@settings_bp.route("/<key>", methods=["GET"])
def get_setting(key: str):
    value = get_services().settings_service.get(key)
    return jsonify({"key": key, "value": value})


@settings_bp.route("/<key>", methods=["PUT"])
def update_setting(key: str):
    body = parse_body(SettingValue)
    value = get_services().settings_service.set(key, body.value)
    return jsonify({"key": key, "value": value})
