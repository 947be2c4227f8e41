"""Dress catalog and availability endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from dress_studio.api.deps import get_services, parse_body
from dress_studio.api.schemas import DressIn
from dress_studio.repositories.mappers import dress_to_record
from dress_studio.services.errors import ValidationError

dresses_bp = Blueprint("dresses", __name__, url_prefix="/api/dresses")


@dresses_bp.route("", methods=["GET"])
def list_dresses():
    dresses = get_services().inventory_service.list_dresses()
    return jsonify([dress_to_record(dress) for dress in dresses])


@dresses_bp.route("/<int:dress_id>", methods=["GET"])
def get_dress(dress_id: int):
    dress = get_services().inventory_service.get_dress(dress_id)
    return jsonify(dress_to_record(dress))


@dresses_bp.route("/<int:dress_id>/availability", methods=["GET"])
def check_availability(dress_id: int):
    start_date = request.args.get("start_date")
    end_date = request.args.get("end_date")
    if not start_date or not end_date:
        raise ValidationError("start_date and end_date are required")
    result = get_services().rental_service.check_availability(
        dress_id, start_date, end_date
    )
    return jsonify(result.to_record())


@dresses_bp.route("", methods=["POST"])
def create_dress():
    body = parse_body(DressIn)
    dress = get_services().inventory_service.create_dress(
        name=body.name,
        description=body.description,
        size=body.size,
        color=body.color,
        rental_price=body.rental_price,
        image_path=body.image_path,
        status=body.status,
    )
    return jsonify(dress_to_record(dress)), 201


@dresses_bp.route("/<int:dress_id>", methods=["PUT"])
def update_dress(dress_id: int):
    body = parse_body(DressIn)
    dress = get_services().inventory_service.update_dress(
        dress_id,
        name=body.name,
        description=body.description,
        size=body.size,
        color=body.color,
        rental_price=body.rental_price,
        image_path=body.image_path,
        status=body.status,
    )
    return jsonify(dress_to_record(dress))


@dresses_bp.route("/<int:dress_id>", methods=["DELETE"])
def delete_dress(dress_id: int):
    get_services().inventory_service.delete_dress(dress_id)
    return jsonify({"message": "Dress deleted"})
