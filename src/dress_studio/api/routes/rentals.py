"""Rental booking and lifecycle endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from dress_studio.api.deps import get_services, parse_body, provided
from dress_studio.api.schemas import RentalCreate, RentalUpdate
from dress_studio.repositories.mappers import rental_detail_to_record, rental_to_record

rentals_bp = Blueprint("rentals", __name__, url_prefix="/api/rentals")


@rentals_bp.route("", methods=["GET"])
def list_rentals():
    rentals = get_services().rental_service.list_rentals()
    return jsonify([rental_to_record(rental) for rental in rentals])


@rentals_bp.route("/active", methods=["GET"])
def list_active():
    rentals = get_services().rental_service.list_active()
    return jsonify([rental_to_record(rental) for rental in rentals])


@rentals_bp.route("/upcoming", methods=["GET"])
def list_upcoming_returns():
    rentals = get_services().rental_service.list_upcoming_returns(
        window_days=request.args.get("days", type=int)
    )
    return jsonify([rental_to_record(rental) for rental in rentals])


@rentals_bp.route("/<int:rental_id>", methods=["GET"])
def get_rental(rental_id: int):
    detail = get_services().rental_service.get_rental(rental_id)
    return jsonify(rental_detail_to_record(detail))


@rentals_bp.route("", methods=["POST"])
def create_rental():
    body = parse_body(RentalCreate)
    rental = get_services().rental_service.create_rental(
        dress_id=body.dress_id,
        customer_id=body.customer_id,
        start_date=body.start_date,
        end_date=body.end_date,
        total_price=body.total_price,
        deposit=body.deposit,
        notes=body.notes,
    )
    return jsonify(rental_to_record(rental)), 201


@rentals_bp.route("/<int:rental_id>", methods=["PUT"])
def update_rental(rental_id: int):
    body = parse_body(RentalUpdate)
    rental = get_services().rental_service.update_rental(
        rental_id,
        start_date=body.start_date,
        end_date=body.end_date,
        total_price=body.total_price,
        deposit=body.deposit,
        status=body.status,
        notes=provided(body, "notes"),
    )
    return jsonify(rental_to_record(rental))


@rentals_bp.route("/<int:rental_id>", methods=["DELETE"])
def delete_rental(rental_id: int):
    get_services().rental_service.delete_rental(rental_id)
    return jsonify({"message": "Rental deleted"})


@rentals_bp.route("/<int:rental_id>/reminder-link", methods=["GET"])
def rental_reminder_link(rental_id: int):
    reminder = get_services().appointment_service.rental_reminder(
        rental_id, kind=request.args.get("kind", "return")
    )
    return jsonify(reminder.to_record())
