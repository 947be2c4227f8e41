"""Customer directory endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from dress_studio.api.deps import get_services, parse_body
from dress_studio.api.schemas import CustomerIn
from dress_studio.repositories.mappers import customer_to_record, rental_to_record

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.route("", methods=["GET"])
def list_customers():
    customers = get_services().customer_service.list_customers(
        search=request.args.get("search")
    )
    return jsonify([customer_to_record(customer) for customer in customers])


@customers_bp.route("/<int:customer_id>", methods=["GET"])
def get_customer(customer_id: int):
    customer = get_services().customer_service.get_customer(customer_id)
    return jsonify(customer_to_record(customer))


@customers_bp.route("/<int:customer_id>/rentals", methods=["GET"])
def customer_rentals(customer_id: int):
    rentals = get_services().customer_service.rental_history(customer_id)
    return jsonify([rental_to_record(rental) for rental in rentals])


@customers_bp.route("", methods=["POST"])
def create_customer():
    body = parse_body(CustomerIn)
    customer = get_services().customer_service.create_customer(
        name=body.name,
        phone=body.phone,
        email=body.email,
        address=body.address,
        notes=body.notes,
    )
    return jsonify(customer_to_record(customer)), 201


@customers_bp.route("/<int:customer_id>", methods=["PUT"])
def update_customer(customer_id: int):
    body = parse_body(CustomerIn)
    customer = get_services().customer_service.update_customer(
        customer_id,
        name=body.name,
        phone=body.phone,
        email=body.email,
        address=body.address,
        notes=body.notes,
    )
    return jsonify(customer_to_record(customer))


@customers_bp.route("/<int:customer_id>", methods=["DELETE"])
def delete_customer(customer_id: int):
    get_services().customer_service.delete_customer(customer_id)
    return jsonify({"message": "Customer deleted"})
