"""Payment ledger endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify

from dress_studio.api.deps import get_services, parse_body
from dress_studio.api.schemas import PaymentIn, PaymentUpdate
from dress_studio.repositories.mappers import payment_to_record

payments_bp = Blueprint("payments", __name__, url_prefix="/api/payments")


@payments_bp.route("", methods=["GET"])
def list_payments():
    payments = get_services().payment_service.list_payments()
    return jsonify([payment_to_record(payment) for payment in payments])


@payments_bp.route("/rental/<int:rental_id>", methods=["GET"])
def list_for_rental(rental_id: int):
    payments = get_services().payment_service.list_for_rental(rental_id)
    return jsonify([payment_to_record(payment) for payment in payments])


@payments_bp.route("", methods=["POST"])
def record_payment():
    body = parse_body(PaymentIn)
    payment = get_services().payment_service.record_payment(
        rental_id=body.rental_id,
        amount=body.amount,
        payment_date=body.payment_date,
        method=body.method.value if body.method else None,
        notes=body.notes,
    )
    return jsonify(payment_to_record(payment)), 201


@payments_bp.route("/<int:payment_id>", methods=["PUT"])
def update_payment(payment_id: int):
    body = parse_body(PaymentUpdate)
    payment = get_services().payment_service.update_payment(
        payment_id,
        amount=body.amount,
        payment_date=body.payment_date,
        method=body.method.value if body.method else None,
        notes=body.notes,
    )
    return jsonify(payment_to_record(payment))


@payments_bp.route("/<int:payment_id>", methods=["DELETE"])
def delete_payment(payment_id: int):
    get_services().payment_service.delete_payment(payment_id)
    return jsonify({"message": "Payment deleted"})
