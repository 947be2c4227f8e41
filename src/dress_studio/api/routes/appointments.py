"""Appointment calendar and reminder endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from dress_studio.api.deps import get_services, parse_body, provided
from dress_studio.api.schemas import AppointmentIn, AppointmentUpdate
from dress_studio.repositories.mappers import appointment_to_record

appointments_bp = Blueprint("appointments", __name__, url_prefix="/api/appointments")


def _records(appointments):
    return jsonify([appointment_to_record(item) for item in appointments])


@appointments_bp.route("", methods=["GET"])
def list_appointments():
    return _records(get_services().appointment_service.list_appointments())


@appointments_bp.route("/upcoming", methods=["GET"])
def list_upcoming():
    return _records(
        get_services().appointment_service.list_upcoming(
            days=request.args.get("days", type=int)
        )
    )


@appointments_bp.route("/today", methods=["GET"])
def list_today():
    return _records(get_services().appointment_service.list_today())


@appointments_bp.route("/reminders", methods=["GET"])
def list_reminders():
    return _records(get_services().appointment_service.list_reminders_due())


@appointments_bp.route("/<int:appointment_id>", methods=["GET"])
def get_appointment(appointment_id: int):
    appointment = get_services().appointment_service.get_appointment(appointment_id)
    return jsonify(appointment_to_record(appointment))


@appointments_bp.route("", methods=["POST"])
def create_appointment():
    body = parse_body(AppointmentIn)
    appointment = get_services().appointment_service.create_appointment(
        appointment_type=body.type,
        appointment_date=body.date,
        customer_id=body.customer_id,
        dress_id=body.dress_id,
        time=body.time,
        notes=body.notes,
    )
    return jsonify(appointment_to_record(appointment)), 201


@appointments_bp.route("/<int:appointment_id>", methods=["PUT"])
def update_appointment(appointment_id: int):
    body = parse_body(AppointmentUpdate)
    appointment = get_services().appointment_service.update_appointment(
        appointment_id,
        appointment_type=body.type,
        appointment_date=body.date,
        customer_id=provided(body, "customer_id"),
        dress_id=provided(body, "dress_id"),
        time=provided(body, "time"),
        notes=provided(body, "notes"),
        status=body.status,
        reminder_sent=body.reminder_sent,
    )
    return jsonify(appointment_to_record(appointment))


@appointments_bp.route("/<int:appointment_id>/reminder-sent", methods=["POST"])
def mark_reminder_sent(appointment_id: int):
    get_services().appointment_service.mark_reminder_sent(appointment_id)
    return jsonify({"success": True})


@appointments_bp.route("/<int:appointment_id>/reminder-link", methods=["GET"])
def reminder_link(appointment_id: int):
    reminder = get_services().appointment_service.appointment_reminder(appointment_id)
    return jsonify(reminder.to_record())


@appointments_bp.route("/<int:appointment_id>", methods=["DELETE"])
def delete_appointment(appointment_id: int):
    get_services().appointment_service.delete_appointment(appointment_id)
    return jsonify({"message": "Appointment deleted"})
