"""Repositories for data access."""

from dress_studio.repositories.appointment_repo import AppointmentRepo
from dress_studio.repositories.customer_repo import CustomerRepo
from dress_studio.repositories.dress_repo import DressRepo
from dress_studio.repositories.mappers import (
    appointment_from_row,
    appointment_to_record,
    customer_from_row,
    customer_to_record,
    dress_from_row,
    dress_to_record,
    payment_from_row,
    payment_to_record,
    rental_detail_to_record,
    rental_from_row,
    rental_to_record,
)
from dress_studio.repositories.payment_repo import PaymentRepository
from dress_studio.repositories.rental_repo import RentalRepository
from dress_studio.repositories.report_repo import ReportRepository
from dress_studio.repositories.settings_repo import SettingsRepo

__all__ = [
    "AppointmentRepo",
    "appointment_from_row",
    "appointment_to_record",
    "CustomerRepo",
    "customer_from_row",
    "customer_to_record",
    "DressRepo",
    "dress_from_row",
    "dress_to_record",
    "payment_from_row",
    "payment_to_record",
    "PaymentRepository",
    "rental_detail_to_record",
    "rental_from_row",
    "rental_to_record",
    "RentalRepository",
    "ReportRepository",
    "SettingsRepo",
]
