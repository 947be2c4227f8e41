"""Row mappers for domain models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict

from dress_studio.domain.models import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    Customer,
    Dress,
    DressStatus,
    Payment,
    Rental,
    RentalDetail,
    RentalStatus,
)


def _row_value(row: Mapping[str, Any], key: str) -> Any:
    return row.get(key)


def _float(value: Any) -> float:
    return float(value) if value is not None else 0.0


def dress_from_row(row: Mapping[str, Any]) -> Dress:
    return Dress(
        id=_row_value(row, "id"),
        name=row["name"],
        description=_row_value(row, "description"),
        size=_row_value(row, "size"),
        color=_row_value(row, "color"),
        rental_price=_float(_row_value(row, "rental_price")),
        image_path=_row_value(row, "image_path"),
        status=DressStatus(_row_value(row, "status") or DressStatus.AVAILABLE.value),
        created_at=_row_value(row, "created_at"),
    )


def dress_to_record(dress: Dress) -> Dict[str, Any]:
    return {
        "id": dress.id,
        "name": dress.name,
        "description": dress.description,
        "size": dress.size,
        "color": dress.color,
        "rental_price": dress.rental_price,
        "image_path": dress.image_path,
        "status": dress.status.value,
        "created_at": dress.created_at,
    }


def customer_from_row(row: Mapping[str, Any]) -> Customer:
    return Customer(
        id=_row_value(row, "id"),
        name=row["name"],
        phone=_row_value(row, "phone"),
        email=_row_value(row, "email"),
        address=_row_value(row, "address"),
        notes=_row_value(row, "notes"),
        created_at=_row_value(row, "created_at"),
    )


def customer_to_record(customer: Customer) -> Dict[str, Any]:
    return {
        "id": customer.id,
        "name": customer.name,
        "phone": customer.phone,
        "email": customer.email,
        "address": customer.address,
        "notes": customer.notes,
        "created_at": customer.created_at,
    }


def rental_from_row(row: Mapping[str, Any]) -> Rental:
    return Rental(
        id=_row_value(row, "id"),
        dress_id=row["dress_id"],
        customer_id=row["customer_id"],
        start_date=row["start_date"],
        end_date=row["end_date"],
        total_price=_float(_row_value(row, "total_price")),
        deposit=_float(_row_value(row, "deposit")),
        status=RentalStatus(_row_value(row, "status") or RentalStatus.ACTIVE.value),
        notes=_row_value(row, "notes"),
        created_at=_row_value(row, "created_at"),
        dress_name=_row_value(row, "dress_name"),
        dress_image=_row_value(row, "dress_image"),
        dress_color=_row_value(row, "dress_color"),
        customer_name=_row_value(row, "customer_name"),
        customer_phone=_row_value(row, "customer_phone"),
    )


def rental_to_record(rental: Rental) -> Dict[str, Any]:
    return {
        "id": rental.id,
        "dress_id": rental.dress_id,
        "customer_id": rental.customer_id,
        "start_date": rental.start_date,
        "end_date": rental.end_date,
        "total_price": rental.total_price,
        "deposit": rental.deposit,
        "status": rental.status.value,
        "notes": rental.notes,
        "created_at": rental.created_at,
        "dress_name": rental.dress_name,
        "dress_image": rental.dress_image,
        "dress_color": rental.dress_color,
        "customer_name": rental.customer_name,
        "customer_phone": rental.customer_phone,
    }


def payment_from_row(row: Mapping[str, Any]) -> Payment:
    return Payment(
        id=_row_value(row, "id"),
        rental_id=row["rental_id"],
        amount=_float(row["amount"]),
        payment_date=row["payment_date"],
        method=_row_value(row, "method"),
        notes=_row_value(row, "notes"),
        created_at=_row_value(row, "created_at"),
        customer_name=_row_value(row, "customer_name"),
        dress_name=_row_value(row, "dress_name"),
    )


def payment_to_record(payment: Payment) -> Dict[str, Any]:
    return {
        "id": payment.id,
        "rental_id": payment.rental_id,
        "amount": payment.amount,
        "payment_date": payment.payment_date,
        "method": payment.method,
        "notes": payment.notes,
        "created_at": payment.created_at,
        "customer_name": payment.customer_name,
        "dress_name": payment.dress_name,
    }


def rental_detail_to_record(detail: RentalDetail) -> Dict[str, Any]:
    record = rental_to_record(detail.rental)
    record["payments"] = [payment_to_record(payment) for payment in detail.payments]
    return record


def appointment_from_row(row: Mapping[str, Any]) -> Appointment:
    return Appointment(
        id=_row_value(row, "id"),
        customer_id=_row_value(row, "customer_id"),
        dress_id=_row_value(row, "dress_id"),
        type=AppointmentType(row["type"]),
        date=row["date"],
        time=_row_value(row, "time"),
        notes=_row_value(row, "notes"),
        status=AppointmentStatus(
            _row_value(row, "status") or AppointmentStatus.SCHEDULED.value
        ),
        reminder_sent=bool(_row_value(row, "reminder_sent") or 0),
        created_at=_row_value(row, "created_at"),
        customer_name=_row_value(row, "customer_name"),
        customer_phone=_row_value(row, "customer_phone"),
        dress_name=_row_value(row, "dress_name"),
    )


def appointment_to_record(appointment: Appointment) -> Dict[str, Any]:
    return {
        "id": appointment.id,
        "customer_id": appointment.customer_id,
        "dress_id": appointment.dress_id,
        "type": appointment.type.value,
        "date": appointment.date,
        "time": appointment.time,
        "notes": appointment.notes,
        "status": appointment.status.value,
        "reminder_sent": appointment.reminder_sent,
        "created_at": appointment.created_at,
        "customer_name": appointment.customer_name,
        "customer_phone": appointment.customer_phone,
        "dress_name": appointment.dress_name,
    }
