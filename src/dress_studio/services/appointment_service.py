"""Appointment scheduler and WhatsApp reminders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from dress_studio.config import DEFAULT_COUNTRY_CODE, DEFAULT_UPCOMING_DAYS
from dress_studio.db.storage import Storage
from dress_studio.domain.models import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    UNSET,
)
from dress_studio.logging_config import get_logger
from dress_studio.repositories.appointment_repo import AppointmentRepo
from dress_studio.repositories.customer_repo import CustomerRepo
from dress_studio.repositories.dress_repo import DressRepo
from dress_studio.repositories.rental_repo import RentalRepository
from dress_studio.services.errors import NotFoundError, ValidationError
from dress_studio.services.inventory_service import to_iso_date
from dress_studio.services.settings_service import (
    FITTING_TEMPLATE_KEY,
    PICKUP_TEMPLATE_KEY,
    RETURN_TEMPLATE_KEY,
    THANKYOU_TEMPLATE_KEY,
    SettingsService,
)
from dress_studio.utils.whatsapp import (
    build_whatsapp_link,
    format_display_date,
    render_template,
)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

APPOINTMENT_TEMPLATES = {
    AppointmentType.FITTING: FITTING_TEMPLATE_KEY,
    AppointmentType.PICKUP: PICKUP_TEMPLATE_KEY,
    AppointmentType.RETURN: RETURN_TEMPLATE_KEY,
    AppointmentType.OTHER: FITTING_TEMPLATE_KEY,
}

RENTAL_REMINDER_KINDS = {
    "return": RETURN_TEMPLATE_KEY,
    "pickup": PICKUP_TEMPLATE_KEY,
    "thankyou": THANKYOU_TEMPLATE_KEY,
}


@dataclass(frozen=True, slots=True)
class ReminderLink:
    phone: str
    message: str
    link: str

    def to_record(self) -> dict[str, str]:
        return {"phone": self.phone, "message": self.message, "link": self.link}


def _normalize_time(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = value.strip()
    if not _TIME_PATTERN.match(value):
        raise ValidationError(f"Invalid time: {value!r}")
    return value


class AppointmentService:
    """Fittings, pickups and returns kept as calendar entries."""

    def __init__(
        self,
        storage: Storage,
        settings: Optional[SettingsService] = None,
        country_code: str = DEFAULT_COUNTRY_CODE,
        upcoming_days: int = DEFAULT_UPCOMING_DAYS,
    ) -> None:
        self._storage = storage
        self._repo = AppointmentRepo(storage)
        self._customer_repo = CustomerRepo(storage)
        self._dress_repo = DressRepo(storage)
        self._rental_repo = RentalRepository(storage)
        self._settings = settings or SettingsService(storage)
        self._country_code = country_code
        self._upcoming_days = upcoming_days
        self._logger = get_logger(self.__class__.__name__)

    def _check_references(
        self, customer_id: Optional[int], dress_id: Optional[int]
    ) -> None:
        if customer_id is not None and not self._customer_repo.get_by_id(customer_id):
            raise ValidationError(f"Customer {customer_id} does not exist")
        if dress_id is not None and not self._dress_repo.get_by_id(dress_id):
            raise ValidationError(f"Dress {dress_id} does not exist")

    def list_appointments(self) -> list[Appointment]:
        return self._repo.list_all()

    def list_upcoming(
        self, days: Optional[int] = None, today: Optional[date] = None
    ) -> list[Appointment]:
        days = self._upcoming_days if days is None else days
        start = today or date.today()
        end = start + timedelta(days=days)
        return self._repo.list_between(start.isoformat(), end.isoformat())

    def list_today(self, today: Optional[date] = None) -> list[Appointment]:
        day = (today or date.today()).isoformat()
        return self._repo.list_between(day, day)

    def list_reminders_due(self, today: Optional[date] = None) -> list[Appointment]:
        """Scheduled appointments for tomorrow whose reminder was not sent yet."""
        tomorrow = (today or date.today()) + timedelta(days=1)
        return self._repo.list_pending_reminders(tomorrow.isoformat())

    def get_appointment(self, appointment_id: int) -> Appointment:
        appointment = self._repo.get_by_id(appointment_id)
        if not appointment:
            raise NotFoundError(f"Appointment {appointment_id} not found")
        return appointment

    def create_appointment(
        self,
        appointment_type: AppointmentType,
        appointment_date: str | date,
        customer_id: Optional[int] = None,
        dress_id: Optional[int] = None,
        time: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Appointment:
        day = to_iso_date(appointment_date)
        with self._storage.transaction():
            self._check_references(customer_id, dress_id)
            appointment_id = self._repo.create(
                customer_id,
                dress_id,
                appointment_type,
                day,
                _normalize_time(time),
                notes,
            )
        self._logger.info(
            "Appointment created id=%s type=%s date=%s",
            appointment_id,
            appointment_type.value,
            day,
        )
        return self.get_appointment(appointment_id)

    def update_appointment(
        self,
        appointment_id: int,
        appointment_type: Optional[AppointmentType] = None,
        appointment_date: Optional[str | date] = None,
        customer_id: Optional[int] = UNSET,
        dress_id: Optional[int] = UNSET,
        time: Optional[str] = UNSET,
        notes: Optional[str] = UNSET,
        status: Optional[AppointmentStatus] = None,
        reminder_sent: Optional[bool] = None,
    ) -> Appointment:
        """Edit an appointment; omitted fields keep their value.

        Passing ``None`` for the customer, dress, time or notes clears it.
        """
        with self._storage.transaction():
            current = self.get_appointment(appointment_id)
            customer_id = current.customer_id if customer_id is UNSET else customer_id
            dress_id = current.dress_id if dress_id is UNSET else dress_id
            self._check_references(customer_id, dress_id)
            self._repo.update(
                appointment_id,
                customer_id,
                dress_id,
                appointment_type or current.type,
                to_iso_date(appointment_date) if appointment_date else current.date,
                current.time if time is UNSET else _normalize_time(time),
                current.notes if notes is UNSET else notes,
                status or current.status,
                current.reminder_sent if reminder_sent is None else reminder_sent,
            )
        return self.get_appointment(appointment_id)

    def mark_reminder_sent(self, appointment_id: int) -> None:
        if not self._repo.mark_reminder_sent(appointment_id):
            raise NotFoundError(f"Appointment {appointment_id} not found")
        self._logger.info("Reminder marked sent appointment_id=%s", appointment_id)

    def delete_appointment(self, appointment_id: int) -> None:
        if not self._repo.delete(appointment_id):
            raise NotFoundError(f"Appointment {appointment_id} not found")
        self._logger.info("Appointment deleted id=%s", appointment_id)

    def _link(self, phone: Optional[str], message: str) -> ReminderLink:
        if not phone:
            raise ValidationError("Customer has no phone number")
        return ReminderLink(
            phone=phone,
            message=message,
            link=build_whatsapp_link(phone, message, self._country_code),
        )

    def appointment_reminder(self, appointment_id: int) -> ReminderLink:
        appointment = self.get_appointment(appointment_id)
        template = self._settings.template(APPOINTMENT_TEMPLATES[appointment.type])
        message = render_template(
            template,
            customer_name=appointment.customer_name,
            date=format_display_date(appointment.date),
            time=appointment.time,
            dress_name=appointment.dress_name,
        )
        return self._link(appointment.customer_phone, message)

    def rental_reminder(self, rental_id: int, kind: str = "return") -> ReminderLink:
        if kind not in RENTAL_REMINDER_KINDS:
            raise ValidationError(f"Unknown reminder kind: {kind}")
        rental = self._rental_repo.get_by_id(rental_id)
        if not rental:
            raise NotFoundError(f"Rental {rental_id} not found")
        reminder_date = rental.start_date if kind == "pickup" else rental.end_date
        message = render_template(
            self._settings.template(RENTAL_REMINDER_KINDS[kind]),
            customer_name=rental.customer_name,
            date=format_display_date(reminder_date),
            dress_name=rental.dress_name,
        )
        return self._link(rental.customer_phone, message)
