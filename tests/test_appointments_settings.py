from datetime import date
from urllib.parse import unquote

import pytest

from dress_studio.domain.models import AppointmentStatus, AppointmentType
from dress_studio.services.errors import NotFoundError, ValidationError
from dress_studio.services.settings_service import (
    DEFAULT_SETTINGS,
    FITTING_TEMPLATE_KEY,
    RETURN_TEMPLATE_KEY,
)

TODAY = date(2024, 7, 1)


@pytest.fixture
def book(services):
    def _book(appointment_date, appointment_type=AppointmentType.FITTING, **kwargs):
        return services.appointment_service.create_appointment(
            appointment_type=appointment_type,
            appointment_date=appointment_date,
            **kwargs,
        )

    return _book


class TestAppointments:
    """Fittings, pickups and returns on the studio calendar."""

    def test_create_joins_names(self, services, book, make_customer, make_dress):
        customer = make_customer(name="Noa")
        dress = make_dress(name="Gown")

        appointment = book(
            "2024-07-02", customer_id=customer.id, dress_id=dress.id, time="10:30"
        )

        assert appointment.type == AppointmentType.FITTING
        assert appointment.status == AppointmentStatus.SCHEDULED
        assert appointment.reminder_sent is False
        assert appointment.customer_name == "Noa"
        assert appointment.dress_name == "Gown"
        assert appointment.time == "10:30"

    @pytest.mark.parametrize("time", ["24:00", "9:30", "10:60", "noon"])
    def test_invalid_time(self, book, time):
        with pytest.raises(ValidationError):
            book("2024-07-02", time=time)

    def test_unknown_references(self, book):
        with pytest.raises(ValidationError):
            book("2024-07-02", customer_id=404)
        with pytest.raises(ValidationError):
            book("2024-07-02", dress_id=404)

    def test_upcoming_window(self, services, book):
        inside = book("2024-07-08", time="09:00")
        first = book("2024-07-01", time="12:00")
        book("2024-07-09")
        book("2024-06-30")

        upcoming = services.appointment_service.list_upcoming(today=TODAY)

        assert [item.id for item in upcoming] == [first.id, inside.id]

    def test_upcoming_skips_cancelled(self, services, book):
        appointment = book("2024-07-02")
        services.appointment_service.update_appointment(
            appointment.id, status=AppointmentStatus.CANCELLED
        )

        assert services.appointment_service.list_upcoming(today=TODAY) == []

    def test_today(self, services, book):
        later = book("2024-07-01", time="15:00")
        earlier = book("2024-07-01", time="09:00")
        book("2024-07-02")

        today = services.appointment_service.list_today(today=TODAY)

        assert [item.id for item in today] == [earlier.id, later.id]

    def test_reminders_due_tomorrow(self, services, book):
        due = book("2024-07-02")
        sent = book("2024-07-02")
        book("2024-07-03")
        services.appointment_service.mark_reminder_sent(sent.id)

        reminders = services.appointment_service.list_reminders_due(today=TODAY)

        assert [item.id for item in reminders] == [due.id]
        assert services.appointment_service.get_appointment(sent.id).reminder_sent is True

    def test_update_merges_fields(self, services, book, make_customer):
        customer = make_customer()
        appointment = book("2024-07-02", customer_id=customer.id, notes="bring shoes")

        updated = services.appointment_service.update_appointment(
            appointment.id,
            appointment_type=AppointmentType.PICKUP,
            appointment_date="2024-07-05",
        )

        assert updated.type == AppointmentType.PICKUP
        assert updated.date == "2024-07-05"
        assert updated.customer_id == customer.id
        assert updated.notes == "bring shoes"

    def test_update_with_none_clears_links_and_notes(
        self, services, book, make_customer, make_dress
    ):
        """Explicit None unsets the customer, dress, time and notes."""
        appointment = book(
            "2024-07-02",
            customer_id=make_customer().id,
            dress_id=make_dress().id,
            time="10:30",
            notes="bring shoes",
        )

        updated = services.appointment_service.update_appointment(
            appointment.id, customer_id=None, dress_id=None, time=None, notes=None
        )

        assert updated.customer_id is None
        assert updated.dress_id is None
        assert updated.time is None
        assert updated.notes is None
        assert updated.date == "2024-07-02"

    def test_delete(self, services, book):
        appointment = book("2024-07-02")

        services.appointment_service.delete_appointment(appointment.id)

        with pytest.raises(NotFoundError):
            services.appointment_service.get_appointment(appointment.id)
        with pytest.raises(NotFoundError):
            services.appointment_service.delete_appointment(appointment.id)

    def test_deleting_customer_keeps_appointment(self, services, book, make_customer):
        customer = make_customer()
        appointment = book("2024-07-02", customer_id=customer.id)

        services.customer_service.delete_customer(customer.id)

        assert services.appointment_service.get_appointment(appointment.id).customer_id is None


class TestReminderLinks:
    def test_appointment_reminder_uses_fitting_template(
        self, services, book, make_customer
    ):
        customer = make_customer(name="Noa", phone="050-1234567")
        appointment = book("2024-07-02", customer_id=customer.id, time="10:30")

        reminder = services.appointment_service.appointment_reminder(appointment.id)

        assert reminder.phone == "050-1234567"
        assert "Noa" in reminder.message
        assert "(2.7.2024) בשעה 10:30" in reminder.message
        assert reminder.link.startswith("https://wa.me/972501234567?text=")
        assert unquote(reminder.link.partition("?text=")[2]) == reminder.message

    def test_other_type_falls_back_to_fitting_template(self, services, book, make_customer):
        services.settings_service.set(FITTING_TEMPLATE_KEY, "fit {customer_name}")
        customer = make_customer(name="Noa")
        appointment = book(
            "2024-07-02", appointment_type=AppointmentType.OTHER, customer_id=customer.id
        )

        reminder = services.appointment_service.appointment_reminder(appointment.id)

        assert reminder.message == "fit Noa"

    def test_rental_return_reminder(self, services, make_dress, make_customer, make_rental):
        rental = make_rental(
            make_dress(name="Gown"), make_customer(name="Noa"), "2024-07-01", "2024-07-03"
        )

        reminder = services.appointment_service.rental_reminder(rental.id)

        assert "3.7.2024" in reminder.message
        assert '"Gown"' in reminder.message

    def test_rental_pickup_reminder_uses_start_date(
        self, services, make_dress, make_customer, make_rental
    ):
        rental = make_rental(make_dress(), make_customer(), "2024-07-01", "2024-07-03")

        reminder = services.appointment_service.rental_reminder(rental.id, kind="pickup")

        assert "1.7.2024" in reminder.message

    def test_unknown_kind(self, services, make_dress, make_customer, make_rental):
        rental = make_rental(make_dress(), make_customer(), "2024-07-01", "2024-07-03")

        with pytest.raises(ValidationError):
            services.appointment_service.rental_reminder(rental.id, kind="birthday")

    def test_customer_without_phone(self, services, book, make_customer):
        customer = make_customer(phone=None)
        appointment = book("2024-07-02", customer_id=customer.id)

        with pytest.raises(ValidationError):
            services.appointment_service.appointment_reminder(appointment.id)

    def test_missing_rental(self, services):
        with pytest.raises(NotFoundError):
            services.appointment_service.rental_reminder(404)


class TestSettings:
    def test_defaults_are_returned(self, services):
        settings = services.settings_service.get_all()

        assert settings["studio_name"] == DEFAULT_SETTINGS["studio_name"]
        assert settings[RETURN_TEMPLATE_KEY] == DEFAULT_SETTINGS[RETURN_TEMPLATE_KEY]

    def test_stored_value_wins(self, services):
        services.settings_service.set("studio_name", "Maya")

        assert services.settings_service.get("studio_name") == "Maya"
        assert services.settings_service.get_all()["studio_name"] == "Maya"

    def test_set_overwrites(self, services):
        services.settings_service.set("currency", "ILS")
        services.settings_service.set("currency", "USD")

        assert services.settings_service.get("currency") == "USD"

    def test_set_many(self, services):
        services.settings_service.set_many({"a": "1", "b": "2"})

        settings = services.settings_service.get_all()
        assert settings["a"] == "1"
        assert settings["b"] == "2"

    def test_unknown_key(self, services):
        with pytest.raises(NotFoundError):
            services.settings_service.get("missing")

    def test_blank_key(self, services):
        with pytest.raises(ValidationError):
            services.settings_service.set("  ", "x")
