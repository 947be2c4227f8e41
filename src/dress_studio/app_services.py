"""Service container shared by the HTTP layer and scripts."""

from __future__ import annotations

from dataclasses import dataclass

from dress_studio.config import StudioConfig
from dress_studio.db.storage import Storage
from dress_studio.services.appointment_service import AppointmentService
from dress_studio.services.customer_service import CustomerService
from dress_studio.services.inventory_service import InventoryService
from dress_studio.services.payment_service import PaymentService
from dress_studio.services.rental_service import RentalService
from dress_studio.services.report_service import ReportService
from dress_studio.services.settings_service import SettingsService


@dataclass(frozen=True)
class AppServices:
    """Shared services for dependency injection."""

    config: StudioConfig
    storage: Storage
    inventory_service: InventoryService
    customer_service: CustomerService
    rental_service: RentalService
    payment_service: PaymentService
    report_service: ReportService
    appointment_service: AppointmentService
    settings_service: SettingsService


def build_services(storage: Storage, config: StudioConfig) -> AppServices:
    inventory_service = InventoryService(storage)
    settings_service = SettingsService(storage)
    return AppServices(
        config=config,
        storage=storage,
        inventory_service=inventory_service,
        customer_service=CustomerService(storage),
        rental_service=RentalService(
            storage,
            inventory=inventory_service,
            strict_update_overlap=config.strict_update_overlap,
            strict_release=config.strict_release,
            upcoming_days=config.upcoming_days,
        ),
        payment_service=PaymentService(storage),
        report_service=ReportService(storage),
        appointment_service=AppointmentService(
            storage,
            settings=settings_service,
            country_code=config.country_code,
            upcoming_days=config.upcoming_days,
        ),
        settings_service=settings_service,
    )
