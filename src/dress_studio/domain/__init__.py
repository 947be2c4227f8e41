"""Domain models for DressStudio."""

from dress_studio.domain.models import (
    Appointment,
    AppointmentStatus,
    AppointmentType,
    Customer,
    Dress,
    DressStatus,
    Payment,
    PaymentMethod,
    Rental,
    RentalDetail,
    RentalStatus,
)

__all__ = [
    "Appointment",
    "AppointmentStatus",
    "AppointmentType",
    "Customer",
    "Dress",
    "DressStatus",
    "Payment",
    "PaymentMethod",
    "Rental",
    "RentalDetail",
    "RentalStatus",
]
