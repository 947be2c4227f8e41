"""Domain dataclasses and enums."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class DressStatus(str, Enum):
    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"


class RentalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RentalStatus.COMPLETED, RentalStatus.CANCELLED)


class PaymentMethod(str, Enum):
    CASH = "cash"
    CREDIT = "credit"
    TRANSFER = "transfer"
    BIT = "bit"


class AppointmentType(str, Enum):
    FITTING = "fitting"
    PICKUP = "pickup"
    RETURN = "return"
    OTHER = "other"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class _Unset:
    """Marks an update argument the caller left out."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(slots=True)
class Dress:
    id: Optional[int]
    name: str
    description: Optional[str]
    size: Optional[str]
    color: Optional[str]
    rental_price: float
    image_path: Optional[str]
    status: DressStatus = DressStatus.AVAILABLE
    created_at: Optional[str] = None


@dataclass(slots=True)
class Customer:
    id: Optional[int]
    name: str
    phone: Optional[str]
    email: Optional[str]
    address: Optional[str]
    notes: Optional[str]
    created_at: Optional[str] = None


@dataclass(slots=True)
class Rental:
    id: Optional[int]
    dress_id: int
    customer_id: int
    start_date: str
    end_date: str
    total_price: float
    deposit: float
    status: RentalStatus
    notes: Optional[str]
    created_at: Optional[str] = None
    dress_name: Optional[str] = None
    dress_image: Optional[str] = None
    dress_color: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None


@dataclass(slots=True)
class Payment:
    id: Optional[int]
    rental_id: int
    amount: float
    payment_date: str
    method: Optional[str]
    notes: Optional[str]
    created_at: Optional[str] = None
    customer_name: Optional[str] = None
    dress_name: Optional[str] = None


@dataclass(slots=True)
class Appointment:
    id: Optional[int]
    customer_id: Optional[int]
    dress_id: Optional[int]
    type: AppointmentType
    date: str
    time: Optional[str]
    notes: Optional[str]
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    reminder_sent: bool = False
    created_at: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    dress_name: Optional[str] = None


@dataclass(slots=True)
class RentalDetail:
    """A rental together with the payments recorded against it."""

    rental: Rental
    payments: list[Payment] = field(default_factory=list)
