"""Request schemas validated at the HTTP boundary."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from dress_studio.domain.models import (
    AppointmentStatus,
    AppointmentType,
    DressStatus,
    PaymentMethod,
    RentalStatus,
)


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class DressIn(BaseModel):
    name: str = Field(..., description="Display name")
    description: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    rental_price: float = Field(
        0.0,
        ge=0,
        validation_alias=AliasChoices("rental_price", "price_per_day"),
    )
    image_path: Optional[str] = None
    status: Optional[DressStatus] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _strip_required(value)


class CustomerIn(BaseModel):
    name: str = Field(..., description="Full name")
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _strip_required(value)


class RentalCreate(BaseModel):
    dress_id: int
    customer_id: int
    start_date: dt.date
    end_date: dt.date
    total_price: float = Field(..., ge=0)
    deposit: float = Field(0.0, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_range(self) -> "RentalCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class RentalUpdate(BaseModel):
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    total_price: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    status: Optional[RentalStatus] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_range(self) -> "RentalUpdate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PaymentIn(BaseModel):
    rental_id: int
    amount: float = Field(..., gt=0)
    payment_date: dt.date = Field(default_factory=dt.date.today)
    method: Optional[PaymentMethod] = None
    notes: Optional[str] = None


class PaymentUpdate(BaseModel):
    amount: float = Field(..., gt=0)
    payment_date: dt.date
    method: Optional[PaymentMethod] = None
    notes: Optional[str] = None


class AppointmentIn(BaseModel):
    customer_id: Optional[int] = None
    dress_id: Optional[int] = None
    type: AppointmentType
    date: dt.date
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    customer_id: Optional[int] = None
    dress_id: Optional[int] = None
    type: Optional[AppointmentType] = None
    date: Optional[dt.date] = None
    time: Optional[str] = Field(None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    notes: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    reminder_sent: Optional[bool] = None


class SettingValue(BaseModel):
    value: Optional[str] = None
