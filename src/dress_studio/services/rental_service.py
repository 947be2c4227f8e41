"""Rental ledger: bookings, overlap checks and their effect on dress status."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional

from dress_studio.config import DEFAULT_UPCOMING_DAYS
from dress_studio.db.storage import Storage
from dress_studio.domain.models import (
    DressStatus,
    Rental,
    RentalDetail,
    RentalStatus,
    UNSET,
)
from dress_studio.logging_config import get_logger
from dress_studio.repositories.customer_repo import CustomerRepo
from dress_studio.repositories.mappers import rental_to_record
from dress_studio.repositories.payment_repo import PaymentRepository
from dress_studio.repositories.rental_repo import RentalRepository
from dress_studio.services.errors import (
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from dress_studio.services.inventory_service import InventoryService, to_iso_date

CONFLICT_MESSAGE = "dress not available in selected dates"


@dataclass(slots=True)
class AvailabilityResult:
    available: bool
    conflicts: list[Rental] = field(default_factory=list)
    bookable: bool = True

    def to_record(self) -> dict[str, object]:
        return {
            "available": self.available,
            "bookable": self.bookable,
            "conflicts": [rental_to_record(rental) for rental in self.conflicts],
        }


class RentalService:
    """Service for rental business rules.

    ``strict_update_overlap`` re-checks overlap when an update moves the
    dates; ``strict_release`` keeps a dress rented on delete or completion
    while another active rental still holds it. Both default to off.
    """

    def __init__(
        self,
        storage: Storage,
        inventory: Optional[InventoryService] = None,
        strict_update_overlap: bool = False,
        strict_release: bool = False,
        upcoming_days: int = DEFAULT_UPCOMING_DAYS,
    ) -> None:
        self._storage = storage
        self._inventory = inventory or InventoryService(storage)
        self._repo = RentalRepository(storage)
        self._customer_repo = CustomerRepo(storage)
        self._payment_repo = PaymentRepository(storage)
        self._strict_update_overlap = strict_update_overlap
        self._strict_release = strict_release
        self._upcoming_days = upcoming_days
        self._logger = get_logger(self.__class__.__name__)

    def _normalize_dates(
        self, start_date: str | date, end_date: str | date
    ) -> tuple[str, str]:
        start = to_iso_date(start_date)
        end = to_iso_date(end_date)
        if end < start:
            raise ValidationError("End date must not be before start date")
        return start, end

    def _get(self, rental_id: int) -> Rental:
        rental = self._repo.get_by_id(rental_id)
        if not rental:
            raise NotFoundError(f"Rental {rental_id} not found")
        return rental

    def check_availability(
        self,
        dress_id: int,
        start_date: str | date,
        end_date: str | date,
        exclude_rental_id: Optional[int] = None,
    ) -> AvailabilityResult:
        """Report bookings of the dress that share at least one day with the range.

        ``start_date > end_date`` is not rejected here; such a range simply
        matches nothing that does not also straddle it.
        """
        start = to_iso_date(start_date)
        end = to_iso_date(end_date)
        dress = self._inventory.get_dress(dress_id)
        conflicts = self._repo.find_conflicts(
            dress_id, start, end, exclude_rental_id=exclude_rental_id
        )
        return AvailabilityResult(
            available=not conflicts,
            conflicts=conflicts,
            bookable=not conflicts and dress.status != DressStatus.MAINTENANCE,
        )

    def create_rental(
        self,
        dress_id: int,
        customer_id: int,
        start_date: str | date,
        end_date: str | date,
        total_price: float,
        deposit: float = 0.0,
        notes: Optional[str] = None,
    ) -> Rental:
        start, end = self._normalize_dates(start_date, end_date)
        if total_price < 0 or deposit < 0:
            raise ValidationError("Price and deposit cannot be negative")
        with self._storage.transaction():
            dress = self._inventory.get_dress(dress_id)
            if not self._customer_repo.get_by_id(customer_id):
                raise NotFoundError(f"Customer {customer_id} not found")
            if dress.status == DressStatus.MAINTENANCE:
                raise ConflictError("dress is under maintenance")
            if self._repo.find_conflicts(dress_id, start, end):
                self._logger.info(
                    "Rental rejected dress_id=%s %s..%s: overlap",
                    dress_id,
                    start,
                    end,
                )
                raise ConflictError(CONFLICT_MESSAGE)
            rental_id = self._repo.create(
                dress_id,
                customer_id,
                start,
                end,
                total_price,
                deposit,
                notes,
            )
            self._inventory.mark_rented(dress_id)
        self._logger.info(
            "Rental created id=%s dress_id=%s customer_id=%s %s..%s",
            rental_id,
            dress_id,
            customer_id,
            start,
            end,
        )
        return self._get(rental_id)

    def update_rental(
        self,
        rental_id: int,
        start_date: Optional[str | date] = None,
        end_date: Optional[str | date] = None,
        total_price: Optional[float] = None,
        deposit: Optional[float] = None,
        status: Optional[RentalStatus] = None,
        notes: Optional[str] = UNSET,
    ) -> Rental:
        """Apply an edit or a status transition; omitted fields keep their value.

        ``None`` also keeps the current value, except for ``notes`` where it
        clears them.

        ``completed`` and ``cancelled`` are terminal. Moving from ``active``
        into either one releases the dress.
        """
        with self._storage.transaction():
            current = self._get(rental_id)
            new_status = status or current.status
            if current.status.is_terminal and new_status != current.status:
                raise InvalidTransitionError(
                    f"Rental {rental_id} is {current.status.value} and cannot become "
                    f"{new_status.value}"
                )
            start, end = self._normalize_dates(
                start_date or current.start_date,
                end_date or current.end_date,
            )
            new_total = current.total_price if total_price is None else total_price
            new_deposit = current.deposit if deposit is None else deposit
            if new_total < 0 or new_deposit < 0:
                raise ValidationError("Price and deposit cannot be negative")
            dates_changed = (start, end) != (current.start_date, current.end_date)
            if (
                self._strict_update_overlap
                and dates_changed
                and new_status != RentalStatus.CANCELLED
                and self._repo.find_conflicts(
                    current.dress_id, start, end, exclude_rental_id=rental_id
                )
            ):
                raise ConflictError(CONFLICT_MESSAGE)
            updated = self._repo.update(
                rental_id,
                start,
                end,
                new_total,
                new_deposit,
                new_status,
                current.notes if notes is UNSET else notes,
            )
            if not updated:
                raise NotFoundError(f"Rental {rental_id} not found")
            if new_status != current.status and new_status.is_terminal:
                self._inventory.release(
                    current.dress_id,
                    strict=self._strict_release,
                    exclude_rental_id=rental_id,
                )
        if new_status != current.status:
            self._logger.info(
                "Rental %s id=%s", new_status.value, rental_id
            )
        return self._get(rental_id)

    def complete_rental(self, rental_id: int) -> Rental:
        return self.update_rental(rental_id, status=RentalStatus.COMPLETED)

    def cancel_rental(self, rental_id: int) -> Rental:
        return self.update_rental(rental_id, status=RentalStatus.CANCELLED)

    def delete_rental(self, rental_id: int) -> None:
        """Delete a rental with its payments and free the dress."""
        with self._storage.transaction():
            rental = self._get(rental_id)
            self._inventory.release(
                rental.dress_id,
                strict=self._strict_release,
                exclude_rental_id=rental_id,
            )
            removed_payments = self._payment_repo.delete_by_rental(rental_id)
            self._repo.delete(rental_id)
        self._logger.info(
            "Rental deleted id=%s dress_id=%s payments_removed=%s",
            rental_id,
            rental.dress_id,
            removed_payments,
        )

    def get_rental(self, rental_id: int) -> RentalDetail:
        rental = self._get(rental_id)
        return RentalDetail(
            rental=rental,
            payments=self._payment_repo.list_by_rental(rental_id),
        )

    def list_rentals(self) -> list[Rental]:
        return self._repo.list_all()

    def list_active(self) -> list[Rental]:
        return self._repo.list_active()

    def list_upcoming_returns(
        self,
        window_days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> list[Rental]:
        days = self._upcoming_days if window_days is None else window_days
        if days < 0:
            raise ValidationError("Window must not be negative")
        start = today or date.today()
        end = start + timedelta(days=days)
        return self._repo.list_active_ending_between(start.isoformat(), end.isoformat())

    def list_for_customer(self, customer_id: int) -> list[Rental]:
        return self._repo.list_by_customer(customer_id)
