"""Dress catalog and availability status rules."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Dress, DressStatus, RentalStatus
from dress_studio.logging_config import get_logger
from dress_studio.repositories.dress_repo import DressRepo
from dress_studio.repositories.rental_repo import RentalRepository
from dress_studio.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    ReferentialGuardError,
    ValidationError,
)


_FULL_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}(?:[T ].*)?$")


def to_iso_date(value: str | date) -> str:
    """Coerce a date, datetime or ``YYYY-MM-DD[...]`` string to ``YYYY-MM-DD``.

    Partial dates such as ``2024-06`` are rejected.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str) or not _FULL_DATE.match(value.strip()):
        raise ValidationError(f"Invalid date: {value!r}")
    try:
        return parser.isoparse(value.strip()).date().isoformat()
    except (OverflowError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


class InventoryService:
    """Catalog operations and the dress status mirror.

    ``mark_rented`` and ``release`` are the only ways a dress becomes
    ``rented`` or ``available``; they are driven by the rental ledger.
    Operators may only put a dress into ``maintenance`` or take it out.
    """

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._dress_repo = DressRepo(storage)
        self._rental_repo = RentalRepository(storage)
        self._logger = get_logger(self.__class__.__name__)

    def list_dresses(self) -> list[Dress]:
        return self._dress_repo.list_all()

    def get_dress(self, dress_id: int) -> Dress:
        dress = self._dress_repo.get_by_id(dress_id)
        if not dress:
            raise NotFoundError(f"Dress {dress_id} not found")
        return dress

    def create_dress(
        self,
        name: str,
        description: Optional[str] = None,
        size: Optional[str] = None,
        color: Optional[str] = None,
        rental_price: float = 0.0,
        image_path: Optional[str] = None,
        status: Optional[DressStatus] = None,
    ) -> Dress:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Dress name is required")
        if rental_price < 0:
            raise ValidationError("Rental price cannot be negative")
        if status == DressStatus.RENTED:
            raise InvalidTransitionError(
                "A new dress cannot start as rented; create a rental instead"
            )
        dress = self._dress_repo.create(
            name,
            description,
            size,
            color,
            rental_price,
            image_path,
            status or DressStatus.AVAILABLE,
        )
        self._logger.info("Dress created id=%s status=%s", dress.id, dress.status.value)
        return dress

    def update_dress(
        self,
        dress_id: int,
        name: str,
        description: Optional[str] = None,
        size: Optional[str] = None,
        color: Optional[str] = None,
        rental_price: float = 0.0,
        image_path: Optional[str] = None,
        status: Optional[DressStatus] = None,
    ) -> Dress:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Dress name is required")
        if rental_price < 0:
            raise ValidationError("Rental price cannot be negative")
        with self._storage.transaction():
            current = self.get_dress(dress_id)
            new_status = self._resolve_status(current, status)
            updated = self._dress_repo.update(
                dress_id,
                name,
                description,
                size,
                color,
                rental_price,
                image_path,
                new_status,
            )
        if not updated:
            raise NotFoundError(f"Dress {dress_id} not found")
        if new_status != current.status:
            self._logger.info(
                "Dress status changed id=%s %s -> %s",
                dress_id,
                current.status.value,
                new_status.value,
            )
        return updated

    def _resolve_status(
        self, current: Dress, requested: Optional[DressStatus]
    ) -> DressStatus:
        if requested is None or requested == current.status:
            return current.status
        if requested == DressStatus.MAINTENANCE:
            return DressStatus.MAINTENANCE
        if current.status == DressStatus.MAINTENANCE:
            return self.derived_status(current.id)
        raise InvalidTransitionError(
            "Dress availability follows its rentals and cannot be set by hand"
        )

    def derived_status(
        self, dress_id: int, exclude_rental_id: Optional[int] = None
    ) -> DressStatus:
        active = self._rental_repo.count_for_dress(
            dress_id, RentalStatus.ACTIVE, exclude_rental_id=exclude_rental_id
        )
        return DressStatus.RENTED if active else DressStatus.AVAILABLE

    def mark_rented(self, dress_id: int) -> None:
        if not self._dress_repo.set_status(dress_id, DressStatus.RENTED):
            raise NotFoundError(f"Dress {dress_id} not found")
        self._logger.info("Dress marked rented id=%s", dress_id)

    def release(
        self,
        dress_id: int,
        strict: bool = False,
        exclude_rental_id: Optional[int] = None,
    ) -> DressStatus:
        """Free the dress after a rental ends.

        With ``strict`` the dress stays rented while another active rental
        (other than ``exclude_rental_id``) still holds it. A dress in
        maintenance keeps that status.
        """
        dress = self._dress_repo.get_by_id(dress_id)
        if not dress:
            raise NotFoundError(f"Dress {dress_id} not found")
        if dress.status == DressStatus.MAINTENANCE:
            return dress.status
        new_status = DressStatus.AVAILABLE
        if strict:
            new_status = self.derived_status(dress_id, exclude_rental_id=exclude_rental_id)
        if new_status != dress.status:
            self._dress_repo.set_status(dress_id, new_status)
            self._logger.info(
                "Dress released id=%s %s -> %s",
                dress_id,
                dress.status.value,
                new_status.value,
            )
        return new_status

    def delete_dress(self, dress_id: int) -> None:
        with self._storage.transaction():
            self.get_dress(dress_id)
            if self._rental_repo.count_for_dress(dress_id, RentalStatus.ACTIVE):
                raise ReferentialGuardError("Cannot delete a dress with active rentals")
            if self._rental_repo.count_for_dress(dress_id):
                raise ReferentialGuardError(
                    "Cannot delete a dress with rental history"
                )
            self._dress_repo.delete(dress_id)
        self._logger.info("Dress deleted id=%s", dress_id)
