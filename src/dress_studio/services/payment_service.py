"""Payment service for business rules."""

from __future__ import annotations

from datetime import date
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Payment
from dress_studio.logging_config import get_logger
from dress_studio.repositories.payment_repo import PaymentRepository
from dress_studio.repositories.rental_repo import RentalRepository
from dress_studio.services.errors import NotFoundError, ValidationError
from dress_studio.services.inventory_service import to_iso_date


class PaymentService:
    """Service for payment operations. Payments never touch rental rows."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._repo = PaymentRepository(storage)
        self._rental_repo = RentalRepository(storage)
        self._logger = get_logger(self.__class__.__name__)

    def list_payments(self) -> list[Payment]:
        return self._repo.list_all()

    def list_for_rental(self, rental_id: int) -> list[Payment]:
        return self._repo.list_by_rental(rental_id)

    def get_paid_total(self, rental_id: int) -> float:
        return self._repo.get_paid_total(rental_id)

    def record_payment(
        self,
        rental_id: int,
        amount: float,
        payment_date: Optional[str | date] = None,
        method: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Payment:
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        paid_on = to_iso_date(payment_date or date.today())
        with self._storage.transaction():
            if not self._rental_repo.get_by_id(rental_id):
                raise NotFoundError(f"Rental {rental_id} not found")
            payment = self._repo.create(rental_id, amount, paid_on, method, notes)
        self._logger.info(
            "Payment recorded id=%s rental_id=%s amount=%.2f",
            payment.id,
            rental_id,
            amount,
        )
        return payment

    def update_payment(
        self,
        payment_id: int,
        amount: float,
        payment_date: str | date,
        method: Optional[str],
        notes: Optional[str],
    ) -> Payment:
        if amount <= 0:
            raise ValidationError("Payment amount must be greater than zero")
        paid_on = to_iso_date(payment_date)
        with self._storage.transaction():
            if not self._repo.get_by_id(payment_id):
                raise NotFoundError(f"Payment {payment_id} not found")
            self._repo.update(payment_id, amount, paid_on, method, notes)
            payment = self._repo.get_by_id(payment_id)
        self._logger.info("Payment updated id=%s", payment_id)
        return payment

    def delete_payment(self, payment_id: int) -> None:
        if not self._repo.delete(payment_id):
            raise NotFoundError(f"Payment {payment_id} not found")
        self._logger.info("Payment deleted id=%s", payment_id)
