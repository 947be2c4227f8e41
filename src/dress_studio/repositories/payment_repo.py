"""Repository for payments persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Payment
from dress_studio.logging_config import get_logger
from dress_studio.repositories.mappers import payment_from_row


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class PaymentRepository:
    """Data access for payments."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def list_all(self) -> list[Payment]:
        try:
            rows = self._storage.fetch_all(
                """
                SELECT p.*, c.name AS customer_name, d.name AS dress_name
                FROM payments p
                JOIN rentals r ON p.rental_id = r.id
                JOIN customers c ON r.customer_id = c.id
                JOIN dresses d ON r.dress_id = d.id
                ORDER BY p.payment_date DESC, p.id DESC
                """
            )
        except Exception:
            self._logger.exception("Failed to list payments")
            raise
        return [payment_from_row(row) for row in rows]

    def list_by_rental(self, rental_id: int) -> list[Payment]:
        try:
            rows = self._storage.fetch_all(
                """
                SELECT *
                FROM payments
                WHERE rental_id = :rental_id
                ORDER BY payment_date DESC, id DESC
                """,
                {"rental_id": rental_id},
            )
        except Exception:
            self._logger.exception("Failed to list payments rental_id=%s", rental_id)
            raise
        return [payment_from_row(row) for row in rows]

    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        try:
            row = self._storage.fetch_one(
                "SELECT * FROM payments WHERE id = :id",
                {"id": payment_id},
            )
        except Exception:
            self._logger.exception("Failed to fetch payment id=%s", payment_id)
            raise
        return payment_from_row(row) if row else None

    def create(
        self,
        rental_id: int,
        amount: float,
        payment_date: str,
        method: Optional[str],
        notes: Optional[str],
    ) -> Payment:
        created_at = _now_iso()
        try:
            result = self._storage.execute(
                """
                INSERT INTO payments (
                    rental_id, amount, payment_date, method, notes, created_at
                )
                VALUES (
                    :rental_id, :amount, :payment_date, :method, :notes, :created_at
                )
                """,
                {
                    "rental_id": rental_id,
                    "amount": amount,
                    "payment_date": payment_date,
                    "method": method,
                    "notes": notes,
                    "created_at": created_at,
                },
            )
        except Exception:
            self._logger.exception("Failed to create payment rental_id=%s", rental_id)
            raise
        return Payment(
            id=int(result.lastrowid),
            rental_id=rental_id,
            amount=amount,
            payment_date=payment_date,
            method=method,
            notes=notes,
            created_at=created_at,
        )

    def update(
        self,
        payment_id: int,
        amount: float,
        payment_date: str,
        method: Optional[str],
        notes: Optional[str],
    ) -> bool:
        try:
            result = self._storage.execute(
                """
                UPDATE payments
                SET amount = :amount,
                    payment_date = :payment_date,
                    method = :method,
                    notes = :notes
                WHERE id = :id
                """,
                {
                    "id": payment_id,
                    "amount": amount,
                    "payment_date": payment_date,
                    "method": method,
                    "notes": notes,
                },
            )
        except Exception:
            self._logger.exception("Failed to update payment id=%s", payment_id)
            raise
        return result.rowcount > 0

    def delete(self, payment_id: int) -> bool:
        try:
            result = self._storage.execute(
                "DELETE FROM payments WHERE id = :id",
                {"id": payment_id},
            )
        except Exception:
            self._logger.exception("Failed to delete payment id=%s", payment_id)
            raise
        return result.rowcount > 0

    def delete_by_rental(self, rental_id: int) -> int:
        try:
            result = self._storage.execute(
                "DELETE FROM payments WHERE rental_id = :rental_id",
                {"rental_id": rental_id},
            )
        except Exception:
            self._logger.exception(
                "Failed to delete payments for rental_id=%s", rental_id
            )
            raise
        return result.rowcount

    def get_paid_total(self, rental_id: int) -> float:
        try:
            row = self._storage.fetch_one(
                """
                SELECT COALESCE(SUM(amount), 0) AS paid_total
                FROM payments
                WHERE rental_id = :rental_id
                """,
                {"rental_id": rental_id},
            )
        except Exception:
            self._logger.exception(
                "Failed to calculate paid total rental_id=%s", rental_id
            )
            raise
        return float(row["paid_total"] or 0) if row else 0.0
