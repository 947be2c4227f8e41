"""Repository for rental persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Rental, RentalStatus
from dress_studio.logging_config import get_logger
from dress_studio.repositories.mappers import rental_from_row


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


RENTAL_SELECT = """
    SELECT
        r.*,
        d.name AS dress_name,
        d.image_path AS dress_image,
        d.color AS dress_color,
        c.name AS customer_name,
        c.phone AS customer_phone
    FROM rentals r
    JOIN dresses d ON r.dress_id = d.id
    JOIN customers c ON r.customer_id = c.id
"""


class RentalRepository:
    """Data access for rentals."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def find_conflicts(
        self,
        dress_id: int,
        start_date: str,
        end_date: str,
        exclude_rental_id: Optional[int] = None,
    ) -> list[Rental]:
        """Return non-cancelled rentals of the dress intersecting the inclusive range."""
        params: dict[str, object] = {
            "dress_id": dress_id,
            "cancelled": RentalStatus.CANCELLED.value,
            "start_date": start_date,
            "end_date": end_date,
        }
        exclude_clause = ""
        if exclude_rental_id is not None:
            exclude_clause = "AND r.id <> :exclude_id"
            params["exclude_id"] = exclude_rental_id
        try:
            rows = self._storage.fetch_all(
                f"""
                {RENTAL_SELECT}
                WHERE r.dress_id = :dress_id
                  AND r.status != :cancelled
                  AND r.start_date <= :end_date
                  AND r.end_date >= :start_date
                  {exclude_clause}
                ORDER BY r.start_date, r.id
                """,
                params,
            )
        except Exception:
            self._logger.exception(
                "Failed to check conflicts for dress_id=%s", dress_id
            )
            raise
        return [rental_from_row(row) for row in rows]

    def create(
        self,
        dress_id: int,
        customer_id: int,
        start_date: str,
        end_date: str,
        total_price: float,
        deposit: float,
        notes: Optional[str],
    ) -> int:
        try:
            result = self._storage.execute(
                """
                INSERT INTO rentals (
                    dress_id,
                    customer_id,
                    start_date,
                    end_date,
                    total_price,
                    deposit,
                    status,
                    notes,
                    created_at
                )
                VALUES (
                    :dress_id,
                    :customer_id,
                    :start_date,
                    :end_date,
                    :total_price,
                    :deposit,
                    :status,
                    :notes,
                    :created_at
                )
                """,
                {
                    "dress_id": dress_id,
                    "customer_id": customer_id,
                    "start_date": start_date,
                    "end_date": end_date,
                    "total_price": total_price,
                    "deposit": deposit,
                    "status": RentalStatus.ACTIVE.value,
                    "notes": notes,
                    "created_at": _now_iso(),
                },
            )
        except Exception:
            self._logger.exception("Failed to create rental dress_id=%s", dress_id)
            raise
        return int(result.lastrowid)

    def update(
        self,
        rental_id: int,
        start_date: str,
        end_date: str,
        total_price: float,
        deposit: float,
        status: RentalStatus,
        notes: Optional[str],
    ) -> bool:
        try:
            result = self._storage.execute(
                """
                UPDATE rentals
                SET start_date = :start_date,
                    end_date = :end_date,
                    total_price = :total_price,
                    deposit = :deposit,
                    status = :status,
                    notes = :notes
                WHERE id = :id
                """,
                {
                    "id": rental_id,
                    "start_date": start_date,
                    "end_date": end_date,
                    "total_price": total_price,
                    "deposit": deposit,
                    "status": status.value,
                    "notes": notes,
                },
            )
        except Exception:
            self._logger.exception("Failed to update rental id=%s", rental_id)
            raise
        return result.rowcount > 0

    def delete(self, rental_id: int) -> bool:
        try:
            result = self._storage.execute(
                "DELETE FROM rentals WHERE id = :id",
                {"id": rental_id},
            )
        except Exception:
            self._logger.exception("Failed to delete rental id=%s", rental_id)
            raise
        return result.rowcount > 0

    def get_by_id(self, rental_id: int) -> Optional[Rental]:
        try:
            row = self._storage.fetch_one(
                f"{RENTAL_SELECT} WHERE r.id = :id",
                {"id": rental_id},
            )
        except Exception:
            self._logger.exception("Failed to fetch rental id=%s", rental_id)
            raise
        return rental_from_row(row) if row else None

    def list_all(self) -> list[Rental]:
        try:
            rows = self._storage.fetch_all(
                f"{RENTAL_SELECT} ORDER BY r.start_date DESC, r.id DESC"
            )
        except Exception:
            self._logger.exception("Failed to list rentals")
            raise
        return [rental_from_row(row) for row in rows]

    def list_active(self) -> list[Rental]:
        try:
            rows = self._storage.fetch_all(
                f"""
                {RENTAL_SELECT}
                WHERE r.status = :status
                ORDER BY r.end_date ASC, r.id ASC
                """,
                {"status": RentalStatus.ACTIVE.value},
            )
        except Exception:
            self._logger.exception("Failed to list active rentals")
            raise
        return [rental_from_row(row) for row in rows]

    def list_active_ending_between(self, start_date: str, end_date: str) -> list[Rental]:
        try:
            rows = self._storage.fetch_all(
                f"""
                {RENTAL_SELECT}
                WHERE r.status = :status
                  AND r.end_date BETWEEN :start_date AND :end_date
                ORDER BY r.end_date ASC, r.id ASC
                """,
                {
                    "status": RentalStatus.ACTIVE.value,
                    "start_date": start_date,
                    "end_date": end_date,
                },
            )
        except Exception:
            self._logger.exception("Failed to list upcoming returns")
            raise
        return [rental_from_row(row) for row in rows]

    def list_by_customer(self, customer_id: int) -> list[Rental]:
        try:
            rows = self._storage.fetch_all(
                f"""
                {RENTAL_SELECT}
                WHERE r.customer_id = :customer_id
                ORDER BY r.start_date DESC, r.id DESC
                """,
                {"customer_id": customer_id},
            )
        except Exception:
            self._logger.exception(
                "Failed to list rentals for customer_id=%s", customer_id
            )
            raise
        return [rental_from_row(row) for row in rows]

    def count_for_dress(
        self,
        dress_id: int,
        status: Optional[RentalStatus] = None,
        exclude_rental_id: Optional[int] = None,
    ) -> int:
        clauses = ["dress_id = :dress_id"]
        params: dict[str, object] = {"dress_id": dress_id}
        if status is not None:
            clauses.append("status = :status")
            params["status"] = status.value
        if exclude_rental_id is not None:
            clauses.append("id <> :exclude_id")
            params["exclude_id"] = exclude_rental_id
        try:
            row = self._storage.fetch_one(
                f"SELECT COUNT(*) AS count FROM rentals WHERE {' AND '.join(clauses)}",
                params,
            )
        except Exception:
            self._logger.exception("Failed to count rentals for dress_id=%s", dress_id)
            raise
        return int(row["count"]) if row else 0

    def count_for_customer(self, customer_id: int) -> int:
        try:
            row = self._storage.fetch_one(
                "SELECT COUNT(*) AS count FROM rentals WHERE customer_id = :customer_id",
                {"customer_id": customer_id},
            )
        except Exception:
            self._logger.exception(
                "Failed to count rentals for customer_id=%s", customer_id
            )
            raise
        return int(row["count"]) if row else 0
