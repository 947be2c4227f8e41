"""Repository for customer persistence."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Customer
from dress_studio.logging_config import get_logger
from dress_studio.repositories.mappers import customer_from_row


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class CustomerRepo:
    """CRUD operations for customers."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        phone: Optional[str],
        email: Optional[str],
        address: Optional[str],
        notes: Optional[str],
    ) -> Customer:
        created_at = _now_iso()
        try:
            result = self._storage.execute(
                """
                INSERT INTO customers (
                    name,
                    phone,
                    email,
                    address,
                    notes,
                    created_at
                )
                VALUES (:name, :phone, :email, :address, :notes, :created_at)
                """,
                {
                    "name": name,
                    "phone": phone,
                    "email": email,
                    "address": address,
                    "notes": notes,
                    "created_at": created_at,
                },
            )
        except Exception:
            self._logger.exception("Failed to create customer")
            raise

        return Customer(
            id=result.lastrowid,
            name=name,
            phone=phone,
            email=email,
            address=address,
            notes=notes,
            created_at=created_at,
        )

    def update(
        self,
        customer_id: int,
        name: str,
        phone: Optional[str],
        email: Optional[str],
        address: Optional[str],
        notes: Optional[str],
    ) -> Optional[Customer]:
        try:
            result = self._storage.execute(
                """
                UPDATE customers
                SET
                    name = :name,
                    phone = :phone,
                    email = :email,
                    address = :address,
                    notes = :notes
                WHERE id = :id
                """,
                {
                    "id": customer_id,
                    "name": name,
                    "phone": phone,
                    "email": email,
                    "address": address,
                    "notes": notes,
                },
            )
        except Exception:
            self._logger.exception("Failed to update customer id=%s", customer_id)
            raise

        if result.rowcount == 0:
            return None
        return self.get_by_id(customer_id)

    def delete(self, customer_id: int) -> bool:
        try:
            result = self._storage.execute(
                "DELETE FROM customers WHERE id = :id",
                {"id": customer_id},
            )
        except Exception:
            self._logger.exception("Failed to delete customer id=%s", customer_id)
            raise
        return result.rowcount > 0

    def list_all(self) -> List[Customer]:
        try:
            rows = self._storage.fetch_all(
                "SELECT * FROM customers ORDER BY created_at DESC, id DESC"
            )
        except Exception:
            self._logger.exception("Failed to list customers")
            raise
        return [customer_from_row(row) for row in rows]

    def search_by_name(self, term: str) -> List[Customer]:
        term = term.strip()
        if not term:
            return self.list_all()
        try:
            rows = self._storage.fetch_all(
                "SELECT * FROM customers WHERE name LIKE :term ORDER BY name",
                {"term": f"%{term}%"},
            )
        except Exception:
            self._logger.exception("Failed to search customers by name term=%s", term)
            raise
        return [customer_from_row(row) for row in rows]

    def get_by_id(self, customer_id: int) -> Optional[Customer]:
        try:
            row = self._storage.fetch_one(
                "SELECT * FROM customers WHERE id = :id",
                {"id": customer_id},
            )
        except Exception:
            self._logger.exception("Failed to get customer id=%s", customer_id)
            raise
        return customer_from_row(row) if row else None
