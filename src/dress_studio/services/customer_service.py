"""Customer records with a referential guard on delete."""

from __future__ import annotations

from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Customer, Rental
from dress_studio.logging_config import get_logger
from dress_studio.repositories.customer_repo import CustomerRepo
from dress_studio.repositories.rental_repo import RentalRepository
from dress_studio.services.errors import (
    NotFoundError,
    ReferentialGuardError,
    ValidationError,
)


class CustomerService:
    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._repo = CustomerRepo(storage)
        self._rental_repo = RentalRepository(storage)
        self._logger = get_logger(self.__class__.__name__)

    def list_customers(self, search: Optional[str] = None) -> list[Customer]:
        if search:
            return self._repo.search_by_name(search)
        return self._repo.list_all()

    def get_customer(self, customer_id: int) -> Customer:
        customer = self._repo.get_by_id(customer_id)
        if not customer:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def create_customer(
        self,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Customer:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Customer name is required")
        customer = self._repo.create(name, phone, email, address, notes)
        self._logger.info("Customer created id=%s", customer.id)
        return customer

    def update_customer(
        self,
        customer_id: int,
        name: str,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Customer:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Customer name is required")
        customer = self._repo.update(customer_id, name, phone, email, address, notes)
        if not customer:
            raise NotFoundError(f"Customer {customer_id} not found")
        return customer

    def rental_history(self, customer_id: int) -> list[Rental]:
        self.get_customer(customer_id)
        return self._rental_repo.list_by_customer(customer_id)

    def delete_customer(self, customer_id: int) -> None:
        with self._storage.transaction():
            self.get_customer(customer_id)
            if self._rental_repo.count_for_customer(customer_id):
                raise ReferentialGuardError("Cannot delete a customer with rentals")
            self._repo.delete(customer_id)
        self._logger.info("Customer deleted id=%s", customer_id)
