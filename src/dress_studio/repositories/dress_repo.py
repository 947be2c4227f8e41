"""Repository for dress persistence."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Dress, DressStatus
from dress_studio.logging_config import get_logger
from dress_studio.repositories.mappers import dress_from_row


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class DressRepo:
    """CRUD operations for dresses."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def create(
        self,
        name: str,
        description: Optional[str],
        size: Optional[str],
        color: Optional[str],
        rental_price: float,
        image_path: Optional[str],
        status: DressStatus = DressStatus.AVAILABLE,
    ) -> Dress:
        created_at = _now_iso()
        try:
            result = self._storage.execute(
                """
                INSERT INTO dresses (
                    name,
                    description,
                    size,
                    color,
                    rental_price,
                    image_path,
                    status,
                    created_at
                )
                VALUES (
                    :name,
                    :description,
                    :size,
                    :color,
                    :rental_price,
                    :image_path,
                    :status,
                    :created_at
                )
                """,
                {
                    "name": name,
                    "description": description,
                    "size": size,
                    "color": color,
                    "rental_price": rental_price,
                    "image_path": image_path,
                    "status": status.value,
                    "created_at": created_at,
                },
            )
        except Exception:
            self._logger.exception("Failed to create dress")
            raise

        return Dress(
            id=result.lastrowid,
            name=name,
            description=description,
            size=size,
            color=color,
            rental_price=rental_price,
            image_path=image_path,
            status=status,
            created_at=created_at,
        )

    def update(
        self,
        dress_id: int,
        name: str,
        description: Optional[str],
        size: Optional[str],
        color: Optional[str],
        rental_price: float,
        image_path: Optional[str],
        status: DressStatus,
    ) -> Optional[Dress]:
        try:
            result = self._storage.execute(
                """
                UPDATE dresses
                SET
                    name = :name,
                    description = :description,
                    size = :size,
                    color = :color,
                    rental_price = :rental_price,
                    image_path = :image_path,
                    status = :status
                WHERE id = :id
                """,
                {
                    "id": dress_id,
                    "name": name,
                    "description": description,
                    "size": size,
                    "color": color,
                    "rental_price": rental_price,
                    "image_path": image_path,
                    "status": status.value,
                },
            )
        except Exception:
            self._logger.exception("Failed to update dress id=%s", dress_id)
            raise

        if result.rowcount == 0:
            return None
        return self.get_by_id(dress_id)

    def set_status(self, dress_id: int, status: DressStatus) -> bool:
        try:
            result = self._storage.execute(
                "UPDATE dresses SET status = :status WHERE id = :id",
                {"status": status.value, "id": dress_id},
            )
        except Exception:
            self._logger.exception("Failed to set dress status id=%s", dress_id)
            raise
        return result.rowcount > 0

    def delete(self, dress_id: int) -> bool:
        try:
            result = self._storage.execute(
                "DELETE FROM dresses WHERE id = :id",
                {"id": dress_id},
            )
        except Exception:
            self._logger.exception("Failed to delete dress id=%s", dress_id)
            raise
        return result.rowcount > 0

    def list_all(self) -> List[Dress]:
        try:
            rows = self._storage.fetch_all(
                "SELECT * FROM dresses ORDER BY created_at DESC, id DESC"
            )
        except Exception:
            self._logger.exception("Failed to list dresses")
            raise
        return [dress_from_row(row) for row in rows]

    def get_by_id(self, dress_id: int) -> Optional[Dress]:
        try:
            row = self._storage.fetch_one(
                "SELECT * FROM dresses WHERE id = :id",
                {"id": dress_id},
            )
        except Exception:
            self._logger.exception("Failed to get dress id=%s", dress_id)
            raise
        return dress_from_row(row) if row else None
