"""Repository for appointment persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import Appointment, AppointmentStatus, AppointmentType
from dress_studio.logging_config import get_logger
from dress_studio.repositories.mappers import appointment_from_row


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


APPOINTMENT_SELECT = """
    SELECT
        a.*,
        c.name AS customer_name,
        c.phone AS customer_phone,
        d.name AS dress_name
    FROM appointments a
    LEFT JOIN customers c ON a.customer_id = c.id
    LEFT JOIN dresses d ON a.dress_id = d.id
"""

# SQLite sorts NULL first; untimed appointments lead the day.
APPOINTMENT_ORDER = "ORDER BY a.date ASC, a.time ASC, a.id ASC"


class AppointmentRepo:
    """CRUD operations for appointments."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def _select(self, where: str = "", params: Optional[dict[str, object]] = None) -> list[Appointment]:
        rows = self._storage.fetch_all(
            f"{APPOINTMENT_SELECT} {where} {APPOINTMENT_ORDER}",
            params,
        )
        return [appointment_from_row(row) for row in rows]

    def list_all(self) -> list[Appointment]:
        try:
            return self._select()
        except Exception:
            self._logger.exception("Failed to list appointments")
            raise

    def list_between(
        self,
        start_date: str,
        end_date: str,
        status: AppointmentStatus = AppointmentStatus.SCHEDULED,
    ) -> list[Appointment]:
        try:
            return self._select(
                "WHERE a.date >= :start_date AND a.date <= :end_date AND a.status = :status",
                {"start_date": start_date, "end_date": end_date, "status": status.value},
            )
        except Exception:
            self._logger.exception("Failed to list appointments between dates")
            raise

    def list_pending_reminders(self, reference_date: str) -> list[Appointment]:
        try:
            return self._select(
                """
                WHERE a.date = :date
                  AND a.status = :status
                  AND a.reminder_sent = 0
                """,
                {"date": reference_date, "status": AppointmentStatus.SCHEDULED.value},
            )
        except Exception:
            self._logger.exception("Failed to list pending reminders")
            raise

    def get_by_id(self, appointment_id: int) -> Optional[Appointment]:
        try:
            rows = self._select("WHERE a.id = :id", {"id": appointment_id})
        except Exception:
            self._logger.exception("Failed to get appointment id=%s", appointment_id)
            raise
        return rows[0] if rows else None

    def create(
        self,
        customer_id: Optional[int],
        dress_id: Optional[int],
        appointment_type: AppointmentType,
        date: str,
        time: Optional[str],
        notes: Optional[str],
    ) -> int:
        try:
            result = self._storage.execute(
                """
                INSERT INTO appointments (
                    customer_id, dress_id, type, date, time, notes, created_at
                )
                VALUES (
                    :customer_id, :dress_id, :type, :date, :time, :notes, :created_at
                )
                """,
                {
                    "customer_id": customer_id,
                    "dress_id": dress_id,
                    "type": appointment_type.value,
                    "date": date,
                    "time": time,
                    "notes": notes,
                    "created_at": _now_iso(),
                },
            )
        except Exception:
            self._logger.exception("Failed to create appointment")
            raise
        return int(result.lastrowid)

    def update(
        self,
        appointment_id: int,
        customer_id: Optional[int],
        dress_id: Optional[int],
        appointment_type: AppointmentType,
        date: str,
        time: Optional[str],
        notes: Optional[str],
        status: AppointmentStatus,
        reminder_sent: bool,
    ) -> bool:
        try:
            result = self._storage.execute(
                """
                UPDATE appointments
                SET customer_id = :customer_id,
                    dress_id = :dress_id,
                    type = :type,
                    date = :date,
                    time = :time,
                    notes = :notes,
                    status = :status,
                    reminder_sent = :reminder_sent
                WHERE id = :id
                """,
                {
                    "id": appointment_id,
                    "customer_id": customer_id,
                    "dress_id": dress_id,
                    "type": appointment_type.value,
                    "date": date,
                    "time": time,
                    "notes": notes,
                    "status": status.value,
                    "reminder_sent": int(reminder_sent),
                },
            )
        except Exception:
            self._logger.exception("Failed to update appointment id=%s", appointment_id)
            raise
        return result.rowcount > 0

    def mark_reminder_sent(self, appointment_id: int) -> bool:
        try:
            result = self._storage.execute(
                "UPDATE appointments SET reminder_sent = 1 WHERE id = :id",
                {"id": appointment_id},
            )
        except Exception:
            self._logger.exception(
                "Failed to mark reminder sent id=%s", appointment_id
            )
            raise
        return result.rowcount > 0

    def delete(self, appointment_id: int) -> bool:
        try:
            result = self._storage.execute(
                "DELETE FROM appointments WHERE id = :id",
                {"id": appointment_id},
            )
        except Exception:
            self._logger.exception("Failed to delete appointment id=%s", appointment_id)
            raise
        return result.rowcount > 0
