"""Read-only aggregate queries for dashboards, reports and exports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from dress_studio.db.storage import Row, Storage
from dress_studio.domain.models import (
    AppointmentStatus,
    DressStatus,
    RentalStatus,
)
from dress_studio.logging_config import get_logger


@dataclass(slots=True)
class DashboardSummary:
    total_dresses: int = 0
    available_dresses: int = 0
    total_customers: int = 0
    active_rentals: int = 0
    today_appointments: int = 0
    monthly_revenue: float = 0.0

    def to_record(self) -> dict[str, Any]:
        return {
            "totalDresses": self.total_dresses,
            "availableDresses": self.available_dresses,
            "totalCustomers": self.total_customers,
            "activeRentals": self.active_rentals,
            "todayAppointments": self.today_appointments,
            "monthlyRevenue": self.monthly_revenue,
        }


@dataclass(slots=True)
class MonthlyRevenue:
    month: str
    total: float
    payment_count: int

    def to_record(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "total": self.total,
            "payment_count": self.payment_count,
        }


@dataclass(slots=True)
class PopularDress:
    id: int
    name: str
    color: Optional[str]
    size: Optional[str]
    rental_price: float
    status: str
    rental_count: int
    total_revenue: float

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "size": self.size,
            "rental_price": self.rental_price,
            "status": self.status,
            "rental_count": self.rental_count,
            "total_revenue": self.total_revenue,
        }


@dataclass(slots=True)
class ReturningCustomer:
    id: int
    name: str
    phone: Optional[str]
    email: Optional[str]
    rental_count: int
    total_spent: float

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "rental_count": self.rental_count,
            "total_spent": self.total_spent,
        }


@dataclass(slots=True)
class CalendarEvent:
    id: int
    title: str
    start: str
    end: str
    background_color: str
    extended_props: dict[str, Any] = field(default_factory=dict)

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start,
            "end": self.end,
            "backgroundColor": self.background_color,
            "extendedProps": dict(self.extended_props),
        }


EXPORT_QUERIES: dict[str, str] = {
    "rentals": """
        SELECT
            r.id,
            d.name AS dress_name,
            c.name AS customer_name,
            r.start_date,
            r.end_date,
            r.total_price,
            r.deposit,
            r.status
        FROM rentals r
        JOIN dresses d ON r.dress_id = d.id
        JOIN customers c ON r.customer_id = c.id
        ORDER BY r.start_date DESC, r.id DESC
    """,
    "customers": """
        SELECT id, name, phone, email, address
        FROM customers
        ORDER BY id
    """,
    "dresses": """
        SELECT id, name, size, color, rental_price, status
        FROM dresses
        ORDER BY id
    """,
    "payments": """
        SELECT
            p.id,
            p.amount,
            p.payment_date,
            p.method,
            c.name AS customer_name,
            d.name AS dress_name
        FROM payments p
        JOIN rentals r ON p.rental_id = r.id
        JOIN customers c ON r.customer_id = c.id
        JOIN dresses d ON r.dress_id = d.id
        ORDER BY p.payment_date DESC, p.id DESC
    """,
}


class ReportRepository:
    """Aggregations spanning dresses, customers, rentals, payments and appointments."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def _count(self, sql: str, params: Optional[dict[str, object]] = None) -> int:
        row = self._storage.fetch_one(sql, params)
        return int(row["count"] or 0) if row else 0

    def dashboard_summary(self, today: str, month_start: str) -> DashboardSummary:
        try:
            revenue_row = self._storage.fetch_one(
                """
                SELECT COALESCE(SUM(amount), 0) AS total
                FROM payments
                WHERE payment_date >= :month_start
                """,
                {"month_start": month_start},
            )
            return DashboardSummary(
                total_dresses=self._count("SELECT COUNT(*) AS count FROM dresses"),
                available_dresses=self._count(
                    "SELECT COUNT(*) AS count FROM dresses WHERE status = :status",
                    {"status": DressStatus.AVAILABLE.value},
                ),
                total_customers=self._count("SELECT COUNT(*) AS count FROM customers"),
                active_rentals=self._count(
                    "SELECT COUNT(*) AS count FROM rentals WHERE status = :status",
                    {"status": RentalStatus.ACTIVE.value},
                ),
                today_appointments=self._count(
                    """
                    SELECT COUNT(*) AS count
                    FROM appointments
                    WHERE date = :today AND status = :status
                    """,
                    {"today": today, "status": AppointmentStatus.SCHEDULED.value},
                ),
                monthly_revenue=float(revenue_row["total"] or 0) if revenue_row else 0.0,
            )
        except Exception:
            self._logger.exception("Failed to build dashboard summary")
            raise

    def monthly_revenue(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[MonthlyRevenue]:
        clauses: list[str] = []
        params: dict[str, object] = {}
        if start_date:
            clauses.append("payment_date >= :start_date")
            params["start_date"] = start_date
        if end_date:
            clauses.append("payment_date <= :end_date")
            params["end_date"] = end_date
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        try:
            rows = self._storage.fetch_all(
                f"""
                SELECT
                    strftime('%Y-%m', payment_date) AS month,
                    SUM(amount) AS total,
                    COUNT(*) AS payment_count
                FROM payments
                {where}
                GROUP BY month
                ORDER BY month DESC
                """,
                params,
            )
        except Exception:
            self._logger.exception("Failed to aggregate monthly revenue")
            raise
        return [
            MonthlyRevenue(
                month=row["month"],
                total=float(row["total"] or 0),
                payment_count=int(row["payment_count"]),
            )
            for row in rows
        ]

    def popular_dresses(self, limit: int = 10) -> list[PopularDress]:
        try:
            rows = self._storage.fetch_all(
                """
                SELECT
                    d.id,
                    d.name,
                    d.color,
                    d.size,
                    d.rental_price,
                    d.status,
                    COUNT(r.id) AS rental_count,
                    COALESCE(SUM(r.total_price), 0) AS total_revenue
                FROM dresses d
                LEFT JOIN rentals r ON d.id = r.dress_id
                GROUP BY d.id
                ORDER BY rental_count DESC, d.id ASC
                LIMIT :limit
                """,
                {"limit": limit},
            )
        except Exception:
            self._logger.exception("Failed to rank popular dresses")
            raise
        return [
            PopularDress(
                id=row["id"],
                name=row["name"],
                color=row.get("color"),
                size=row.get("size"),
                rental_price=float(row["rental_price"] or 0),
                status=row["status"],
                rental_count=int(row["rental_count"]),
                total_revenue=float(row["total_revenue"] or 0),
            )
            for row in rows
        ]

    def returning_customers(self) -> list[ReturningCustomer]:
        try:
            rows = self._storage.fetch_all(
                """
                SELECT
                    c.id,
                    c.name,
                    c.phone,
                    c.email,
                    COUNT(r.id) AS rental_count,
                    COALESCE(SUM(r.total_price), 0) AS total_spent
                FROM customers c
                JOIN rentals r ON c.id = r.customer_id
                GROUP BY c.id
                HAVING COUNT(r.id) > 1
                ORDER BY rental_count DESC, c.id ASC
                """
            )
        except Exception:
            self._logger.exception("Failed to list returning customers")
            raise
        return [
            ReturningCustomer(
                id=row["id"],
                name=row["name"],
                phone=row.get("phone"),
                email=row.get("email"),
                rental_count=int(row["rental_count"]),
                total_spent=float(row["total_spent"] or 0),
            )
            for row in rows
        ]

    def calendar_rows(self) -> list[Row]:
        try:
            return self._storage.fetch_all(
                """
                SELECT
                    r.id,
                    r.start_date,
                    r.end_date,
                    r.status,
                    d.name AS dress_name,
                    c.name AS customer_name
                FROM rentals r
                JOIN dresses d ON r.dress_id = d.id
                JOIN customers c ON r.customer_id = c.id
                WHERE r.status != :cancelled
                ORDER BY r.start_date, r.id
                """,
                {"cancelled": RentalStatus.CANCELLED.value},
            )
        except Exception:
            self._logger.exception("Failed to load calendar rentals")
            raise

    def export_rows(self, kind: str) -> list[Row]:
        sql = EXPORT_QUERIES[kind]
        try:
            return self._storage.fetch_all(sql)
        except Exception:
            self._logger.exception("Failed to export kind=%s", kind)
            raise
