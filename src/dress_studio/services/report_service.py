"""Reporting engine: read-only aggregates over rentals and payments."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.domain.models import RentalStatus
from dress_studio.logging_config import get_logger
from dress_studio.repositories.report_repo import (
    EXPORT_QUERIES,
    CalendarEvent,
    DashboardSummary,
    MonthlyRevenue,
    PopularDress,
    ReportRepository,
    ReturningCustomer,
)
from dress_studio.services.errors import NotFoundError, ValidationError
from dress_studio.services.inventory_service import to_iso_date
from dress_studio.utils.csv_export import render_csv

ACTIVE_EVENT_COLOR = "#3b82f6"
CLOSED_EVENT_COLOR = "#10b981"
EXPORT_KINDS = tuple(EXPORT_QUERIES)


@dataclass(frozen=True, slots=True)
class ExportFile:
    filename: str
    content: str
    mimetype: str = "text/csv"


class ReportService:
    """Every call re-queries; nothing is cached."""

    def __init__(self, storage: Storage) -> None:
        self._repo = ReportRepository(storage)
        self._logger = get_logger(self.__class__.__name__)

    def dashboard_summary(self, today: Optional[date] = None) -> DashboardSummary:
        today = today or date.today()
        month_start = today.replace(day=1)
        return self._repo.dashboard_summary(today.isoformat(), month_start.isoformat())

    def monthly_revenue(
        self,
        start_date: Optional[str | date] = None,
        end_date: Optional[str | date] = None,
    ) -> list[MonthlyRevenue]:
        start = to_iso_date(start_date) if start_date else None
        end = to_iso_date(end_date) if end_date else None
        return self._repo.monthly_revenue(start, end)

    def popular_dresses(self, limit: int = 10) -> list[PopularDress]:
        if limit <= 0:
            raise ValidationError("Limit must be positive")
        return self._repo.popular_dresses(limit)

    def returning_customers(self) -> list[ReturningCustomer]:
        return self._repo.returning_customers()

    def calendar_events(self) -> list[CalendarEvent]:
        events = []
        for row in self._repo.calendar_rows():
            active = row["status"] == RentalStatus.ACTIVE.value
            events.append(
                CalendarEvent(
                    id=row["id"],
                    title=f"{row['dress_name']} - {row['customer_name']}",
                    start=row["start_date"],
                    end=row["end_date"],
                    background_color=ACTIVE_EVENT_COLOR if active else CLOSED_EVENT_COLOR,
                    extended_props={
                        "dressName": row["dress_name"],
                        "customerName": row["customer_name"],
                        "status": row["status"],
                    },
                )
            )
        return events

    def export_csv(self, kind: str) -> ExportFile:
        if kind not in EXPORT_QUERIES:
            raise ValidationError("Invalid export type")
        rows = self._repo.export_rows(kind)
        if not rows:
            raise NotFoundError("No data to export")
        self._logger.info("Exported kind=%s rows=%s", kind, len(rows))
        return ExportFile(filename=f"{kind}.csv", content=render_csv(rows))
