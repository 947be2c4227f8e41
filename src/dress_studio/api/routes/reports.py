"""Report and CSV export endpoints."""

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request

from dress_studio.api.deps import get_services
from dress_studio.logging_config import get_logger
from dress_studio.repositories.report_repo import DashboardSummary
from dress_studio.services.errors import StorageError

reports_bp = Blueprint("reports", __name__, url_prefix="/api/reports")

logger = get_logger("api.reports")


@reports_bp.route("/dashboard", methods=["GET"])
def dashboard():
    try:
        summary = get_services().report_service.dashboard_summary()
    except StorageError:
        logger.exception("Dashboard query failed; returning zero counters")
        summary = DashboardSummary()
    return jsonify(summary.to_record())


@reports_bp.route("/revenue", methods=["GET"])
def revenue():
    months = get_services().report_service.monthly_revenue(
        start_date=request.args.get("start_date"),
        end_date=request.args.get("end_date"),
    )
    return jsonify([month.to_record() for month in months])


@reports_bp.route("/popular-dresses", methods=["GET"])
def popular_dresses():
    dresses = get_services().report_service.popular_dresses(
        limit=request.args.get("limit", default=10, type=int)
    )
    return jsonify([dress.to_record() for dress in dresses])


@reports_bp.route("/returning-customers", methods=["GET"])
def returning_customers():
    customers = get_services().report_service.returning_customers()
    return jsonify([customer.to_record() for customer in customers])


@reports_bp.route("/calendar", methods=["GET"])
def calendar():
    events = get_services().report_service.calendar_events()
    return jsonify([event.to_record() for event in events])


@reports_bp.route("/export/<kind>", methods=["GET"])
def export(kind: str):
    export_file = get_services().report_service.export_csv(kind)
    return Response(
        export_file.content,
        mimetype=export_file.mimetype,
        headers={
            "Content-Disposition": f"attachment; filename={export_file.filename}"
        },
    )
