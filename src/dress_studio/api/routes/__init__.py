"""HTTP blueprints for the DressStudio API."""

from dress_studio.api.routes.appointments import appointments_bp
from dress_studio.api.routes.customers import customers_bp
from dress_studio.api.routes.dresses import dresses_bp
from dress_studio.api.routes.health import health_bp
from dress_studio.api.routes.payments import payments_bp
from dress_studio.api.routes.rentals import rentals_bp
from dress_studio.api.routes.reports import reports_bp
from dress_studio.api.routes.settings import settings_bp

BLUEPRINTS = [
    health_bp,
    dresses_bp,
    customers_bp,
    rentals_bp,
    payments_bp,
    reports_bp,
    appointments_bp,
    settings_bp,
]

__all__ = [
    "BLUEPRINTS",
    "appointments_bp",
    "customers_bp",
    "dresses_bp",
    "health_bp",
    "payments_bp",
    "rentals_bp",
    "reports_bp",
    "settings_bp",
]
