"""
Pytest configuration and shared fixtures for the DressStudio tests.

Every test runs against a fresh in-memory SQLite database with the
migrations applied.
"""

from __future__ import annotations

import pytest

from dress_studio.api import create_app
from dress_studio.app_services import build_services
from dress_studio.config import StudioConfig
from dress_studio.db.migrations import apply_migrations
from dress_studio.db.storage import SqlAlchemyStorage, SqliteStorage


@pytest.fixture
def config():
    return StudioConfig()


@pytest.fixture
def storage():
    storage = SqliteStorage(":memory:")
    apply_migrations(storage)
    yield storage
    storage.close()


@pytest.fixture(params=["sqlite3", "sqlalchemy"])
def any_storage(request):
    """Run the test once per storage implementation."""
    if request.param == "sqlite3":
        storage = SqliteStorage(":memory:")
    else:
        storage = SqlAlchemyStorage("sqlite://")
    apply_migrations(storage)
    yield storage
    storage.close()


@pytest.fixture
def services(storage, config):
    return build_services(storage, config)


@pytest.fixture
def strict_services(storage):
    return build_services(
        storage,
        StudioConfig(strict_update_overlap=True, strict_release=True),
    )


@pytest.fixture
def app(storage, config):
    app = create_app(config, storage=storage)
    app.config.update({"TESTING": True})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_dress(services):
    def _make(name="Evening Gown", rental_price=500.0, **kwargs):
        return services.inventory_service.create_dress(
            name=name, rental_price=rental_price, **kwargs
        )

    return _make


@pytest.fixture
def make_customer(services):
    def _make(name="Dana", phone="050-1234567", **kwargs):
        return services.customer_service.create_customer(
            name=name, phone=phone, **kwargs
        )

    return _make


@pytest.fixture
def make_rental(services):
    def _make(dress, customer, start_date, end_date, total_price=500.0, deposit=0.0):
        return services.rental_service.create_rental(
            dress_id=dress.id,
            customer_id=customer.id,
            start_date=start_date,
            end_date=end_date,
            total_price=total_price,
            deposit=deposit,
        )

    return _make
