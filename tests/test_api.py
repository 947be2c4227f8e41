"""
HTTP tests for the DressStudio API blueprints.
"""

import sys
from datetime import date

import pytest

from dress_studio.api.deps import EXTENSION_KEY
from dress_studio.api.routes import BLUEPRINTS
from dress_studio.services.errors import StorageError


@pytest.fixture
def dress(client):
    response = client.post(
        "/api/dresses",
        json={"name": "Evening Gown", "size": "38", "color": "red", "rental_price": 500},
    )
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def customer(client):
    response = client.post(
        "/api/customers", json={"name": "Dana", "phone": "050-1234567"}
    )
    assert response.status_code == 201
    return response.get_json()


@pytest.fixture
def rental(client, dress, customer):
    response = client.post(
        "/api/rentals",
        json={
            "dress_id": dress["id"],
            "customer_id": customer["id"],
            "start_date": "2024-07-01",
            "end_date": "2024-07-03",
            "total_price": 500,
            "deposit": 100,
        },
    )
    assert response.status_code == 201
    return response.get_json()


@pytest.mark.api
class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"
        assert "timestamp" in response.get_json()

    def test_unknown_route_is_json(self, client):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert "error" in response.get_json()

    def test_route_modules_are_documented(self):
        for blueprint in BLUEPRINTS:
            module = sys.modules[blueprint.import_name]
            assert module.__doc__, blueprint.import_name


@pytest.mark.api
class TestDressesApi:
    """Dress catalog endpoints."""

    def test_create_and_list(self, client, dress):
        response = client.get("/api/dresses")

        assert response.status_code == 200
        assert [item["id"] for item in response.get_json()] == [dress["id"]]
        assert dress["status"] == "available"
        assert dress["rental_price"] == 500

    def test_legacy_price_field_is_accepted(self, client):
        response = client.post("/api/dresses", json={"name": "Old", "price_per_day": 250})

        assert response.status_code == 201
        assert response.get_json()["rental_price"] == 250

    def test_blank_name_is_rejected(self, client):
        response = client.post("/api/dresses", json={"name": "  "})

        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid request body"

    def test_missing_body_is_rejected(self, client):
        response = client.post("/api/dresses")

        assert response.status_code == 400

    def test_get_missing_dress(self, client):
        response = client.get("/api/dresses/999")

        assert response.status_code == 404
        assert response.get_json() == {"error": "Dress 999 not found"}

    def test_manual_rented_status_conflicts(self, client, dress):
        response = client.put(
            f"/api/dresses/{dress['id']}",
            json={"name": dress["name"], "status": "rented"},
        )

        assert response.status_code == 409

    def test_availability(self, client, dress, rental):
        busy = client.get(
            f"/api/dresses/{dress['id']}/availability",
            query_string={"start_date": "2024-07-03", "end_date": "2024-07-05"},
        ).get_json()
        free = client.get(
            f"/api/dresses/{dress['id']}/availability",
            query_string={"start_date": "2024-07-04", "end_date": "2024-07-05"},
        ).get_json()

        assert busy["available"] is False
        assert busy["conflicts"][0]["id"] == rental["id"]
        assert free == {"available": True, "bookable": True, "conflicts": []}

    def test_availability_requires_dates(self, client, dress):
        response = client.get(f"/api/dresses/{dress['id']}/availability")

        assert response.status_code == 400

    def test_availability_rejects_partial_date(self, client, dress):
        response = client.get(
            f"/api/dresses/{dress['id']}/availability",
            query_string={"start_date": "2024-06", "end_date": "2024-06-10"},
        )

        assert response.status_code == 400
        assert "Invalid date" in response.get_json()["error"]

    def test_delete_with_active_rental(self, client, dress, rental):
        response = client.delete(f"/api/dresses/{dress['id']}")

        assert response.status_code == 400
        assert "active rentals" in response.get_json()["error"]

    def test_delete(self, client, dress):
        response = client.delete(f"/api/dresses/{dress['id']}")

        assert response.get_json() == {"message": "Dress deleted"}
        assert client.get(f"/api/dresses/{dress['id']}").status_code == 404


@pytest.mark.api
class TestCustomersApi:
    def test_search(self, client, customer):
        client.post("/api/customers", json={"name": "Noa"})

        response = client.get("/api/customers", query_string={"search": "Da"})

        assert [item["name"] for item in response.get_json()] == ["Dana"]

    def test_update(self, client, customer):
        response = client.put(
            f"/api/customers/{customer['id']}", json={"name": "Dana Levi"}
        )

        assert response.status_code == 200
        assert response.get_json()["name"] == "Dana Levi"

    def test_rental_history(self, client, customer, rental):
        response = client.get(f"/api/customers/{customer['id']}/rentals")

        assert [item["id"] for item in response.get_json()] == [rental["id"]]

    def test_delete_with_rentals_is_blocked(self, client, customer, rental):
        response = client.delete(f"/api/customers/{customer['id']}")

        assert response.status_code == 400


@pytest.mark.api
class TestRentalsApi:
    """Booking, editing and deleting rentals over HTTP."""

    def test_create_marks_dress_rented(self, client, dress, rental):
        assert rental["status"] == "active"
        assert rental["customer_name"] == "Dana"
        assert client.get(f"/api/dresses/{dress['id']}").get_json()["status"] == "rented"

    def test_overlap_is_rejected(self, client, dress, customer, rental):
        response = client.post(
            "/api/rentals",
            json={
                "dress_id": dress["id"],
                "customer_id": customer["id"],
                "start_date": "2024-07-02",
                "end_date": "2024-07-04",
                "total_price": 500,
            },
        )

        assert response.status_code == 400
        assert response.get_json() == {"error": "dress not available in selected dates"}

    def test_reversed_range_is_rejected(self, client, dress, customer):
        response = client.post(
            "/api/rentals",
            json={
                "dress_id": dress["id"],
                "customer_id": customer["id"],
                "start_date": "2024-07-05",
                "end_date": "2024-07-01",
                "total_price": 500,
            },
        )

        assert response.status_code == 400

    def test_unknown_dress(self, client, customer):
        response = client.post(
            "/api/rentals",
            json={
                "dress_id": 999,
                "customer_id": customer["id"],
                "start_date": "2024-07-01",
                "end_date": "2024-07-02",
                "total_price": 500,
            },
        )

        assert response.status_code == 404

    def test_detail_includes_payments(self, client, rental):
        client.post(
            "/api/payments",
            json={"rental_id": rental["id"], "amount": 200, "payment_date": "2024-07-01"},
        )

        detail = client.get(f"/api/rentals/{rental['id']}").get_json()

        assert detail["id"] == rental["id"]
        assert [payment["amount"] for payment in detail["payments"]] == [200]

    def test_complete_then_reactivate(self, client, dress, rental):
        done = client.put(f"/api/rentals/{rental['id']}", json={"status": "completed"})
        again = client.put(f"/api/rentals/{rental['id']}", json={"status": "active"})

        assert done.status_code == 200
        assert client.get(f"/api/dresses/{dress['id']}").get_json()["status"] == "available"
        assert again.status_code == 409

    def test_active_list(self, client, rental):
        response = client.get("/api/rentals/active")

        assert [item["id"] for item in response.get_json()] == [rental["id"]]

    def test_delete(self, client, dress, rental):
        response = client.delete(f"/api/rentals/{rental['id']}")

        assert response.get_json() == {"message": "Rental deleted"}
        assert client.get(f"/api/rentals/{rental['id']}").status_code == 404
        assert client.get(f"/api/dresses/{dress['id']}").get_json()["status"] == "available"

    def test_delete_missing(self, client):
        response = client.delete("/api/rentals/999")

        assert response.status_code == 404
        assert "not found" in response.get_json()["error"]

    def test_null_notes_clear_them(self, client, rental):
        url = f"/api/rentals/{rental['id']}"
        client.put(url, json={"notes": "call first"})

        kept = client.put(url, json={"deposit": 150}).get_json()
        cleared = client.put(url, json={"notes": None}).get_json()

        assert kept["notes"] == "call first"
        assert cleared["notes"] is None
        assert cleared["deposit"] == 150

    def test_reminder_link(self, client, rental):
        response = client.get(
            f"/api/rentals/{rental['id']}/reminder-link", query_string={"kind": "pickup"}
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["phone"] == "050-1234567"
        assert body["link"].startswith("https://wa.me/972501234567?text=")


@pytest.mark.api
class TestPaymentsApi:
    def test_record_and_list(self, client, rental):
        response = client.post(
            "/api/payments",
            json={
                "rental_id": rental["id"],
                "amount": 150,
                "payment_date": "2024-07-01",
                "method": "bit",
            },
        )

        assert response.status_code == 201
        assert response.get_json()["method"] == "bit"
        listed = client.get(f"/api/payments/rental/{rental['id']}").get_json()
        assert [item["amount"] for item in listed] == [150]

    def test_date_defaults_to_today(self, client, rental):
        response = client.post("/api/payments", json={"rental_id": rental["id"], "amount": 10})

        assert response.get_json()["payment_date"] == date.today().isoformat()

    def test_zero_amount_is_rejected(self, client, rental):
        response = client.post("/api/payments", json={"rental_id": rental["id"], "amount": 0})

        assert response.status_code == 400

    def test_unknown_method_is_rejected(self, client, rental):
        response = client.post(
            "/api/payments",
            json={"rental_id": rental["id"], "amount": 10, "method": "cheque"},
        )

        assert response.status_code == 400

    def test_delete_missing(self, client):
        assert client.delete("/api/payments/42").status_code == 404


@pytest.mark.api
class TestReportsApi:
    def test_dashboard(self, client, rental):
        body = client.get("/api/reports/dashboard").get_json()

        assert body["totalDresses"] == 1
        assert body["activeRentals"] == 1
        assert body["availableDresses"] == 0

    def test_dashboard_falls_back_to_zeros(self, app, client, monkeypatch):
        services = app.extensions[EXTENSION_KEY]

        def broken(today=None):
            raise StorageError("database is locked")

        monkeypatch.setattr(services.report_service, "dashboard_summary", broken)

        response = client.get("/api/reports/dashboard")

        assert response.status_code == 200
        assert set(response.get_json().values()) == {0}

    def test_revenue(self, client, rental):
        client.post(
            "/api/payments",
            json={"rental_id": rental["id"], "amount": 500, "payment_date": "2024-07-01"},
        )

        body = client.get("/api/reports/revenue").get_json()

        assert body == [{"month": "2024-07", "total": 500.0, "payment_count": 1}]

    def test_popular_and_returning(self, client, rental):
        popular = client.get("/api/reports/popular-dresses").get_json()
        returning = client.get("/api/reports/returning-customers").get_json()

        assert popular[0]["rental_count"] == 1
        assert returning == []

    def test_calendar(self, client, rental):
        events = client.get("/api/reports/calendar").get_json()

        assert events[0]["title"] == "Evening Gown - Dana"
        assert events[0]["backgroundColor"] == "#3b82f6"

    def test_export(self, client, dress):
        response = client.get("/api/reports/export/dresses")

        assert response.status_code == 200
        assert response.mimetype == "text/csv"
        assert response.headers["Content-Disposition"] == "attachment; filename=dresses.csv"
        assert response.get_data(as_text=True).startswith("id,name,size,color")

    def test_export_invalid_kind(self, client):
        response = client.get("/api/reports/export/secrets")

        assert response.status_code == 400
        assert response.get_json() == {"error": "Invalid export type"}

    def test_export_empty(self, client):
        response = client.get("/api/reports/export/rentals")

        assert response.status_code == 404
        assert response.get_json() == {"error": "No data to export"}


@pytest.mark.api
class TestAppointmentsApi:
    def test_create_and_get(self, client, customer):
        response = client.post(
            "/api/appointments",
            json={
                "customer_id": customer["id"],
                "type": "fitting",
                "date": "2024-07-02",
                "time": "10:30",
            },
        )

        assert response.status_code == 201
        created = response.get_json()
        fetched = client.get(f"/api/appointments/{created['id']}").get_json()
        assert fetched["customer_name"] == "Dana"
        assert fetched["reminder_sent"] is False

    def test_invalid_time(self, client):
        response = client.post(
            "/api/appointments",
            json={"type": "fitting", "date": "2024-07-02", "time": "25:00"},
        )

        assert response.status_code == 400

    def test_reminder_flow(self, client, customer):
        created = client.post(
            "/api/appointments",
            json={"customer_id": customer["id"], "type": "pickup", "date": "2024-07-02"},
        ).get_json()

        link = client.get(f"/api/appointments/{created['id']}/reminder-link").get_json()
        sent = client.post(f"/api/appointments/{created['id']}/reminder-sent")

        assert link["link"].startswith("https://wa.me/")
        assert sent.get_json() == {"success": True}
        assert client.get(f"/api/appointments/{created['id']}").get_json()["reminder_sent"] is True

    def test_update_status(self, client):
        created = client.post(
            "/api/appointments", json={"type": "return", "date": "2024-07-02"}
        ).get_json()

        response = client.put(
            f"/api/appointments/{created['id']}", json={"status": "completed"}
        )

        assert response.get_json()["status"] == "completed"

    def test_null_customer_unlinks(self, client, customer):
        created = client.post(
            "/api/appointments",
            json={"customer_id": customer["id"], "type": "fitting", "date": "2024-07-02"},
        ).get_json()

        response = client.put(
            f"/api/appointments/{created['id']}", json={"customer_id": None}
        )

        body = response.get_json()
        assert response.status_code == 200
        assert body["customer_id"] is None
        assert body["type"] == "fitting"

    def test_delete(self, client):
        created = client.post(
            "/api/appointments", json={"type": "other", "date": "2024-07-02"}
        ).get_json()

        assert client.delete(f"/api/appointments/{created['id']}").status_code == 200
        assert client.get(f"/api/appointments/{created['id']}").status_code == 404


@pytest.mark.api
class TestSettingsApi:
    def test_defaults(self, client):
        body = client.get("/api/settings").get_json()

        assert body["studio_name"] == "Rachel"

    def test_put_and_get(self, client):
        client.put("/api/settings/studio_name", json={"value": "Maya"})

        response = client.get("/api/settings/studio_name")

        assert response.get_json() == {"key": "studio_name", "value": "Maya"}

    def test_bulk(self, client):
        response = client.post("/api/settings/bulk", json={"a": "1", "b": 2})

        assert response.get_json() == {"success": True}
        body = client.get("/api/settings").get_json()
        assert body["a"] == "1"
        assert body["b"] == "2"

    def test_bulk_requires_object(self, client):
        response = client.post("/api/settings/bulk", json=["a"])

        assert response.status_code == 400

    def test_unknown_key(self, client):
        assert client.get("/api/settings/missing").status_code == 404
