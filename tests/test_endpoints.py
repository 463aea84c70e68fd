"""Tests for API endpoints."""

import httpx
import pytest
from conftest import GATEWAY_URL, ok
from fastapi.testclient import TestClient

from hms_console.clients.registry import get_clients
from hms_console.main import app


@pytest.fixture
def client(clients):
    app.dependency_overrides[get_clients] = lambda: clients
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check_returns_200(self, client):
        """Test that health check returns 200 status."""
        response = client.get("/health")
        assert response.status_code == 200

    def test_health_check_response_structure(self, client):
        """Test that health check returns expected JSON structure."""
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["version"] == "0.1.0"
        assert data["gateway_url"] == GATEWAY_URL
        assert "timestamp" in data

    def test_health_check_content_type(self, client):
        """Test that health check returns JSON content type."""
        response = client.get("/health")
        assert response.headers["content-type"] == "application/json"


class TestRoutesEndpoint:
    """Tests for the route listing."""

    def test_lists_booking_route(self, client):
        """Test that the route table includes the booking form."""
        data = client.get("/routes").json()
        assert {"path": "/appointments/book", "page": "book_appointment", "kind": "form", "title": "Book Appointment"} in data


class TestListPages:
    """Tests for rendering list pages."""

    def test_list_page(self, client, gateway):
        """Test rows, links, filters and pagination of a list page."""
        gateway.add(
            "GET",
            "/apt-api/v1/appointments",
            ok({"content": [{"appointmentId": "A1", "status": "SCHEDULED"}], "totalPages": 3, "totalElements": 41}),
        )

        response = client.get("/pages/appointments", params={"doctorId": "DR1", "page": "1"})

        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "list"
        assert data["rows"][0]["link"] == "/appointments/A1"
        assert data["pagination"]["page_buttons"] == [0, 1, 2]
        assert data["filters"]["doctorId"] == "DR1"
        assert gateway.last.params == {"page": "1", "size": "20", "doctorId": "DR1"}

    def test_row_actions_listed(self, client, gateway):
        """Test that rows carry the inline actions their status allows."""
        gateway.add("GET", "/bed-api/v1/beds", ok([{"bedId": "B1", "status": "MAINTENANCE"}]))

        data = client.get("/pages/beds").json()

        assert data["rows"][0]["actions"] == ["mark_available"]
        assert data["pagination"]["visible"] is False

    def test_invalid_page_number(self, client):
        """Test that a non-numeric page is rejected."""
        response = client.get("/pages/patients", params={"page": "two"})
        assert response.status_code == 400

    def test_unknown_page(self, client):
        """Test that unmapped paths return 404."""
        response = client.get("/pages/nowhere")
        assert response.status_code == 404

    def test_upstream_error_passed_through(self, client, gateway):
        """Test that a backend failure keeps its status and message."""
        gateway.add("GET", "/api/v1/patients", {"success": False, "message": "Database unavailable"}, status=503)

        response = client.get("/pages/patients")

        assert response.status_code == 503
        assert response.json()["detail"] == "Database unavailable"

    def test_transport_failure_is_bad_gateway(self, client, gateway):
        """Test that an unreachable backend is reported as 502."""

        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        gateway.add_handler("GET", "/api/v1/patients", refuse)

        response = client.get("/pages/patients")

        assert response.status_code == 502
        assert response.json()["detail"] == "Connection refused"

    def test_row_action(self, client, gateway):
        """Test running an inline row action."""
        gateway.add("GET", "/bed-api/v1/beds", ok([{"bedId": "B1", "status": "AVAILABLE"}]))
        gateway.add("PATCH", "/bed-api/v1/beds/B1/status", ok({"bedId": "B1", "status": "MAINTENANCE"}))

        response = client.post("/pages/beds/actions/maintenance", json={"item_id": "B1"})

        assert response.status_code == 200
        assert response.json()["entity"] == {"bedId": "B1", "status": "MAINTENANCE"}

    def test_row_action_on_later_page(self, client, gateway):
        """Test that a row action finds its item on the page and filters it was listed with."""

        def doctors(request):
            if request.url.params.get("page") == "1" and request.url.params.get("status") == "ACTIVE":
                items = [{"doctorId": "D99", "status": "ACTIVE"}]
            else:
                items = [{"doctorId": "D1", "status": "ACTIVE"}]
            return httpx.Response(200, json=ok({"content": items, "totalPages": 2, "totalElements": 21}))

        gateway.add_handler("GET", "/apt-api/v1/doctors", doctors)
        gateway.add("PATCH", "/apt-api/v1/doctors/D99/deactivate", ok({"doctorId": "D99", "status": "INACTIVE"}))

        response = client.post(
            "/pages/doctors/actions/deactivate",
            json={"item_id": "D99", "page": 1, "filters": {"status": "ACTIVE"}},
        )

        assert response.status_code == 200
        assert response.json()["entity"] == {"doctorId": "D99", "status": "INACTIVE"}
        assert gateway.requests[0].params == {"page": "1", "size": "20", "status": "ACTIVE"}
        assert gateway.requests[1].path == "/apt-api/v1/doctors/D99/deactivate"

    def test_row_action_item_not_on_page(self, client, gateway):
        """Test that an item missing from the requested page is reported as not found."""
        gateway.add("GET", "/apt-api/v1/doctors", ok({"content": [{"doctorId": "D1", "status": "ACTIVE"}]}))

        response = client.post("/pages/doctors/actions/deactivate", json={"item_id": "D99"})

        assert response.status_code == 404
        assert all(r.method == "GET" for r in gateway.requests)

    def test_row_action_negative_page(self, client):
        """Test that a negative page number is rejected."""
        response = client.post("/pages/doctors/actions/deactivate", json={"item_id": "D1", "page": -1})
        assert response.status_code == 422

    def test_row_action_requires_item(self, client):
        """Test that list actions need an item id."""
        response = client.post("/pages/beds/actions/maintenance", json={})
        assert response.status_code == 422


class TestDetailPages:
    """Tests for detail pages and their actions."""

    def test_detail_page_lists_actions(self, client, gateway):
        """Test that a detail page offers the actions its status allows."""
        gateway.add("GET", "/apt-api/v1/appointments/A1", ok({"appointmentId": "A1", "status": "SCHEDULED"}))

        data = client.get("/pages/appointments/A1").json()

        assert data["kind"] == "detail"
        assert data["status"] == "SCHEDULED"
        assert data["actions"] == [{"action": "confirm", "label": "Confirm"}, {"action": "cancel", "label": "Cancel"}]

    def test_missing_entity(self, client):
        """Test that a backend 404 is passed through."""
        response = client.get("/pages/appointments/NOPE")
        assert response.status_code == 404
        assert response.json()["detail"] == "No route /apt-api/v1/appointments/NOPE"

    def test_run_action(self, client, gateway):
        """Test running an allowed action."""
        gateway.add("GET", "/apt-api/v1/appointments/A1", ok({"appointmentId": "A1", "status": "SCHEDULED"}))
        gateway.add(
            "PATCH",
            "/apt-api/v1/appointments/A1/cancel",
            ok({"appointmentId": "A1", "status": "CANCELLED"}),
        )

        response = client.post("/pages/appointments/A1/actions/cancel", json={"args": {"reason": "Travel"}})

        assert response.status_code == 200
        assert response.json() == {"action": "cancel", "entity": {"appointmentId": "A1", "status": "CANCELLED"}}
        assert gateway.last.body == {"cancellationReason": "Travel"}
        assert gateway.last.headers["X-User-Id"] == "SYSTEM"

    def test_disallowed_action_conflict(self, client, gateway):
        """Test that an action the status does not offer returns 409 without a backend call."""
        gateway.add("GET", "/apt-api/v1/appointments/A1", ok({"appointmentId": "A1", "status": "COMPLETED"}))

        response = client.post("/pages/appointments/A1/actions/confirm", json={})

        assert response.status_code == 409
        assert [r.method for r in gateway.requests] == ["GET"]

    def test_missing_action_argument(self, client, gateway):
        """Test that a cancellation without a reason is rejected."""
        gateway.add("GET", "/apt-api/v1/appointments/A1", ok({"appointmentId": "A1", "status": "SCHEDULED"}))

        response = client.post("/pages/appointments/A1/actions/cancel", json={"args": {}})

        assert response.status_code == 422
        assert response.json()["detail"]["fields"] == {"reason": "Field required"}

    def test_failed_reload_after_item_action(self, client, gateway):
        """Test that a reload failing after an item action is reported instead of the stale entity."""
        reads = []

        def invoice(request):
            reads.append(request)
            if len(reads) == 1:
                return httpx.Response(200, json=ok({"invoiceId": "I1", "status": "DRAFT", "items": []}))
            return httpx.Response(503, json={"success": False, "message": "Billing unavailable"})

        gateway.add_handler("GET", "/bill-api/v1/invoices/I1", invoice)
        gateway.add("POST", "/bill-api/v1/invoices/I1/items", ok({"itemId": "IT1"}))

        response = client.post(
            "/pages/invoices/I1/actions/add_item",
            json={"args": {"description": "Consultation", "quantity": 1, "unitPrice": 50}},
        )

        assert response.status_code == 503
        assert response.json()["detail"] == "Billing unavailable"

    def test_invalid_payment_amount(self, client, gateway):
        """Test that a payment without a usable amount is rejected before any write."""
        gateway.add("GET", "/bill-api/v1/invoices/I1", ok({"invoiceId": "I1", "status": "ISSUED"}))

        response = client.post("/pages/invoices/I1/actions/pay", json={"args": {"amount": "0"}})

        assert response.status_code == 422
        assert "amount" in response.json()["detail"]["fields"]
        assert [r.method for r in gateway.requests] == ["GET"]

    def test_form_has_no_actions(self, client):
        """Test that form pages reject action calls."""
        response = client.post("/pages/patients/register/actions/confirm", json={})
        assert response.status_code == 405


class TestFormPages:
    """Tests for rendering and submitting create forms."""

    def test_form_page(self, client):
        """Test that a form page lists its fields."""
        data = client.get("/pages/lab-tests/new").json()

        assert data["kind"] == "form"
        assert "turnaroundHours" in data["fields"]
        assert set(data["required"]) == {"name", "category", "price"}
        assert data["available_slots"] is None

    def test_submit_redirects_to_created(self, client, gateway):
        """Test that a valid submit returns the created entity's path."""
        gateway.add("POST", "/api/v1/patients", ok({"patientId": "P2025001"}), status=201)

        response = client.post(
            "/pages/patients/register",
            json={
                "values": {
                    "firstName": "Ada",
                    "lastName": "Lovelace",
                    "dateOfBirth": "1990-12-10",
                    "gender": "FEMALE",
                    "phoneNumber": "555-0100",
                    "email": "",
                }
            },
        )

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/patients/P2025001"
        assert len(gateway.requests) == 1
        assert "email" not in gateway.last.body

    def test_invalid_submit(self, client, gateway):
        """Test that missing fields return 422 and send nothing."""
        response = client.post("/pages/patients/register", json={"values": {"firstName": "Ada"}})

        assert response.status_code == 422
        assert "lastName" in response.json()["detail"]["fields"]
        assert gateway.requests == []

    def test_register_doctor(self, client, gateway):
        """Test that registering a doctor returns to the doctors list."""
        gateway.add("POST", "/apt-api/v1/doctors", ok({"doctorId": "DR7"}), status=201)

        response = client.post(
            "/pages/doctors/new",
            json={"values": {"firstName": "Gregory", "lastName": "House", "specialization": "Diagnostics"}},
        )

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/doctors"
        assert gateway.last.body == {
            "firstName": "Gregory",
            "lastName": "House",
            "specialization": "Diagnostics",
            "consultationDurationMinutes": 30,
        }

    def test_submit_to_list_page(self, client):
        """Test that only form pages accept submits."""
        response = client.post("/pages/patients", json={"values": {}})
        assert response.status_code == 405

    def test_booking_page_shows_slots(self, client, gateway):
        """Test that the booking page loads slots for a preselected doctor and date."""
        gateway.add("GET", "/apt-api/v1/appointments/availability", ok({"availableSlots": ["09:00", "09:30"]}))

        data = client.get("/pages/appointments/book", params={"doctorId": "DR1", "appointmentDate": "2026-01-10"}).json()

        assert data["available_slots"] == ["09:00", "09:30"]
        assert data["values"] == {"doctorId": "DR1", "appointmentDate": "2026-01-10"}

    def test_booking_submit(self, client, gateway):
        """Test booking a listed slot."""
        gateway.add("GET", "/apt-api/v1/appointments/availability", ok({"availableSlots": ["09:00", "09:30"]}))
        gateway.add("POST", "/apt-api/v1/appointments", ok({"appointmentId": "APT123", "status": "SCHEDULED"}))

        response = client.post(
            "/pages/appointments/book",
            json={
                "values": {
                    "patientId": "P2025001",
                    "doctorId": "DR1",
                    "appointmentDate": "2026-01-10",
                    "appointmentTime": "09:00",
                }
            },
        )

        assert response.status_code == 200
        assert response.json()["redirect_to"] == "/appointments/APT123"
        assert gateway.last.path == "/apt-api/v1/appointments"
        assert gateway.last.body["appointmentTime"] == "09:00"

    def test_booking_unlisted_slot(self, client, gateway):
        """Test that a time outside the loaded slots is rejected before booking."""
        gateway.add("GET", "/apt-api/v1/appointments/availability", ok({"availableSlots": ["09:00"]}))

        response = client.post(
            "/pages/appointments/book",
            json={
                "values": {
                    "patientId": "P2025001",
                    "doctorId": "DR1",
                    "appointmentDate": "2026-01-10",
                    "appointmentTime": "14:00",
                }
            },
        )

        assert response.status_code == 422
        assert all(r.method == "GET" for r in gateway.requests)
