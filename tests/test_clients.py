"""Tests for the backend REST clients."""

import httpx
import pytest
from conftest import ok

from hms_console.clients.base import ACTOR_HEADER, clean_params, normalize_error_message
from hms_console.clients.registry import HospitalClients
from hms_console.config import ConsoleConfig
from hms_console.errors import FALLBACK_ERROR_MESSAGE, ApiError


class TestEnvelopeUnwrapping:
    """Tests for turning envelope responses into data or ApiError."""

    @pytest.mark.asyncio
    async def test_success_resolves_to_data(self, gateway, clients):
        """Test that a successful envelope resolves to exactly its data."""
        patient = {"patientId": "P2025001", "firstName": "Ada"}
        gateway.add("GET", "/api/v1/patients/P2025001", ok(patient))

        result = await clients.patients.get_patient("P2025001")

        assert result == patient

    @pytest.mark.asyncio
    async def test_error_status_uses_envelope_message(self, gateway, clients):
        """Test that a non-2xx response raises with the envelope message."""
        gateway.add("GET", "/api/v1/patients/X", {"success": False, "message": "Patient not found"}, status=404)

        with pytest.raises(ApiError) as exc_info:
            await clients.patients.get_patient("X")

        assert exc_info.value.message == "Patient not found"
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_error_status_without_message_uses_status_text(self, gateway, clients):
        """Test that a non-2xx response without a message falls back to the status text."""
        gateway.add_handler("GET", "/api/v1/patients/X", lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(ApiError) as exc_info:
            await clients.patients.get_patient("X")

        assert exc_info.value.message == "Internal Server Error"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_failure_uses_error_text(self, gateway, clients):
        """Test that a transport failure raises with the transport error text and no status."""

        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        gateway.add_handler("GET", "/api/v1/patients/X", refuse)

        with pytest.raises(ApiError) as exc_info:
            await clients.patients.get_patient("X")

        assert exc_info.value.message == "Connection refused"
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_success_false_on_ok_status_is_an_error(self, gateway, clients):
        """Test that success=false is treated as a failure even on 200."""
        gateway.add("GET", "/apt-api/v1/appointments/A1", {"success": False, "message": "Slot taken", "data": None})

        with pytest.raises(ApiError) as exc_info:
            await clients.appointments.get_appointment("A1")

        assert exc_info.value.message == "Slot taken"

    @pytest.mark.asyncio
    async def test_non_json_body_uses_fallback(self, gateway, clients):
        """Test that an unparseable success body raises the fallback message."""
        gateway.add_handler("GET", "/api/v1/patients/X", lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(ApiError) as exc_info:
            await clients.patients.get_patient("X")

        assert exc_info.value.message == FALLBACK_ERROR_MESSAGE

    @pytest.mark.asyncio
    async def test_empty_body_resolves_to_none(self, gateway, clients):
        """Test that a 204 response resolves to None."""
        gateway.add_handler("DELETE", "/bill-api/v1/invoices/I1/items/IT1", lambda request: httpx.Response(204))

        assert await clients.billing.remove_invoice_item("I1", "IT1") is None


class TestNormalizeErrorMessage:
    """Tests for the error message precedence."""

    def test_body_message_wins(self):
        """Test that the body message is preferred over the status text."""
        response = httpx.Response(400, json={"message": "Invalid phone number"})
        assert normalize_error_message(response=response) == "Invalid phone number"

    def test_status_text_when_body_has_no_message(self):
        """Test the status text fallback."""
        response = httpx.Response(503, json={"success": False})
        assert normalize_error_message(response=response) == "Service Unavailable"

    def test_error_text_when_no_response(self):
        """Test the transport error fallback."""
        assert normalize_error_message(error=RuntimeError("timed out")) == "timed out"

    def test_fixed_fallback(self):
        """Test the final fallback."""
        assert normalize_error_message() == FALLBACK_ERROR_MESSAGE
        assert normalize_error_message(error=RuntimeError("")) == FALLBACK_ERROR_MESSAGE


class TestRequestShape:
    """Tests for headers, query parameters and prefixes."""

    @pytest.mark.asyncio
    async def test_writes_carry_default_actor(self, gateway, clients):
        """Test that writes send the configured default actor."""
        gateway.add("PATCH", "/apt-api/v1/appointments/A1/confirm", ok({"status": "CONFIRMED"}))

        await clients.appointments.confirm_appointment("A1")

        assert gateway.last.headers[ACTOR_HEADER] == "SYSTEM"

    @pytest.mark.asyncio
    async def test_writes_carry_explicit_actor(self, gateway, clients):
        """Test that an explicit actor overrides the default."""
        gateway.add("POST", "/api/v1/patients", ok({"patientId": "P1"}), status=201)

        await clients.patients.register_patient({"firstName": "Ada"}, actor="nurse-7")

        assert gateway.last.headers[ACTOR_HEADER] == "nurse-7"

    @pytest.mark.asyncio
    async def test_reads_carry_no_actor(self, gateway, clients):
        """Test that reads do not send the actor header."""
        gateway.add("GET", "/api/v1/patients/P1", ok({}))

        await clients.patients.get_patient("P1")

        assert ACTOR_HEADER not in gateway.last.headers

    @pytest.mark.asyncio
    async def test_blank_params_are_dropped(self, gateway, clients):
        """Test that empty and None query parameters are not sent."""
        gateway.add("GET", "/api/v1/patients", ok({"content": []}))

        await clients.patients.search_patients({"search": "", "status": None, "gender": "FEMALE", "page": 0})

        assert gateway.last.params == {"gender": "FEMALE", "page": "0"}

    def test_clean_params_empty(self):
        """Test clean_params on empty input."""
        assert clean_params(None) == {}
        assert clean_params({"a": ""}) == {}

    def test_prefix_override(self, http):
        """Test that service prefixes can be overridden per backend."""
        config = ConsoleConfig(gateway_url="http://gateway.test")
        config.service_prefixes["blood_bank"] = "/bb/"
        registry = HospitalClients(config=config, http=http)

        assert registry.blood_bank.prefix == "/bb/v1"
        assert registry.patients.prefix == "/api/v1"

    def test_unknown_service_rejected(self):
        """Test that an unknown backend name is rejected."""
        with pytest.raises(ValueError, match="Unknown backend service"):
            ConsoleConfig().service_prefix("radiology")


class TestConfigFromEnv:
    """Tests for environment configuration."""

    def test_env_overrides(self, monkeypatch):
        """Test that HMS_* variables override the defaults."""
        monkeypatch.setenv("HMS_GATEWAY_URL", "http://hms.internal:8080")
        monkeypatch.setenv("HMS_USER_ID", "admin-1")
        monkeypatch.setenv("HMS_PAGE_SIZE", "50")
        monkeypatch.setenv("HMS_LAB_PREFIX", "/laboratory")

        config = ConsoleConfig.from_env()

        assert config.gateway_url == "http://hms.internal:8080"
        assert config.default_actor == "admin-1"
        assert config.page_size == 50
        assert config.service_prefix("lab") == "/laboratory/v1"

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for name in ("HMS_GATEWAY_URL", "HMS_USER_ID", "HMS_PAGE_SIZE", "HMS_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        config = ConsoleConfig.from_env()

        assert config.gateway_url == "http://localhost:3000"
        assert config.default_actor == "SYSTEM"
        assert config.page_size == 20
        assert config.timeout == 30.0


class TestDomainClients:
    """Tests for the verb, path and body each operation sends."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "call, method, path, body",
        [
            (lambda c: c.appointments.cancel_appointment("A1", "Patient request"), "PATCH",
             "/apt-api/v1/appointments/A1/cancel", {"cancellationReason": "Patient request"}),
            (lambda c: c.appointments.no_show_appointment("A1"), "PATCH", "/apt-api/v1/appointments/A1/no-show", {}),
            (lambda c: c.appointments.deactivate_doctor("DR1"), "PATCH", "/apt-api/v1/doctors/DR1/deactivate", {}),
            (lambda c: c.records.finalize_record("R1"), "PATCH", "/emr-api/v1/records/R1/finalize", {}),
            (lambda c: c.records.discontinue_prescription("R1", "RX1", "Allergy"), "PATCH",
             "/emr-api/v1/records/R1/prescriptions/RX1/discontinue", {"discontinuedReason": "Allergy"}),
            (lambda c: c.billing.issue_invoice("I1"), "PATCH", "/bill-api/v1/invoices/I1/issue", None),
            (lambda c: c.billing.cancel_invoice("I1", "Duplicate"), "PATCH", "/bill-api/v1/invoices/I1/cancel",
             {"reason": "Duplicate"}),
            (lambda c: c.billing.add_invoice_item("I1", {"description": "X-ray", "quantity": 1}), "POST",
             "/bill-api/v1/invoices/I1/items", {"description": "X-ray", "quantity": 1}),
            (lambda c: c.pharmacy.adjust_stock("M1", 40), "PATCH", "/pharm-api/v1/medicines/M1/stock",
             {"quantity": 40}),
            (lambda c: c.pharmacy.dispense_prescription("RX1"), "PATCH", "/pharm-api/v1/prescriptions/RX1/dispense",
             None),
            (lambda c: c.lab.collect_sample("O1"), "PATCH", "/lab-api/v1/lab-orders/O1/collect", None),
            (lambda c: c.lab.record_result("O1", "IT1", {"result": "5.4"}), "PATCH",
             "/lab-api/v1/lab-orders/O1/items/IT1/result", {"result": "5.4"}),
            (lambda c: c.beds.update_bed_status("B1", "MAINTENANCE"), "PATCH", "/bed-api/v1/beds/B1/status",
             {"status": "MAINTENANCE"}),
            (lambda c: c.beds.transfer_patient("AD1", "B2"), "PATCH", "/bed-api/v1/admissions/AD1/transfer",
             {"newBedId": "B2"}),
            (lambda c: c.staff.review_leave("L1", {"status": "APPROVED"}), "PATCH", "/staff-api/v1/leaves/L1/review",
             {"status": "APPROVED"}),
            (lambda c: c.inventory.record_transaction({"itemId": "IT1", "quantity": 3}), "POST",
             "/inv-api/v1/transactions", {"itemId": "IT1", "quantity": 3}),
            (lambda c: c.blood_bank.reject_request("BR1"), "PATCH", "/blood-api/v1/requests/BR1/reject", {}),
            (lambda c: c.blood_bank.fulfill_request("BR1"), "PATCH", "/blood-api/v1/requests/BR1/fulfill", None),
            (lambda c: c.notifications.mark_as_read("N1"), "PATCH", "/notif-api/v1/notifications/N1/read", None),
        ],
    )
    async def test_operation_request(self, gateway, clients, call, method, path, body):
        """Test each operation's HTTP verb, path and body."""
        gateway.add(method, path, ok({"id": "x"}))

        await call(clients)

        assert gateway.last.method == method
        assert gateway.last.path == path
        assert gateway.last.body == body

    @pytest.mark.asyncio
    async def test_complete_sends_notes_as_query(self, gateway, clients):
        """Test that completion notes travel as a query parameter."""
        gateway.add("PATCH", "/apt-api/v1/appointments/A1/complete", ok({"status": "COMPLETED"}))

        await clients.appointments.complete_appointment("A1", "Follow up in 2 weeks")

        assert gateway.last.params == {"notes": "Follow up in 2 weeks"}
        assert gateway.last.body is None

    @pytest.mark.asyncio
    async def test_complete_without_notes_sends_no_query(self, gateway, clients):
        """Test that empty completion notes are not sent."""
        gateway.add("PATCH", "/apt-api/v1/appointments/A1/complete", ok({"status": "COMPLETED"}))

        await clients.appointments.complete_appointment("A1")

        assert gateway.last.params == {}

    @pytest.mark.asyncio
    async def test_availability_query(self, gateway, clients):
        """Test the availability lookup parameters."""
        gateway.add("GET", "/apt-api/v1/appointments/availability", ok({"availableSlots": ["09:00"]}))

        result = await clients.appointments.get_availability("DR1", "2026-01-10")

        assert result == {"availableSlots": ["09:00"]}
        assert gateway.last.params == {"doctorId": "DR1", "date": "2026-01-10"}
