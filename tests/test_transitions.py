"""Tests for the status transition table."""

import pytest

from hms_console.errors import ActionNotAllowedError
from hms_console.models.enums import AppointmentStatus, InvoiceStatus
from hms_console.workflows.transitions import (
    APPOINTMENT,
    INVOICE,
    LAB_ORDER,
    MACHINES,
    MEDICAL_RECORD,
    MEDICINE,
    NOTIFICATION,
    PATIENT,
    StatusMachine,
    transition,
)


class TestAppointmentTransitions:
    """Tests for appointment actions per status."""

    @pytest.mark.parametrize(
        "status, expected",
        [
            (AppointmentStatus.SCHEDULED, ["confirm", "cancel"]),
            (AppointmentStatus.CONFIRMED, ["complete", "no_show", "cancel"]),
            (AppointmentStatus.COMPLETED, []),
            (AppointmentStatus.CANCELLED, []),
            (AppointmentStatus.NO_SHOW, []),
        ],
    )
    def test_actions_by_status(self, status, expected):
        """Test that visible actions depend only on the status."""
        assert APPOINTMENT.action_names(status) == expected

    def test_completed_is_terminal(self):
        """Test that a completed appointment offers nothing."""
        assert APPOINTMENT.is_terminal(AppointmentStatus.COMPLETED)
        for action in ("confirm", "cancel", "complete", "no_show"):
            assert not APPOINTMENT.can(action, AppointmentStatus.COMPLETED)

    def test_require_refuses_disallowed_action(self):
        """Test that require raises for an action the status does not offer."""
        with pytest.raises(ActionNotAllowedError) as exc_info:
            APPOINTMENT.require("complete", AppointmentStatus.SCHEDULED)
        assert exc_info.value.action == "complete"
        assert exc_info.value.status == "SCHEDULED"

    def test_labels(self):
        """Test display labels."""
        assert APPOINTMENT.get("no_show").display_label == "No Show"
        assert APPOINTMENT.get("confirm").display_label == "Confirm"


class TestOtherMachines:
    """Tests for the remaining entity kinds."""

    def test_invoice_payment_states(self):
        """Test that payment is offered only once issued."""
        assert not INVOICE.can("pay", InvoiceStatus.DRAFT)
        assert INVOICE.can("pay", InvoiceStatus.ISSUED)
        assert INVOICE.can("pay", InvoiceStatus.PARTIALLY_PAID)
        assert INVOICE.action_names(InvoiceStatus.PAID) == []

    def test_lab_order_pipeline(self):
        """Test the lab order pipeline order."""
        assert LAB_ORDER.action_names("ORDERED") == ["add_item", "remove_item", "collect", "cancel"]
        assert LAB_ORDER.action_names("SAMPLE_COLLECTED") == ["process", "cancel"]
        assert LAB_ORDER.action_names("IN_PROGRESS") == ["record_result"]

    def test_record_amend_cycle(self):
        """Test that finalized records can be amended and amended records edited."""
        assert MEDICAL_RECORD.action_names("FINALIZED") == ["amend"]
        assert "edit" in MEDICAL_RECORD.action_names("AMENDED")
        assert "finalize" not in MEDICAL_RECORD.action_names("AMENDED")

    def test_record_prescriptions_discontinued_while_editable(self):
        """Test that prescriptions can be discontinued on draft and amended records only."""
        assert MEDICAL_RECORD.can("discontinue_prescription", "DRAFT")
        assert MEDICAL_RECORD.can("discontinue_prescription", "AMENDED")
        assert not MEDICAL_RECORD.can("discontinue_prescription", "FINALIZED")

    def test_notification_actions(self):
        """Test notification actions."""
        assert NOTIFICATION.action_names("SENT") == ["mark_read"]
        assert NOTIFICATION.action_names("FAILED") == ["retry"]
        assert NOTIFICATION.action_names("READ") == []

    def test_unknown_status_has_no_actions(self):
        """Test that unknown or missing statuses offer nothing."""
        assert APPOINTMENT.action_names("ARCHIVED") == []
        assert APPOINTMENT.action_names(None) == []

    def test_every_machine_registered(self):
        """Test the machine registry."""
        assert MACHINES["appointment"] is APPOINTMENT
        assert len(MACHINES) == 18


class TestActivation:
    """Tests for activatable records."""

    def test_status_field(self):
        """Test entities carrying a status field."""
        assert PATIENT.current_status({"status": "ACTIVE"}) == "ACTIVE"
        assert PATIENT.action_names("ACTIVE") == ["deactivate", "edit"]
        assert PATIENT.action_names("INACTIVE") == ["activate", "edit"]

    def test_boolean_flag(self):
        """Test entities carrying a boolean active flag."""
        assert MEDICINE.current_status({"active": True}) == "ACTIVE"
        assert MEDICINE.current_status({"active": False}) == "INACTIVE"

    def test_boolean_flag_missing_falls_back_to_status(self):
        """Test fallback to status when the flag is absent."""
        assert MEDICINE.current_status({"status": "INACTIVE"}) == "INACTIVE"
        assert MEDICINE.current_status({}) is None

    def test_stock_adjustable_in_either_state(self):
        """Test that stock can be set on active and inactive medicines."""
        assert MEDICINE.action_names("ACTIVE") == ["deactivate", "adjust_stock"]
        assert MEDICINE.can("adjust_stock", "INACTIVE")
        assert MEDICINE.get("adjust_stock").display_label == "Adjust Stock"


class TestMachineValidation:
    """Tests for transition table consistency checks."""

    def test_duplicate_action_rejected(self):
        """Test that an action cannot be declared twice."""
        with pytest.raises(ValueError, match="Duplicate action"):
            StatusMachine(
                entity="thing",
                statuses=("A", "B"),
                transitions=(transition("go", {"A"}, "B"), transition("go", {"B"}, "A")),
            )

    def test_unknown_status_rejected(self):
        """Test that transitions may only reference declared statuses."""
        with pytest.raises(ValueError, match="Unknown statuses"):
            StatusMachine(entity="thing", statuses=("A",), transitions=(transition("go", {"A"}, "Z"),))
