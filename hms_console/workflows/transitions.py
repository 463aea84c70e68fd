"""Status transition table for every entity kind the console acts on.

Detail pages derive their action buttons from this table instead of
redefining status sets per page. The backends remain the authority: an
action offered here can still be rejected by the server.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from hms_console.errors import ActionNotAllowedError
from hms_console.models.enums import (
    ActivationStatus,
    AdmissionStatus,
    AppointmentStatus,
    BedStatus,
    BloodRequestStatus,
    BloodUnitStatus,
    InvoiceStatus,
    LabOrderStatus,
    LeaveStatus,
    NotificationStatus,
    PrescriptionStatus,
    RecordStatus,
)


@dataclass(frozen=True)
class Transition:
    """An action available from a set of source statuses.

    `target` is None where the resulting status is decided by the backend
    (e.g. a payment leaves an invoice PAID or PARTIALLY_PAID).
    """

    action: str
    sources: frozenset[str]
    target: str | None = None
    label: str = ""

    @property
    def display_label(self) -> str:
        return self.label or self.action.replace("_", " ").title()


def transition(action: str, sources: set[str], target: str | None = None, label: str = "") -> Transition:
    return Transition(action=action, sources=frozenset(sources), target=target, label=label)


@dataclass(frozen=True)
class StatusMachine:
    """Allowed actions per status for one entity kind."""

    entity: str
    statuses: tuple[str, ...]
    transitions: tuple[Transition, ...]
    status_of: Callable[[Mapping[str, Any]], str | None] | None = None

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for t in self.transitions:
            if t.action in seen:
                raise ValueError(f"Duplicate action '{t.action}' for {self.entity}")
            seen.add(t.action)
            unknown = (t.sources | ({t.target} if t.target else set())) - set(self.statuses)
            if unknown:
                raise ValueError(f"Unknown statuses {sorted(unknown)} in {self.entity}.{t.action}")

    def current_status(self, entity: Mapping[str, Any]) -> str | None:
        """Status string of an entity as the transition table sees it."""
        if self.status_of is not None:
            return self.status_of(entity)
        status = entity.get("status")
        return str(status) if status is not None else None

    @property
    def actions(self) -> tuple[str, ...]:
        return tuple(t.action for t in self.transitions)

    def available_actions(self, status: str | None) -> list[Transition]:
        if status is None:
            return []
        return [t for t in self.transitions if status in t.sources]

    def action_names(self, status: str | None) -> list[str]:
        return [t.action for t in self.available_actions(status)]

    def can(self, action: str, status: str | None) -> bool:
        return status is not None and any(t.action == action and status in t.sources for t in self.transitions)

    def get(self, action: str) -> Transition:
        for t in self.transitions:
            if t.action == action:
                return t
        raise KeyError(f"{self.entity} has no action '{action}'")

    def require(self, action: str, status: str | None) -> Transition:
        """Return the transition for `action`, refusing it if `status` does not allow it.

        Raises:
            ActionNotAllowedError: If the action is unknown or not offered from `status`
        """
        if not self.can(action, status):
            raise ActionNotAllowedError(action, status)
        return self.get(action)

    def is_terminal(self, status: str) -> bool:
        return not self.available_actions(status)


def activation_status(flag: str) -> Callable[[Mapping[str, Any]], str | None]:
    """Map a boolean activity flag (`active`, `isActive`) to ACTIVE/INACTIVE."""

    def status_of(entity: Mapping[str, Any]) -> str | None:
        if flag not in entity:
            status = entity.get("status")
            return str(status) if status is not None else None
        return ActivationStatus.ACTIVE if entity[flag] else ActivationStatus.INACTIVE

    return status_of


def _activation_machine(entity: str, flag: str | None = None, edits: tuple[Transition, ...] = ()) -> StatusMachine:
    return StatusMachine(
        entity=entity,
        statuses=tuple(ActivationStatus),
        transitions=(
            transition("deactivate", {ActivationStatus.ACTIVE}, ActivationStatus.INACTIVE),
            transition("activate", {ActivationStatus.INACTIVE}, ActivationStatus.ACTIVE),
            *edits,
        ),
        status_of=activation_status(flag) if flag else None,
    )


_S = AppointmentStatus
APPOINTMENT = StatusMachine(
    entity="appointment",
    statuses=tuple(AppointmentStatus),
    transitions=(
        transition("confirm", {_S.SCHEDULED}, _S.CONFIRMED),
        transition("complete", {_S.CONFIRMED}, _S.COMPLETED),
        transition("no_show", {_S.CONFIRMED}, _S.NO_SHOW, "No Show"),
        transition("cancel", {_S.SCHEDULED, _S.CONFIRMED}, _S.CANCELLED),
    ),
)

_I = InvoiceStatus
INVOICE = StatusMachine(
    entity="invoice",
    statuses=tuple(InvoiceStatus),
    transitions=(
        transition("add_item", {_I.DRAFT}),
        transition("remove_item", {_I.DRAFT}),
        transition("issue", {_I.DRAFT}, _I.ISSUED),
        transition("pay", {_I.ISSUED, _I.PARTIALLY_PAID}, label="Record Payment"),
        transition("cancel", {_I.DRAFT, _I.ISSUED, _I.PARTIALLY_PAID}, _I.CANCELLED),
    ),
)

_L = LabOrderStatus
LAB_ORDER = StatusMachine(
    entity="lab_order",
    statuses=tuple(LabOrderStatus),
    transitions=(
        transition("add_item", {_L.ORDERED}, label="Add Test"),
        transition("remove_item", {_L.ORDERED}, label="Remove Test"),
        transition("collect", {_L.ORDERED}, _L.SAMPLE_COLLECTED, "Collect Sample"),
        transition("process", {_L.SAMPLE_COLLECTED}, _L.IN_PROGRESS, "Start Processing"),
        transition("record_result", {_L.IN_PROGRESS}),
        transition("cancel", {_L.ORDERED, _L.SAMPLE_COLLECTED}, _L.CANCELLED),
    ),
)

_R = RecordStatus
MEDICAL_RECORD = StatusMachine(
    entity="medical_record",
    statuses=tuple(RecordStatus),
    transitions=(
        transition("edit", {_R.DRAFT, _R.AMENDED}),
        transition("add_prescription", {_R.DRAFT, _R.AMENDED}),
        transition("finalize", {_R.DRAFT}, _R.FINALIZED),
        transition("amend", {_R.FINALIZED}, _R.AMENDED),
        transition("discontinue_prescription", {_R.DRAFT, _R.AMENDED}, label="Discontinue Prescription"),
    ),
)

_P = PrescriptionStatus
PRESCRIPTION = StatusMachine(
    entity="prescription",
    statuses=tuple(PrescriptionStatus),
    transitions=(
        transition("add_item", {_P.PENDING}),
        transition("remove_item", {_P.PENDING}),
        transition("dispense", {_P.PENDING}, _P.DISPENSED),
        transition("cancel", {_P.PENDING}, _P.CANCELLED),
    ),
)

ADMISSION = StatusMachine(
    entity="admission",
    statuses=tuple(AdmissionStatus),
    transitions=(
        transition("transfer", {AdmissionStatus.ADMITTED}),
        transition("discharge", {AdmissionStatus.ADMITTED}, AdmissionStatus.DISCHARGED),
    ),
)

BED = StatusMachine(
    entity="bed",
    statuses=tuple(BedStatus),
    transitions=(
        transition("maintenance", {BedStatus.AVAILABLE}, BedStatus.MAINTENANCE),
        transition("mark_available", {BedStatus.MAINTENANCE}, BedStatus.AVAILABLE),
    ),
)

LEAVE = StatusMachine(
    entity="leave",
    statuses=tuple(LeaveStatus),
    transitions=(
        transition("review", {LeaveStatus.PENDING}),
        transition("cancel", {LeaveStatus.PENDING}, LeaveStatus.CANCELLED),
    ),
)

_B = BloodRequestStatus
BLOOD_REQUEST = StatusMachine(
    entity="blood_request",
    statuses=tuple(BloodRequestStatus),
    transitions=(
        transition("fulfill", {_B.PENDING}, _B.FULFILLED),
        transition("reject", {_B.PENDING}, _B.REJECTED),
        transition("cancel", {_B.PENDING}, _B.CANCELLED),
    ),
)

BLOOD_UNIT = StatusMachine(
    entity="blood_unit",
    statuses=tuple(BloodUnitStatus),
    transitions=(transition("discard", {BloodUnitStatus.AVAILABLE}, BloodUnitStatus.DISCARDED),),
)

_N = NotificationStatus
NOTIFICATION = StatusMachine(
    entity="notification",
    statuses=tuple(NotificationStatus),
    transitions=(
        transition("mark_read", {_N.SENT}, _N.READ, "Mark as Read"),
        transition("retry", {_N.FAILED}),
    ),
)

# Editing is offered whether or not the record is active
_EDIT = (transition("edit", set(ActivationStatus)),)

PATIENT = _activation_machine("patient", edits=_EDIT)
DOCTOR = _activation_machine("doctor")
STAFF = _activation_machine("staff", "isActive", _EDIT)
MEDICINE = _activation_machine(
    "medicine", "active", (transition("adjust_stock", set(ActivationStatus), label="Adjust Stock"),)
)
LAB_TEST = _activation_machine("lab_test", "active", _EDIT)
WARD = _activation_machine("ward", "isActive")
INVENTORY_ITEM = _activation_machine("inventory_item", "active", _EDIT)

MACHINES: dict[str, StatusMachine] = {
    machine.entity: machine
    for machine in (
        APPOINTMENT,
        INVOICE,
        LAB_ORDER,
        MEDICAL_RECORD,
        PRESCRIPTION,
        ADMISSION,
        BED,
        LEAVE,
        BLOOD_REQUEST,
        BLOOD_UNIT,
        NOTIFICATION,
        PATIENT,
        DOCTOR,
        STAFF,
        MEDICINE,
        LAB_TEST,
        WARD,
        INVENTORY_ITEM,
    )
}
