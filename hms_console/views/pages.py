"""Page definitions: which backend calls, filters and actions each console page uses."""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from hms_console.clients.registry import HospitalClients
from hms_console.errors import ActionNotAllowedError, FormValidationError
from hms_console.models import forms
from hms_console.models.enums import ALL, BedStatus, RecordPrescriptionStatus
from hms_console.workflows import transitions
from hms_console.workflows.transitions import StatusMachine

ListFetch = Callable[[HospitalClients, dict[str, Any]], Awaitable[Any]]
DetailFetch = Callable[[HospitalClients, str], Awaitable[Any]]
ActionHandler = Callable[[HospitalClients, str, dict[str, Any]], Awaitable[Any]]
Submit = Callable[[HospitalClients, dict[str, Any]], Awaitable[Any]]
Precondition = Callable[[Mapping[str, Any], Mapping[str, Any]], None]


@dataclass(frozen=True)
class ListPage:
    """A paginated, filterable list backed by one list operation."""

    name: str
    title: str
    fetch: ListFetch
    columns: tuple[str, ...]
    filters: Mapping[str, str] = field(default_factory=dict)
    id_key: str | None = None
    detail_path: str | None = None
    machine: StatusMachine | None = None
    row_actions: Mapping[str, ActionHandler] = field(default_factory=dict)

    kind = "list"

    def link_for(self, item: Mapping[str, Any]) -> str | None:
        if not self.detail_path or not self.id_key or self.id_key not in item:
            return None
        return self.detail_path.format(id=item[self.id_key])


@dataclass(frozen=True)
class DetailPage:
    """One entity plus the status-driven actions that can be run on it."""

    name: str
    title: str
    fetch: DetailFetch
    machine: StatusMachine
    actions: Mapping[str, ActionHandler]
    id_key: str
    # Actions whose response is not the updated entity; the page reloads after them
    reload_after: frozenset[str] = frozenset()
    # Checks on the loaded entity beyond its status, e.g. the state of the item an action targets
    preconditions: Mapping[str, Precondition] = field(default_factory=dict)

    kind = "detail"

    def __post_init__(self) -> None:
        missing = set(self.machine.actions) - set(self.actions)
        if missing:
            raise ValueError(f"Page {self.name} has no handler for actions {sorted(missing)}")
        unknown = set(self.preconditions) - set(self.actions)
        if unknown:
            raise ValueError(f"Page {self.name} has preconditions for unknown actions {sorted(unknown)}")


@dataclass(frozen=True)
class FormPage:
    """A create form submitted once, then redirecting to the created entity."""

    name: str
    title: str
    form: type[forms.FormModel]
    submit: Submit
    id_key: str
    redirect: str
    booking: bool = False

    kind = "form"

    def redirect_for(self, created: Mapping[str, Any] | None) -> str | None:
        if not created or self.id_key not in created:
            return None
        return self.redirect.format(id=created[self.id_key])


def required_arg(args: Mapping[str, Any], key: str) -> Any:
    """Fetch an action argument, refusing the action when it is blank."""
    value = args.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise FormValidationError({key: "Field required"})
    return value


def validated(form: type[forms.FormModel], args: Mapping[str, Any]) -> dict[str, Any]:
    """Request body for an action whose inputs are validated like a create form."""
    return form.from_input(args).to_payload()


def _without(args: Mapping[str, Any], *keys: str) -> dict[str, Any]:
    return {k: v for k, v in args.items() if k not in keys}


def _activation_actions(activate, deactivate) -> dict[str, ActionHandler]:
    return {
        "activate": lambda c, entity_id, args: activate(c)(entity_id),
        "deactivate": lambda c, entity_id, args: deactivate(c)(entity_id),
    }


# Patients

PATIENTS = ListPage(
    name="patients",
    title="Patients",
    fetch=lambda c, params: c.patients.search_patients(params),
    columns=("patientId", "firstName", "lastName", "gender", "phoneNumber", "status"),
    filters={"search": "", "status": ALL, "gender": "", "bloodGroup": ""},
    id_key="patientId",
    detail_path="/patients/{id}",
)

PATIENT_DETAIL = DetailPage(
    name="patient_detail",
    title="Patient",
    fetch=lambda c, entity_id: c.patients.get_patient(entity_id),
    machine=transitions.PATIENT,
    actions=_activation_actions(lambda c: c.patients.activate_patient, lambda c: c.patients.deactivate_patient)
    | {
        "edit": lambda c, entity_id, args: c.patients.update_patient(
            entity_id, validated(forms.PatientUpdateForm, args)
        ),
    },
    id_key="patientId",
)

REGISTER_PATIENT = FormPage(
    name="register_patient",
    title="Register Patient",
    form=forms.PatientRegistrationForm,
    submit=lambda c, payload: c.patients.register_patient(payload),
    id_key="patientId",
    redirect="/patients/{id}",
)

# Doctors and appointments

DOCTORS = ListPage(
    name="doctors",
    title="Doctors",
    fetch=lambda c, params: c.appointments.search_doctors(params),
    columns=("doctorId", "firstName", "lastName", "specialization", "department", "status"),
    filters={"search": "", "status": ALL, "specialization": ""},
    id_key="doctorId",
    machine=transitions.DOCTOR,
    row_actions=_activation_actions(
        lambda c: c.appointments.activate_doctor, lambda c: c.appointments.deactivate_doctor
    ),
)

REGISTER_DOCTOR = FormPage(
    name="register_doctor",
    title="Register Doctor",
    form=forms.DoctorForm,
    submit=lambda c, payload: c.appointments.register_doctor(payload),
    id_key="doctorId",
    redirect="/doctors",
)

APPOINTMENTS = ListPage(
    name="appointments",
    title="Appointments",
    fetch=lambda c, params: c.appointments.search_appointments(params),
    columns=("appointmentId", "patientName", "doctorName", "appointmentDate", "appointmentTime", "type", "status"),
    filters={"patientId": "", "doctorId": "", "status": ALL, "dateFrom": "", "dateTo": "", "type": ""},
    id_key="appointmentId",
    detail_path="/appointments/{id}",
)

APPOINTMENT_DETAIL = DetailPage(
    name="appointment_detail",
    title="Appointment",
    fetch=lambda c, entity_id: c.appointments.get_appointment(entity_id),
    machine=transitions.APPOINTMENT,
    actions={
        "confirm": lambda c, entity_id, args: c.appointments.confirm_appointment(entity_id),
        "complete": lambda c, entity_id, args: c.appointments.complete_appointment(entity_id, args.get("notes", "")),
        "no_show": lambda c, entity_id, args: c.appointments.no_show_appointment(entity_id),
        "cancel": lambda c, entity_id, args: c.appointments.cancel_appointment(
            entity_id, required_arg(args, "reason")
        ),
    },
    id_key="appointmentId",
)

BOOK_APPOINTMENT = FormPage(
    name="book_appointment",
    title="Book Appointment",
    form=forms.AppointmentBookingForm,
    submit=lambda c, payload: c.appointments.book_appointment(payload),
    id_key="appointmentId",
    redirect="/appointments/{id}",
    booking=True,
)

# Medical records

RECORDS = ListPage(
    name="records",
    title="Medical Records",
    fetch=lambda c, params: c.records.search_records(params),
    columns=("recordId", "patientId", "doctorId", "chiefComplaint", "diagnosisCode", "status", "createdAt"),
    filters={"patientId": "", "doctorId": "", "appointmentId": "", "status": ALL, "dateFrom": "", "dateTo": ""},
    id_key="recordId",
    detail_path="/records/{id}",
)

async def _record_with_prescriptions(c: HospitalClients, record_id: str) -> dict[str, Any]:
    record, prescriptions = await asyncio.gather(
        c.records.get_record(record_id), c.records.get_prescriptions(record_id)
    )
    return {**(record or {}), "prescriptions": prescriptions or []}


def _active_prescription(record: Mapping[str, Any], args: Mapping[str, Any]) -> None:
    """Only an ACTIVE prescription on the record can be discontinued."""
    prescription_id = str(required_arg(args, "prescriptionId"))
    for prescription in record.get("prescriptions") or []:
        if str(prescription.get("prescriptionId")) == prescription_id:
            status = prescription.get("status")
            if status != RecordPrescriptionStatus.ACTIVE:
                raise ActionNotAllowedError("discontinue_prescription", status)
            return
    raise FormValidationError({"prescriptionId": f"No prescription {prescription_id} on this record"})


RECORD_DETAIL = DetailPage(
    name="record_detail",
    title="Medical Record",
    fetch=_record_with_prescriptions,
    machine=transitions.MEDICAL_RECORD,
    actions={
        "edit": lambda c, entity_id, args: c.records.update_record(
            entity_id, validated(forms.MedicalRecordUpdateForm, args)
        ),
        "add_prescription": lambda c, entity_id, args: c.records.add_prescription(entity_id, dict(args)),
        "finalize": lambda c, entity_id, args: c.records.finalize_record(entity_id),
        "amend": lambda c, entity_id, args: c.records.amend_record(entity_id),
        "discontinue_prescription": lambda c, entity_id, args: c.records.discontinue_prescription(
            entity_id, required_arg(args, "prescriptionId"), required_arg(args, "reason")
        ),
    },
    id_key="recordId",
    # Responses never carry the prescriptions, so every action reloads
    reload_after=frozenset(transitions.MEDICAL_RECORD.actions),
    preconditions={"discontinue_prescription": _active_prescription},
)

CREATE_RECORD = FormPage(
    name="create_record",
    title="New Medical Record",
    form=forms.MedicalRecordForm,
    submit=lambda c, payload: c.records.create_record(payload),
    id_key="recordId",
    redirect="/records/{id}",
)

# Billing

INVOICES = ListPage(
    name="invoices",
    title="Invoices",
    fetch=lambda c, params: c.billing.list_invoices(params),
    columns=("invoiceId", "patientId", "doctorId", "totalAmount", "amountPaid", "status"),
    filters={"patientId": "", "doctorId": "", "status": ALL},
    id_key="invoiceId",
    detail_path="/invoices/{id}",
)

INVOICE_DETAIL = DetailPage(
    name="invoice_detail",
    title="Invoice",
    fetch=lambda c, entity_id: c.billing.get_invoice(entity_id),
    machine=transitions.INVOICE,
    actions={
        "add_item": lambda c, entity_id, args: c.billing.add_invoice_item(entity_id, dict(args)),
        "remove_item": lambda c, entity_id, args: c.billing.remove_invoice_item(
            entity_id, required_arg(args, "itemId")
        ),
        "issue": lambda c, entity_id, args: c.billing.issue_invoice(entity_id),
        "pay": lambda c, entity_id, args: c.billing.record_payment(entity_id, validated(forms.PaymentForm, args)),
        "cancel": lambda c, entity_id, args: c.billing.cancel_invoice(entity_id, required_arg(args, "reason")),
    },
    id_key="invoiceId",
    reload_after=frozenset({"add_item", "remove_item"}),
)

CREATE_INVOICE = FormPage(
    name="create_invoice",
    title="New Invoice",
    form=forms.InvoiceForm,
    submit=lambda c, payload: c.billing.create_invoice(payload),
    id_key="invoiceId",
    redirect="/invoices/{id}",
)

# Pharmacy


def _adjust_stock(c: HospitalClients, medicine_id: str, args: Mapping[str, Any]) -> Awaitable[Any]:
    return c.pharmacy.adjust_stock(medicine_id, validated(forms.StockLevelForm, args)["quantity"])


MEDICINES = ListPage(
    name="medicines",
    title="Medicines",
    fetch=lambda c, params: c.pharmacy.list_medicines(params),
    columns=("medicineId", "name", "category", "unitPrice", "stockQuantity", "active"),
    filters={"name": "", "category": "", "isActive": "", "lowStock": ""},
    id_key="medicineId",
    detail_path="/medicines/{id}",
    machine=transitions.MEDICINE,
    row_actions={"adjust_stock": _adjust_stock},
)

MEDICINE_DETAIL = DetailPage(
    name="medicine_detail",
    title="Medicine",
    fetch=lambda c, entity_id: c.pharmacy.get_medicine(entity_id),
    machine=transitions.MEDICINE,
    actions=_activation_actions(lambda c: c.pharmacy.activate_medicine, lambda c: c.pharmacy.deactivate_medicine)
    | {"adjust_stock": _adjust_stock},
    id_key="medicineId",
)

ADD_MEDICINE = FormPage(
    name="add_medicine",
    title="Add Medicine",
    form=forms.MedicineForm,
    submit=lambda c, payload: c.pharmacy.add_medicine(payload),
    id_key="medicineId",
    redirect="/medicines/{id}",
)

PRESCRIPTIONS = ListPage(
    name="prescriptions",
    title="Prescriptions",
    fetch=lambda c, params: c.pharmacy.list_prescriptions(params),
    columns=("prescriptionId", "patientId", "doctorId", "totalAmount", "status"),
    filters={"patientId": "", "doctorId": "", "status": ALL},
    id_key="prescriptionId",
    detail_path="/prescriptions/{id}",
)

PRESCRIPTION_DETAIL = DetailPage(
    name="prescription_detail",
    title="Prescription",
    fetch=lambda c, entity_id: c.pharmacy.get_prescription(entity_id),
    machine=transitions.PRESCRIPTION,
    actions={
        "add_item": lambda c, entity_id, args: c.pharmacy.add_prescription_item(entity_id, dict(args)),
        "remove_item": lambda c, entity_id, args: c.pharmacy.remove_prescription_item(
            entity_id, required_arg(args, "itemId")
        ),
        "dispense": lambda c, entity_id, args: c.pharmacy.dispense_prescription(entity_id),
        "cancel": lambda c, entity_id, args: c.pharmacy.cancel_prescription(entity_id, required_arg(args, "reason")),
    },
    id_key="prescriptionId",
    reload_after=frozenset({"add_item", "remove_item"}),
)

# Laboratory

LAB_TESTS = ListPage(
    name="lab_tests",
    title="Lab Tests",
    fetch=lambda c, params: c.lab.list_lab_tests(params),
    columns=("testId", "name", "category", "normalRange", "price", "turnaroundHours", "active"),
    filters={"category": "", "activeOnly": ""},
    id_key="testId",
    detail_path="/lab-tests/{id}",
)

LAB_TEST_DETAIL = DetailPage(
    name="lab_test_detail",
    title="Lab Test",
    fetch=lambda c, entity_id: c.lab.get_lab_test(entity_id),
    machine=transitions.LAB_TEST,
    actions=_activation_actions(lambda c: c.lab.activate_lab_test, lambda c: c.lab.deactivate_lab_test)
    | {"edit": lambda c, entity_id, args: c.lab.update_lab_test(entity_id, validated(forms.LabTestForm, args))},
    id_key="testId",
)

ADD_LAB_TEST = FormPage(
    name="add_lab_test",
    title="Add Lab Test",
    form=forms.LabTestForm,
    submit=lambda c, payload: c.lab.add_lab_test(payload),
    id_key="testId",
    redirect="/lab-tests/{id}",
)

LAB_ORDERS = ListPage(
    name="lab_orders",
    title="Lab Orders",
    fetch=lambda c, params: c.lab.list_lab_orders(params),
    columns=("orderId", "patientId", "doctorId", "totalAmount", "status", "createdAt"),
    filters={"patientId": "", "doctorId": "", "status": ALL},
    id_key="orderId",
    detail_path="/lab-orders/{id}",
)

LAB_ORDER_DETAIL = DetailPage(
    name="lab_order_detail",
    title="Lab Order",
    fetch=lambda c, entity_id: c.lab.get_lab_order(entity_id),
    machine=transitions.LAB_ORDER,
    actions={
        "add_item": lambda c, entity_id, args: c.lab.add_lab_order_item(entity_id, dict(args)),
        "remove_item": lambda c, entity_id, args: c.lab.remove_lab_order_item(entity_id, required_arg(args, "itemId")),
        "collect": lambda c, entity_id, args: c.lab.collect_sample(entity_id),
        "process": lambda c, entity_id, args: c.lab.start_processing(entity_id),
        "record_result": lambda c, entity_id, args: c.lab.record_result(
            entity_id, required_arg(args, "itemId"), _without(args, "itemId")
        ),
        "cancel": lambda c, entity_id, args: c.lab.cancel_lab_order(entity_id, required_arg(args, "reason")),
    },
    id_key="orderId",
    reload_after=frozenset({"add_item", "remove_item", "record_result"}),
)

CREATE_LAB_ORDER = FormPage(
    name="create_lab_order",
    title="New Lab Order",
    form=forms.LabOrderForm,
    submit=lambda c, payload: c.lab.create_lab_order(payload),
    id_key="orderId",
    redirect="/lab-orders/{id}",
)

# Wards, beds and admissions

WARDS = ListPage(
    name="wards",
    title="Wards",
    fetch=lambda c, params: c.beds.list_wards(params),
    columns=("wardId", "name", "wardType", "floor", "totalBeds", "availableBeds", "isActive"),
    filters={"wardType": ""},
    id_key="wardId",
    detail_path="/beds?wardId={id}",
    machine=transitions.WARD,
    row_actions=_activation_actions(lambda c: c.beds.activate_ward, lambda c: c.beds.deactivate_ward),
)

BEDS = ListPage(
    name="beds",
    title="Beds",
    fetch=lambda c, params: c.beds.list_beds(params),
    columns=("bedId", "bedNumber", "wardId", "bedType", "status"),
    filters={"wardId": "", "status": ALL},
    id_key="bedId",
    machine=transitions.BED,
    row_actions={
        "maintenance": lambda c, entity_id, args: c.beds.update_bed_status(entity_id, BedStatus.MAINTENANCE),
        "mark_available": lambda c, entity_id, args: c.beds.update_bed_status(entity_id, BedStatus.AVAILABLE),
    },
)

ADMISSIONS = ListPage(
    name="admissions",
    title="Admissions",
    fetch=lambda c, params: c.beds.list_admissions(params),
    columns=("admissionId", "patientId", "bedId", "admittedAt", "status"),
    filters={"status": "", "patientId": ""},
    id_key="admissionId",
    detail_path="/admissions/{id}",
)

ADMISSION_DETAIL = DetailPage(
    name="admission_detail",
    title="Admission",
    fetch=lambda c, entity_id: c.beds.get_admission(entity_id),
    machine=transitions.ADMISSION,
    actions={
        "transfer": lambda c, entity_id, args: c.beds.transfer_patient(entity_id, required_arg(args, "newBedId")),
        "discharge": lambda c, entity_id, args: c.beds.discharge_patient(entity_id, args.get("dischargeNotes", "")),
    },
    id_key="admissionId",
)

CREATE_ADMISSION = FormPage(
    name="create_admission",
    title="Admit Patient",
    form=forms.AdmissionForm,
    submit=lambda c, payload: c.beds.admit_patient(payload),
    id_key="admissionId",
    redirect="/admissions/{id}",
)

# Staff

STAFF = ListPage(
    name="staff",
    title="Staff",
    fetch=lambda c, params: c.staff.list_staff(params),
    columns=("staffId", "firstName", "lastName", "staffRole", "department", "isActive"),
    filters={"role": "", "department": "", "status": ""},
    id_key="staffId",
    detail_path="/staff/{id}",
)

STAFF_DETAIL = DetailPage(
    name="staff_detail",
    title="Staff Member",
    fetch=lambda c, entity_id: c.staff.get_staff(entity_id),
    machine=transitions.STAFF,
    actions=_activation_actions(lambda c: c.staff.activate_staff, lambda c: c.staff.deactivate_staff)
    | {"edit": lambda c, entity_id, args: c.staff.update_staff(entity_id, validated(forms.StaffUpdateForm, args))},
    id_key="staffId",
)

LEAVES = ListPage(
    name="leaves",
    title="Leave Requests",
    fetch=lambda c, params: c.staff.list_leaves(params),
    columns=("leaveId", "staffId", "leaveType", "startDate", "endDate", "status"),
    filters={"status": "", "staffId": ""},
    id_key="leaveId",
    detail_path="/leaves/{id}",
)

LEAVE_DETAIL = DetailPage(
    name="leave_detail",
    title="Leave Request",
    fetch=lambda c, entity_id: c.staff.get_leave(entity_id),
    machine=transitions.LEAVE,
    actions={
        "review": lambda c, entity_id, args: c.staff.review_leave(
            entity_id, {"status": required_arg(args, "status"), **_without(args, "status")}
        ),
        "cancel": lambda c, entity_id, args: c.staff.cancel_leave(entity_id),
    },
    id_key="leaveId",
)

# Inventory

ITEMS = ListPage(
    name="items",
    title="Inventory Items",
    fetch=lambda c, params: c.inventory.list_items(params),
    columns=("itemId", "name", "category", "currentStock", "minStockLevel", "active"),
    filters={"category": "", "activeOnly": "", "lowStockOnly": ""},
    id_key="itemId",
    detail_path="/items/{id}",
)

ITEM_DETAIL = DetailPage(
    name="item_detail",
    title="Inventory Item",
    fetch=lambda c, entity_id: c.inventory.get_item(entity_id),
    machine=transitions.INVENTORY_ITEM,
    actions=_activation_actions(lambda c: c.inventory.activate_item, lambda c: c.inventory.deactivate_item)
    | {
        "edit": lambda c, entity_id, args: c.inventory.update_item(
            entity_id, validated(forms.InventoryItemUpdateForm, args)
        ),
    },
    id_key="itemId",
)

TRANSACTIONS = ListPage(
    name="transactions",
    title="Stock Transactions",
    fetch=lambda c, params: c.inventory.list_transactions(params),
    columns=("transactionId", "itemId", "transactionType", "quantity", "referenceId", "createdAt"),
    filters={"itemId": "", "type": ""},
    id_key="itemId",
    detail_path="/items/{id}",
)

# Blood bank

BLOOD_UNITS = ListPage(
    name="blood_units",
    title="Blood Units",
    fetch=lambda c, params: c.blood_bank.list_units(params),
    columns=("unitId", "bloodGroup", "donorName", "donatedAt", "expiresAt", "status"),
    filters={"bloodGroup": "", "status": ALL},
    id_key="unitId",
    detail_path="/blood-units/{id}",
)

BLOOD_UNIT_DETAIL = DetailPage(
    name="blood_unit_detail",
    title="Blood Unit",
    fetch=lambda c, entity_id: c.blood_bank.get_unit(entity_id),
    machine=transitions.BLOOD_UNIT,
    actions={"discard": lambda c, entity_id, args: c.blood_bank.discard_unit(entity_id)},
    id_key="unitId",
)

BLOOD_STOCK = ListPage(
    name="blood_stock",
    title="Blood Stock",
    fetch=lambda c, params: c.blood_bank.get_stock(),
    columns=("bloodGroup", "availableUnits", "expiringSoon"),
)

BLOOD_REQUESTS = ListPage(
    name="blood_requests",
    title="Blood Requests",
    fetch=lambda c, params: c.blood_bank.list_requests(params),
    columns=("requestId", "patientId", "bloodGroup", "unitsRequested", "priority", "status"),
    filters={"status": ALL, "patientId": ""},
    id_key="requestId",
    detail_path="/blood-requests/{id}",
)

BLOOD_REQUEST_DETAIL = DetailPage(
    name="blood_request_detail",
    title="Blood Request",
    fetch=lambda c, entity_id: c.blood_bank.get_request(entity_id),
    machine=transitions.BLOOD_REQUEST,
    actions={
        "fulfill": lambda c, entity_id, args: c.blood_bank.fulfill_request(entity_id),
        "reject": lambda c, entity_id, args: c.blood_bank.reject_request(entity_id, dict(args) or None),
        "cancel": lambda c, entity_id, args: c.blood_bank.cancel_request(entity_id),
    },
    id_key="requestId",
)

# Notifications

NOTIFICATIONS = ListPage(
    name="notifications",
    title="Notifications",
    fetch=lambda c, params: c.notifications.list_notifications(params),
    columns=("notificationId", "recipientId", "channel", "subject", "status", "createdAt"),
    filters={"recipientId": "", "status": ALL, "channel": ""},
    id_key="notificationId",
    detail_path="/notifications/{id}",
)

NOTIFICATION_DETAIL = DetailPage(
    name="notification_detail",
    title="Notification",
    fetch=lambda c, entity_id: c.notifications.get_notification(entity_id),
    machine=transitions.NOTIFICATION,
    actions={
        "mark_read": lambda c, entity_id, args: c.notifications.mark_as_read(entity_id),
        "retry": lambda c, entity_id, args: c.notifications.retry_notification(entity_id),
    },
    id_key="notificationId",
)

SEND_NOTIFICATION = FormPage(
    name="send_notification",
    title="Send Notification",
    form=forms.NotificationForm,
    submit=lambda c, payload: c.notifications.send_notification(payload),
    id_key="notificationId",
    redirect="/notifications/{id}",
)

# Create forms the list pages open inline

CREATE_PRESCRIPTION = FormPage(
    name="create_prescription",
    title="New Prescription",
    form=forms.PharmacyPrescriptionForm,
    submit=lambda c, payload: c.pharmacy.create_prescription(payload),
    id_key="prescriptionId",
    redirect="/prescriptions/{id}",
)

CREATE_WARD = FormPage(
    name="create_ward",
    title="New Ward",
    form=forms.WardForm,
    submit=lambda c, payload: c.beds.create_ward(payload),
    id_key="wardId",
    redirect="/beds?wardId={id}",
)

CREATE_BED = FormPage(
    name="create_bed",
    title="New Bed",
    form=forms.BedForm,
    submit=lambda c, payload: c.beds.create_bed(payload),
    id_key="wardId",
    redirect="/beds?wardId={id}",
)

CREATE_STAFF = FormPage(
    name="create_staff",
    title="Add Staff Member",
    form=forms.StaffForm,
    submit=lambda c, payload: c.staff.create_staff(payload),
    id_key="staffId",
    redirect="/staff/{id}",
)

REQUEST_LEAVE = FormPage(
    name="request_leave",
    title="Request Leave",
    form=forms.LeaveRequestForm,
    submit=lambda c, payload: c.staff.request_leave(payload),
    id_key="leaveId",
    redirect="/leaves/{id}",
)

CREATE_ITEM = FormPage(
    name="create_item",
    title="New Inventory Item",
    form=forms.InventoryItemForm,
    submit=lambda c, payload: c.inventory.create_item(payload),
    id_key="itemId",
    redirect="/items/{id}",
)

RECORD_TRANSACTION = FormPage(
    name="record_transaction",
    title="Record Stock Transaction",
    form=forms.StockTransactionForm,
    submit=lambda c, payload: c.inventory.record_transaction(payload),
    id_key="itemId",
    redirect="/transactions?itemId={id}",
)

REGISTER_BLOOD_UNIT = FormPage(
    name="register_blood_unit",
    title="Register Blood Unit",
    form=forms.BloodUnitForm,
    submit=lambda c, payload: c.blood_bank.register_unit(payload),
    id_key="unitId",
    redirect="/blood-units/{id}",
)

CREATE_BLOOD_REQUEST = FormPage(
    name="create_blood_request",
    title="New Blood Request",
    form=forms.BloodRequestForm,
    submit=lambda c, payload: c.blood_bank.create_request(payload),
    id_key="requestId",
    redirect="/blood-requests/{id}",
)
