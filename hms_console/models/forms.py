"""Create-form and action-input models.

Each form validates required-field presence and builds a request body that
holds only the populated fields: blank optional inputs are omitted rather
than sent as empty strings.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from hms_console.errors import FormValidationError
from hms_console.models.enums import (
    AppointmentType,
    BedType,
    BloodGroup,
    Department,
    Gender,
    ItemCategory,
    LabTestCategory,
    LeaveType,
    MedicineCategory,
    NotificationChannel,
    PaymentMethod,
    RecipientType,
    ReferenceType,
    RequestPriority,
    StaffRole,
    TransactionType,
    WardType,
)

TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"


class FormModel(BaseModel):
    """Base for create forms: camelCase on the wire, blanks treated as absent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_blank_inputs(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        cleaned = {}
        for key, value in data.items():
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            if value is None:
                continue
            cleaned[key] = value
        return cleaned

    @classmethod
    def from_input(cls, data: Mapping[str, Any]):
        """Validate raw form input.

        Raises:
            FormValidationError: With one message per offending field
        """
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            field_errors = {}
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "form"
                field_errors.setdefault(field, error["msg"])
            raise FormValidationError(field_errors) from e

    def to_payload(self) -> dict[str, Any]:
        """Request body holding only the populated fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PatientRegistrationForm(FormModel):
    first_name: str = Field(max_length=50)
    last_name: str = Field(max_length=50)
    date_of_birth: date
    gender: Gender
    phone_number: str = Field(max_length=20)
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    blood_group: BloodGroup | None = None
    known_allergies: str | None = None
    chronic_conditions: str | None = None


class DoctorForm(FormModel):
    first_name: str
    last_name: str
    specialization: str
    department: str | None = None
    phone_number: str | None = None
    email: str | None = None
    consultation_duration_minutes: int = Field(default=30, gt=0)


class AppointmentBookingForm(FormModel):
    patient_id: str
    doctor_id: str
    appointment_date: date
    appointment_time: str = Field(pattern=TIME_PATTERN)
    appointment_type: AppointmentType = AppointmentType.CONSULTATION
    reason: str | None = None


class MedicalRecordForm(FormModel):
    patient_id: str
    doctor_id: str
    chief_complaint: str
    appointment_id: str | None = None
    clinical_notes: str | None = None
    diagnosis_code: str | None = None
    diagnosis_description: str | None = None
    blood_pressure_systolic: int | None = None
    blood_pressure_diastolic: int | None = None
    heart_rate: int | None = None
    oxygen_saturation_percent: int | None = None
    respiratory_rate: int | None = None
    temperature_celsius: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None


class InvoiceForm(FormModel):
    patient_id: str
    doctor_id: str
    appointment_id: str | None = None
    tax_amount: float | None = Field(default=None, ge=0)
    discount_amount: float | None = Field(default=None, ge=0)
    notes: str | None = None


class MedicineForm(FormModel):
    name: str
    category: MedicineCategory
    unit_price: float = Field(ge=0)
    generic_name: str | None = None
    manufacturer: str | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    reorder_level: int | None = Field(default=None, ge=0)
    description: str | None = None


class PharmacyPrescriptionForm(FormModel):
    patient_id: str
    doctor_id: str
    notes: str | None = None


class LabTestForm(FormModel):
    name: str
    category: LabTestCategory
    price: float = Field(ge=0)
    turnaround_hours: int = Field(default=24, gt=0)
    description: str | None = None
    normal_range: str | None = None
    unit: str | None = None


class LabOrderForm(FormModel):
    patient_id: str
    doctor_id: str
    notes: str | None = None


class WardForm(FormModel):
    name: str
    ward_type: WardType = WardType.GENERAL
    floor: int = 1
    description: str | None = None


class BedForm(FormModel):
    ward_id: str
    bed_number: str
    bed_type: BedType = BedType.GENERAL


class AdmissionForm(FormModel):
    patient_id: str
    bed_id: str
    admit_reason: str


class StaffForm(FormModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    staff_role: StaffRole = StaffRole.DOCTOR
    department: Department = Department.GENERAL
    license_number: str | None = None
    join_date: date | None = None


class LeaveRequestForm(FormModel):
    staff_id: str
    leave_type: LeaveType = LeaveType.CASUAL
    start_date: date
    end_date: date
    reason: str

    @model_validator(mode="after")
    def check_date_order(self) -> "LeaveRequestForm":
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class InventoryItemForm(FormModel):
    name: str
    category: ItemCategory = ItemCategory.CONSUMABLE
    unit: str
    initial_stock: int = Field(default=0, ge=0)
    min_stock_level: int = Field(default=10, ge=0)
    unit_price: float | None = Field(default=None, ge=0)
    description: str | None = None


class StockTransactionForm(FormModel):
    item_id: str
    transaction_type: TransactionType = TransactionType.IN
    quantity: int = Field(default=1, gt=0)
    reference_id: str | None = None
    notes: str | None = None


class BloodUnitForm(FormModel):
    blood_group: BloodGroup
    donor_name: str
    donor_age: int = Field(gt=0)
    donor_phone: str | None = None
    donated_at: date = Field(default_factory=date.today)


class BloodRequestForm(FormModel):
    patient_id: str
    blood_group: BloodGroup
    units_requested: int = Field(default=1, gt=0)
    priority: RequestPriority = RequestPriority.NORMAL
    notes: str | None = None


class NotificationForm(FormModel):
    recipient_id: str
    recipient_type: RecipientType = RecipientType.PATIENT
    channel: NotificationChannel = NotificationChannel.EMAIL
    subject: str
    body: str
    reference_type: ReferenceType | None = None
    reference_id: str | None = None


# Action inputs on detail pages


class PatientUpdateForm(FormModel):
    first_name: str | None = Field(default=None, max_length=50)
    last_name: str | None = Field(default=None, max_length=50)
    date_of_birth: date | None = None
    gender: Gender | None = None
    phone_number: str | None = Field(default=None, max_length=20)
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    blood_group: BloodGroup | None = None
    known_allergies: str | None = None
    chronic_conditions: str | None = None


class MedicalRecordUpdateForm(FormModel):
    chief_complaint: str | None = None
    clinical_notes: str | None = None
    diagnosis_code: str | None = None
    diagnosis_description: str | None = None
    blood_pressure_systolic: int | None = None
    blood_pressure_diastolic: int | None = None
    heart_rate: int | None = None
    oxygen_saturation_percent: int | None = None
    respiratory_rate: int | None = None
    temperature_celsius: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None


class PaymentForm(FormModel):
    amount: float = Field(gt=0)
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference: str | None = None


class StockLevelForm(FormModel):
    """New stock quantity for a medicine."""

    quantity: int = Field(ge=0)


class InventoryItemUpdateForm(FormModel):
    name: str
    category: ItemCategory
    unit: str
    min_stock_level: int = Field(ge=0)
    unit_price: float | None = Field(default=None, ge=0)
    description: str | None = None


class StaffUpdateForm(FormModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    staff_role: StaffRole
    department: Department
    license_number: str | None = None
