"""Enumerations shared by forms, filters and status badges."""

from enum import StrEnum

# Filter value meaning "no status restriction"; never sent to a backend
ALL = "ALL"


class ActivationStatus(StrEnum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Gender(StrEnum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class BloodGroup(StrEnum):
    """Blood groups as the backends spell them."""

    A_POS = "A_POS"
    A_NEG = "A_NEG"
    B_POS = "B_POS"
    B_NEG = "B_NEG"
    AB_POS = "AB_POS"
    AB_NEG = "AB_NEG"
    O_POS = "O_POS"
    O_NEG = "O_NEG"
    UNKNOWN = "UNKNOWN"

    @property
    def label(self) -> str:
        if self is BloodGroup.UNKNOWN:
            return "Unknown"
        group, sign = self.value.split("_")
        return group + ("+" if sign == "POS" else "-")


class AppointmentType(StrEnum):
    CONSULTATION = "CONSULTATION"
    FOLLOW_UP = "FOLLOW_UP"
    PROCEDURE = "PROCEDURE"
    EMERGENCY = "EMERGENCY"


class AppointmentStatus(StrEnum):
    SCHEDULED = "SCHEDULED"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


class RecordStatus(StrEnum):
    DRAFT = "DRAFT"
    FINALIZED = "FINALIZED"
    AMENDED = "AMENDED"


class RecordPrescriptionStatus(StrEnum):
    ACTIVE = "ACTIVE"
    DISCONTINUED = "DISCONTINUED"


class InvoiceStatus(StrEnum):
    DRAFT = "DRAFT"
    ISSUED = "ISSUED"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class PaymentMethod(StrEnum):
    CASH = "CASH"
    CARD = "CARD"
    INSURANCE = "INSURANCE"
    BANK_TRANSFER = "BANK_TRANSFER"
    OTHER = "OTHER"


class MedicineCategory(StrEnum):
    TABLET = "TABLET"
    CAPSULE = "CAPSULE"
    SYRUP = "SYRUP"
    INJECTION = "INJECTION"
    OINTMENT = "OINTMENT"
    DROPS = "DROPS"
    INHALER = "INHALER"
    OTHER = "OTHER"


class PrescriptionStatus(StrEnum):
    PENDING = "PENDING"
    DISPENSED = "DISPENSED"
    CANCELLED = "CANCELLED"


class LabTestCategory(StrEnum):
    HEMATOLOGY = "HEMATOLOGY"
    BIOCHEMISTRY = "BIOCHEMISTRY"
    MICROBIOLOGY = "MICROBIOLOGY"
    PATHOLOGY = "PATHOLOGY"
    RADIOLOGY = "RADIOLOGY"
    IMMUNOLOGY = "IMMUNOLOGY"
    OTHER = "OTHER"


class LabOrderStatus(StrEnum):
    ORDERED = "ORDERED"
    SAMPLE_COLLECTED = "SAMPLE_COLLECTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class WardType(StrEnum):
    GENERAL = "GENERAL"
    ICU = "ICU"
    EMERGENCY = "EMERGENCY"
    MATERNITY = "MATERNITY"
    PEDIATRIC = "PEDIATRIC"
    SURGICAL = "SURGICAL"
    ORTHOPEDIC = "ORTHOPEDIC"


class BedType(StrEnum):
    GENERAL = "GENERAL"
    ICU = "ICU"
    PRIVATE = "PRIVATE"
    SEMI_PRIVATE = "SEMI_PRIVATE"


class BedStatus(StrEnum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"


class AdmissionStatus(StrEnum):
    ADMITTED = "ADMITTED"
    DISCHARGED = "DISCHARGED"


class StaffRole(StrEnum):
    DOCTOR = "DOCTOR"
    NURSE = "NURSE"
    TECHNICIAN = "TECHNICIAN"
    ADMIN = "ADMIN"
    PHARMACIST = "PHARMACIST"
    RECEPTIONIST = "RECEPTIONIST"
    LAB_TECHNICIAN = "LAB_TECHNICIAN"


class Department(StrEnum):
    GENERAL = "GENERAL"
    ICU = "ICU"
    EMERGENCY = "EMERGENCY"
    MATERNITY = "MATERNITY"
    PEDIATRIC = "PEDIATRIC"
    SURGICAL = "SURGICAL"
    ORTHOPEDIC = "ORTHOPEDIC"
    RADIOLOGY = "RADIOLOGY"
    PHARMACY = "PHARMACY"
    ADMINISTRATION = "ADMINISTRATION"
    LABORATORY = "LABORATORY"


class LeaveType(StrEnum):
    SICK = "SICK"
    CASUAL = "CASUAL"
    ANNUAL = "ANNUAL"
    EMERGENCY = "EMERGENCY"


class LeaveStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class ItemCategory(StrEnum):
    MEDICINE = "MEDICINE"
    SURGICAL = "SURGICAL"
    DIAGNOSTIC = "DIAGNOSTIC"
    CONSUMABLE = "CONSUMABLE"
    EQUIPMENT = "EQUIPMENT"
    LABORATORY = "LABORATORY"
    OFFICE = "OFFICE"


class TransactionType(StrEnum):
    IN = "IN"
    OUT = "OUT"
    ADJUSTMENT = "ADJUSTMENT"


class BloodUnitStatus(StrEnum):
    AVAILABLE = "AVAILABLE"
    USED = "USED"
    EXPIRED = "EXPIRED"
    DISCARDED = "DISCARDED"


class BloodRequestStatus(StrEnum):
    PENDING = "PENDING"
    FULFILLED = "FULFILLED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class RequestPriority(StrEnum):
    NORMAL = "NORMAL"
    URGENT = "URGENT"
    CRITICAL = "CRITICAL"


class NotificationChannel(StrEnum):
    EMAIL = "EMAIL"
    SMS = "SMS"
    IN_APP = "IN_APP"


class RecipientType(StrEnum):
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    STAFF = "STAFF"


class NotificationStatus(StrEnum):
    PENDING = "PENDING"
    SENT = "SENT"
    FAILED = "FAILED"
    READ = "READ"


class ReferenceType(StrEnum):
    APPOINTMENT = "APPOINTMENT"
    INVOICE = "INVOICE"
    PATIENT = "PATIENT"
    GENERAL = "GENERAL"
