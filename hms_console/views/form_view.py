"""Create-form pages, including appointment booking with slot selection."""

from collections.abc import Mapping
from typing import Any

from hms_console.clients.registry import HospitalClients
from hms_console.errors import ApiError, FormValidationError
from hms_console.models.forms import FormModel
from hms_console.utils.logging import get_logger
from hms_console.views.pages import FormPage
from hms_console.views.state import ErrorBanner, RequestSequence

logger = get_logger(__name__)


class FormView:
    """State behind a create form.

    Values are keyed by their wire (camelCase) names. A successful submit
    sets `created` and `redirect_to`; a failed one sets `error` and leaves
    the entered values in place.
    """

    def __init__(self, page: FormPage, clients: HospitalClients, initial: Mapping[str, Any] | None = None):
        self.definition = page
        self.clients = clients
        self.values: dict[str, Any] = dict(initial or {})

        self.submitting = False
        self.error: ErrorBanner | None = None
        self.field_errors: dict[str, str] = {}

        self.created: dict[str, Any] | None = None
        self.redirect_to: str | None = None

    async def update(self, field: str, value: Any) -> None:
        self.values[field] = value

    async def update_many(self, values: Mapping[str, Any]) -> None:
        for field, value in values.items():
            await self.update(field, value)

    def validate(self) -> FormModel:
        """Validate the entered values.

        Raises:
            FormValidationError: If a required field is missing or a value is malformed
        """
        try:
            form = self.definition.form.from_input(self.values)
        except FormValidationError as e:
            self.field_errors = e.field_errors
            raise
        self.field_errors = {}
        return form

    async def submit(self) -> str | None:
        """Validate and send the form once.

        Returns:
            Path of the created entity's page, or None when nothing was created
        """
        if self.submitting:
            logger.debug(f"Ignoring submit of {self.definition.name}: already submitting")
            return None

        self.error = None
        try:
            form = self.validate()
        except FormValidationError as e:
            self.error = ErrorBanner.from_exception(e)
            return None

        self.submitting = True
        try:
            created = await self.definition.submit(self.clients, form.to_payload())
        except ApiError as e:
            self.error = ErrorBanner.from_exception(e)
            return None
        finally:
            self.submitting = False

        self.created = created if isinstance(created, dict) else None
        self.redirect_to = self.definition.redirect_for(self.created)
        logger.info(f"{self.definition.name}: created, redirecting to {self.redirect_to}")
        return self.redirect_to


class BookingForm(FormView):
    """Appointment booking.

    Choosing a doctor and a date loads that doctor's free slots for the day;
    any previously selected time is cleared because it may not be free on
    the new day. Only listed slots can be selected.
    """

    TIME_FIELD = "appointmentTime"
    TRIGGER_FIELDS = ("doctorId", "appointmentDate")

    def __init__(self, page: FormPage, clients: HospitalClients, initial: Mapping[str, Any] | None = None):
        super().__init__(page, clients, initial)
        self.availability: dict[str, Any] | None = None
        self.slots_loading = False
        self.slots_error: ErrorBanner | None = None
        self._sequence = RequestSequence()

    @property
    def available_slots(self) -> list[str]:
        if not self.availability:
            return []
        return list(self.availability.get("availableSlots") or [])

    async def update(self, field: str, value: Any) -> None:
        await super().update(field, value)
        if field in self.TRIGGER_FIELDS:
            await self.load_availability()

    async def load_availability(self) -> dict[str, Any] | None:
        """Load free slots for the selected doctor and date, if both are set."""
        self.values.pop(self.TIME_FIELD, None)
        self.availability = None
        self.slots_error = None
        # Supersedes any request still in flight for the previous doctor or day
        token = self._sequence.next()

        doctor_id = self.values.get("doctorId")
        day = self.values.get("appointmentDate")
        if not doctor_id or not day:
            self.slots_loading = False
            return None

        self.slots_loading = True
        try:
            availability = await self.clients.appointments.get_availability(str(doctor_id), str(day))
        except ApiError as e:
            if self._sequence.is_latest(token):
                self.slots_error = ErrorBanner.from_exception(e, on_retry=self.load_availability)
                self.slots_loading = False
            else:
                logger.debug(f"Discarding stale availability error for {doctor_id} on {day}")
            return None

        if not self._sequence.is_latest(token):
            logger.debug(f"Discarding stale availability for {doctor_id} on {day}")
            return None

        self.availability = availability if isinstance(availability, dict) else {"availableSlots": availability}
        self.slots_loading = False
        return self.availability

    def select_slot(self, time: str) -> None:
        """Pick one of the loaded slots.

        Raises:
            FormValidationError: If the time is not a free slot
        """
        if time not in self.available_slots:
            raise FormValidationError({self.TIME_FIELD: f"{time} is not an available slot"})
        self.values[self.TIME_FIELD] = time
