"""Doctor directory and appointment scheduling client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class AppointmentsClient(ServiceClient):
    """Client for the scheduling backend (doctors and appointments)."""

    service = "appointments"

    # Doctors

    async def search_doctors(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/doctors", params)

    async def get_doctor(self, doctor_id: str) -> dict[str, Any]:
        return await self._get(f"/doctors/{doctor_id}")

    async def register_doctor(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/doctors", data, actor)

    async def update_doctor(self, doctor_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/doctors/{doctor_id}", data, actor)

    async def deactivate_doctor(self, doctor_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/doctors/{doctor_id}/deactivate", {}, actor)

    async def activate_doctor(self, doctor_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/doctors/{doctor_id}/activate", {}, actor)

    # Appointments

    async def search_appointments(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/appointments", params)

    async def get_appointment(self, appointment_id: str) -> dict[str, Any]:
        return await self._get(f"/appointments/{appointment_id}")

    async def book_appointment(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        """Book an appointment in one of the doctor's free slots.

        Args:
            data: patientId, doctorId, appointmentDate, appointmentTime,
                appointmentType and optionally reason
            actor: Caller identity

        Returns:
            The booked appointment, including its appointmentId
        """
        return await self._post("/appointments", data, actor)

    async def update_appointment(
        self, appointment_id: str, data: dict[str, Any], actor: str | None = None
    ) -> dict[str, Any]:
        return await self._put(f"/appointments/{appointment_id}", data, actor)

    async def confirm_appointment(self, appointment_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/appointments/{appointment_id}/confirm", {}, actor)

    async def cancel_appointment(self, appointment_id: str, reason: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/appointments/{appointment_id}/cancel", {"cancellationReason": reason}, actor)

    async def complete_appointment(
        self, appointment_id: str, notes: str = "", actor: str | None = None
    ) -> dict[str, Any]:
        # Completion notes travel as a query parameter, not a body
        return await self._patch(
            f"/appointments/{appointment_id}/complete",
            None,
            actor,
            params={"notes": notes} if notes else None,
        )

    async def no_show_appointment(self, appointment_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/appointments/{appointment_id}/no-show", {}, actor)

    async def get_availability(self, doctor_id: str, date: str) -> dict[str, Any]:
        """Fetch a doctor's slots for one day.

        Args:
            doctor_id: Doctor identifier
            date: Day in YYYY-MM-DD format

        Returns:
            Availability record with `availableSlots` (HH:MM strings)
        """
        return await self._get("/appointments/availability", {"doctorId": doctor_id, "date": date})
