"""Patient registry client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class PatientsClient(ServiceClient):
    """Client for the patient registry backend."""

    service = "patients"

    async def search_patients(self, params: dict[str, Any] | None = None) -> Any:
        """Search patients by name, phone, status, with paging."""
        return await self._get("/patients", params)

    async def register_patient(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        """Register a patient.

        The returned record may carry `duplicatePhoneWarning` when another
        patient already uses the phone number.
        """
        return await self._post("/patients", data, actor)

    async def get_patient(self, patient_id: str) -> dict[str, Any]:
        return await self._get(f"/patients/{patient_id}")

    async def update_patient(self, patient_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/patients/{patient_id}", data, actor)

    async def deactivate_patient(self, patient_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/patients/{patient_id}/deactivate", {}, actor)

    async def activate_patient(self, patient_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/patients/{patient_id}/activate", {}, actor)
