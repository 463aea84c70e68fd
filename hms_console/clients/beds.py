"""Ward, bed and admission client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class BedsClient(ServiceClient):
    """Client for the bed management backend."""

    service = "beds"

    # Wards

    async def list_wards(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/wards", params)

    async def get_ward(self, ward_id: str) -> dict[str, Any]:
        return await self._get(f"/wards/{ward_id}")

    async def create_ward(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/wards", data, actor)

    async def deactivate_ward(self, ward_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/wards/{ward_id}/deactivate", None, actor)

    async def activate_ward(self, ward_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/wards/{ward_id}/activate", None, actor)

    # Beds

    async def list_beds(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/beds", params)

    async def get_bed(self, bed_id: str) -> dict[str, Any]:
        return await self._get(f"/beds/{bed_id}")

    async def create_bed(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/beds", data, actor)

    async def update_bed_status(self, bed_id: str, status: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/beds/{bed_id}/status", {"status": status}, actor)

    # Admissions

    async def list_admissions(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/admissions", params)

    async def get_admission(self, admission_id: str) -> dict[str, Any]:
        return await self._get(f"/admissions/{admission_id}")

    async def admit_patient(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        """Admit a patient into an available bed."""
        return await self._post("/admissions", data, actor)

    async def transfer_patient(self, admission_id: str, new_bed_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/admissions/{admission_id}/transfer", {"newBedId": new_bed_id}, actor)

    async def discharge_patient(
        self, admission_id: str, discharge_notes: str, actor: str | None = None
    ) -> dict[str, Any]:
        return await self._patch(f"/admissions/{admission_id}/discharge", {"dischargeNotes": discharge_notes}, actor)
