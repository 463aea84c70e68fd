"""Electronic medical records client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class RecordsClient(ServiceClient):
    """Client for the EMR backend: medical records and their prescriptions."""

    service = "records"

    async def search_records(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/records", params)

    async def get_record(self, record_id: str) -> dict[str, Any]:
        return await self._get(f"/records/{record_id}")

    async def create_record(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/records", data, actor)

    async def update_record(self, record_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/records/{record_id}", data, actor)

    async def finalize_record(self, record_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/records/{record_id}/finalize", {}, actor)

    async def amend_record(self, record_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/records/{record_id}/amend", {}, actor)

    async def get_prescriptions(self, record_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/records/{record_id}/prescriptions")

    async def add_prescription(self, record_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post(f"/records/{record_id}/prescriptions", data, actor)

    async def discontinue_prescription(
        self, record_id: str, prescription_id: str, reason: str, actor: str | None = None
    ) -> dict[str, Any]:
        return await self._patch(
            f"/records/{record_id}/prescriptions/{prescription_id}/discontinue",
            {"discontinuedReason": reason},
            actor,
        )

    async def get_active_patient_prescriptions(self, patient_id: str) -> list[dict[str, Any]]:
        return await self._get(f"/prescriptions/patient/{patient_id}/active")
