"""Blood bank client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class BloodBankClient(ServiceClient):
    """Client for the blood bank backend.

    Which units fulfil a request (oldest first) is decided by the backend.
    """

    service = "blood_bank"

    async def list_units(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/units", params)

    async def get_unit(self, unit_id: str) -> dict[str, Any]:
        return await self._get(f"/units/{unit_id}")

    async def register_unit(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/units", data, actor)

    async def discard_unit(self, unit_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/units/{unit_id}/discard", None, actor)

    async def get_stock(self) -> Any:
        """Available unit counts per blood group."""
        return await self._get("/stock")

    async def list_requests(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/requests", params)

    async def get_request(self, request_id: str) -> dict[str, Any]:
        return await self._get(f"/requests/{request_id}")

    async def create_request(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/requests", data, actor)

    async def fulfill_request(self, request_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/requests/{request_id}/fulfill", None, actor)

    async def reject_request(
        self, request_id: str, data: dict[str, Any] | None = None, actor: str | None = None
    ) -> dict[str, Any]:
        return await self._patch(f"/requests/{request_id}/reject", data or {}, actor)

    async def cancel_request(self, request_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/requests/{request_id}/cancel", None, actor)
