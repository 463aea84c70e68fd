"""Pharmacy client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class PharmacyClient(ServiceClient):
    """Client for the pharmacy backend: medicine catalogue and dispensing."""

    service = "pharmacy"

    # Medicines

    async def list_medicines(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/medicines", params)

    async def get_medicine(self, medicine_id: str) -> dict[str, Any]:
        return await self._get(f"/medicines/{medicine_id}")

    async def add_medicine(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/medicines", data, actor)

    async def update_medicine(self, medicine_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/medicines/{medicine_id}", data, actor)

    async def adjust_stock(self, medicine_id: str, quantity: int, actor: str | None = None) -> dict[str, Any]:
        """Set the stock on hand to `quantity`."""
        return await self._patch(f"/medicines/{medicine_id}/stock", {"quantity": quantity}, actor)

    async def deactivate_medicine(self, medicine_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/medicines/{medicine_id}/deactivate", None, actor)

    async def activate_medicine(self, medicine_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/medicines/{medicine_id}/activate", None, actor)

    # Prescriptions

    async def list_prescriptions(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/prescriptions", params)

    async def get_prescription(self, prescription_id: str) -> dict[str, Any]:
        return await self._get(f"/prescriptions/{prescription_id}")

    async def create_prescription(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/prescriptions", data, actor)

    async def add_prescription_item(
        self, prescription_id: str, data: dict[str, Any], actor: str | None = None
    ) -> dict[str, Any]:
        return await self._post(f"/prescriptions/{prescription_id}/items", data, actor)

    async def remove_prescription_item(
        self, prescription_id: str, item_id: str, actor: str | None = None
    ) -> dict[str, Any]:
        return await self._delete(f"/prescriptions/{prescription_id}/items/{item_id}", actor)

    async def dispense_prescription(self, prescription_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/prescriptions/{prescription_id}/dispense", None, actor)

    async def cancel_prescription(self, prescription_id: str, reason: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/prescriptions/{prescription_id}/cancel", {"reason": reason}, actor)
