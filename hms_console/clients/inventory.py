"""Inventory client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class InventoryClient(ServiceClient):
    """Client for the inventory backend: stock items and their ledger."""

    service = "inventory"

    async def list_items(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/items", params)

    async def get_item(self, item_id: str) -> dict[str, Any]:
        return await self._get(f"/items/{item_id}")

    async def create_item(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/items", data, actor)

    async def update_item(self, item_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/items/{item_id}", data, actor)

    async def deactivate_item(self, item_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/items/{item_id}/deactivate", None, actor)

    async def activate_item(self, item_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/items/{item_id}/activate", None, actor)

    async def list_transactions(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/transactions", params)

    async def get_transaction(self, transaction_id: str) -> dict[str, Any]:
        return await self._get(f"/transactions/{transaction_id}")

    async def record_transaction(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        """Record a stock movement (IN, OUT or ADJUSTMENT)."""
        return await self._post("/transactions", data, actor)
