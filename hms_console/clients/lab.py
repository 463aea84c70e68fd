"""Laboratory client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class LabClient(ServiceClient):
    """Client for the laboratory backend: test catalogue and lab orders."""

    service = "lab"

    # Lab tests

    async def list_lab_tests(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/lab-tests", params)

    async def get_lab_test(self, test_id: str) -> dict[str, Any]:
        return await self._get(f"/lab-tests/{test_id}")

    async def add_lab_test(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/lab-tests", data, actor)

    async def update_lab_test(self, test_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/lab-tests/{test_id}", data, actor)

    async def deactivate_lab_test(self, test_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/lab-tests/{test_id}/deactivate", None, actor)

    async def activate_lab_test(self, test_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/lab-tests/{test_id}/activate", None, actor)

    # Lab orders

    async def list_lab_orders(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/lab-orders", params)

    async def get_lab_order(self, order_id: str) -> dict[str, Any]:
        return await self._get(f"/lab-orders/{order_id}")

    async def create_lab_order(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/lab-orders", data, actor)

    async def add_lab_order_item(self, order_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post(f"/lab-orders/{order_id}/items", data, actor)

    async def remove_lab_order_item(self, order_id: str, item_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._delete(f"/lab-orders/{order_id}/items/{item_id}", actor)

    async def collect_sample(self, order_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/lab-orders/{order_id}/collect", None, actor)

    async def start_processing(self, order_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/lab-orders/{order_id}/process", None, actor)

    async def record_result(
        self, order_id: str, item_id: str, data: dict[str, Any], actor: str | None = None
    ) -> dict[str, Any]:
        """Record the result of one test in an order.

        The backend completes the order once every item has a result.
        """
        return await self._patch(f"/lab-orders/{order_id}/items/{item_id}/result", data, actor)

    async def cancel_lab_order(self, order_id: str, reason: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/lab-orders/{order_id}/cancel", {"reason": reason}, actor)
