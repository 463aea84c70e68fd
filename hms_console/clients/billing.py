"""Billing client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class BillingClient(ServiceClient):
    """Client for the billing backend.

    Totals, tax and balance are computed by the backend; the console only
    sends line items and payments.
    """

    service = "billing"

    async def list_invoices(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/invoices", params)

    async def get_invoice(self, invoice_id: str) -> dict[str, Any]:
        return await self._get(f"/invoices/{invoice_id}")

    async def create_invoice(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/invoices", data, actor)

    async def update_invoice(self, invoice_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/invoices/{invoice_id}", data, actor)

    async def issue_invoice(self, invoice_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/invoices/{invoice_id}/issue", None, actor)

    async def record_payment(self, invoice_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        """Record a payment.

        Args:
            invoice_id: Invoice identifier
            data: amount, paymentMethod and optional reference
            actor: Caller identity
        """
        return await self._patch(f"/invoices/{invoice_id}/pay", data, actor)

    async def cancel_invoice(self, invoice_id: str, reason: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/invoices/{invoice_id}/cancel", {"reason": reason}, actor)

    async def add_invoice_item(self, invoice_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post(f"/invoices/{invoice_id}/items", data, actor)

    async def remove_invoice_item(self, invoice_id: str, item_id: str, actor: str | None = None) -> Any:
        return await self._delete(f"/invoices/{invoice_id}/items/{item_id}", actor)
