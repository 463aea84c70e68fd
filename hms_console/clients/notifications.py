"""Notification client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class NotificationsClient(ServiceClient):
    service = "notifications"

    async def list_notifications(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/notifications", params)

    async def get_notification(self, notification_id: str) -> dict[str, Any]:
        return await self._get(f"/notifications/{notification_id}")

    async def send_notification(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/notifications", data, actor)

    async def mark_as_read(self, notification_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/notifications/{notification_id}/read", None, actor)

    async def retry_notification(self, notification_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/notifications/{notification_id}/retry", None, actor)
