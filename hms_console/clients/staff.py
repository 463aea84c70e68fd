"""Staff and leave management client."""

from typing import Any

from hms_console.clients.base import ServiceClient


class StaffClient(ServiceClient):
    """Client for the staffing backend."""

    service = "staff"

    async def list_staff(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/staff", params)

    async def get_staff(self, staff_id: str) -> dict[str, Any]:
        return await self._get(f"/staff/{staff_id}")

    async def create_staff(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/staff", data, actor)

    async def update_staff(self, staff_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._put(f"/staff/{staff_id}", data, actor)

    async def deactivate_staff(self, staff_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/staff/{staff_id}/deactivate", None, actor)

    async def activate_staff(self, staff_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/staff/{staff_id}/activate", None, actor)

    # Leave requests

    async def list_leaves(self, params: dict[str, Any] | None = None) -> Any:
        return await self._get("/leaves", params)

    async def get_leave(self, leave_id: str) -> dict[str, Any]:
        return await self._get(f"/leaves/{leave_id}")

    async def request_leave(self, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        return await self._post("/leaves", data, actor)

    async def review_leave(self, leave_id: str, data: dict[str, Any], actor: str | None = None) -> dict[str, Any]:
        """Approve or reject a pending leave request.

        Args:
            leave_id: Leave request identifier
            data: status (APPROVED or REJECTED) and optional reviewNotes
            actor: Reviewer identity
        """
        return await self._patch(f"/leaves/{leave_id}/review", data, actor)

    async def cancel_leave(self, leave_id: str, actor: str | None = None) -> dict[str, Any]:
        return await self._patch(f"/leaves/{leave_id}/cancel", None, actor)
