"""Single-entity pages with status-driven actions."""

from collections.abc import Mapping
from typing import Any

from hms_console.clients.registry import HospitalClients
from hms_console.errors import ActionNotAllowedError, ApiError, FormValidationError
from hms_console.utils.logging import get_logger
from hms_console.views.pages import DetailPage
from hms_console.views.state import ErrorBanner, RequestSequence
from hms_console.workflows.transitions import Transition

logger = get_logger(__name__)


class DetailView:
    """State and operations behind one detail page."""

    def __init__(self, page: DetailPage, clients: HospitalClients, entity_id: str):
        self.definition = page
        self.clients = clients
        self.entity_id = entity_id

        self.entity: dict[str, Any] | None = None
        self.loading = False
        self.error: ErrorBanner | None = None

        self.actioning = False
        self.action_error: ErrorBanner | None = None

        self._sequence = RequestSequence()

    @property
    def status(self) -> str | None:
        if self.entity is None:
            return None
        return self.definition.machine.current_status(self.entity)

    async def load(self) -> dict[str, Any] | None:
        token = self._sequence.next()
        self.loading = True
        self.error = None

        try:
            entity = await self.definition.fetch(self.clients, self.entity_id)
        except ApiError as e:
            if not self._sequence.is_latest(token):
                logger.debug(f"Discarding stale error for {self.definition.name} {self.entity_id}: {e.message}")
                return self.entity
            self.error = ErrorBanner.from_exception(e, on_retry=self.load)
            return self.entity
        finally:
            if self._sequence.is_latest(token):
                self.loading = False

        if not self._sequence.is_latest(token):
            logger.debug(f"Discarding stale response for {self.definition.name} {self.entity_id}")
            return self.entity

        self.entity = entity
        return self.entity

    def available_actions(self) -> list[Transition]:
        """Actions offered for the entity's current status."""
        return self.definition.machine.available_actions(self.status)

    async def run_action(self, action: str, args: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        """Run one status action against the entity.

        On success the entity is replaced with the backend's updated copy
        (reloaded after item-level actions or when the response carries
        none). On failure only `action_error` changes; a failed reload
        afterwards sets `error`.

        Args:
            action: Action name from the status table
            args: Action inputs (e.g. `reason` for a cancellation)

        Returns:
            The updated entity, or None when the action failed or was refused
        """
        if self.actioning:
            logger.debug(f"Ignoring {action} on {self.definition.name} {self.entity_id}: another action is in flight")
            return None

        self.action_error = None

        try:
            self.definition.machine.require(action, self.status)
            precondition = self.definition.preconditions.get(action)
            if precondition is not None:
                precondition(self.entity or {}, args or {})
        except (ActionNotAllowedError, FormValidationError) as e:
            logger.debug(f"Refused {action} on {self.definition.name} {self.entity_id}: {e}")
            self.action_error = ErrorBanner.from_exception(e)
            return None

        handler = self.definition.actions[action]
        self.actioning = True
        try:
            result = await handler(self.clients, self.entity_id, dict(args or {}))
        except (ApiError, FormValidationError) as e:
            self.action_error = ErrorBanner.from_exception(e)
            return None
        finally:
            self.actioning = False

        logger.info(f"{self.definition.name} {self.entity_id}: {action}")

        if action in self.definition.reload_after or not isinstance(result, dict) or not result:
            await self.load()
        else:
            self.entity = result
        return self.entity
