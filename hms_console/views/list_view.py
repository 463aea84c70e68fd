"""Filterable, paginated list pages."""

from collections.abc import Mapping
from typing import Any

from hms_console.clients.registry import HospitalClients
from hms_console.errors import ActionNotAllowedError, ApiError, FormValidationError
from hms_console.models.enums import ALL
from hms_console.models.envelope import Page
from hms_console.utils.logging import get_logger
from hms_console.views.pages import ListPage
from hms_console.views.state import ErrorBanner, PaginationState, RequestSequence

logger = get_logger(__name__)


def build_query(filters: Mapping[str, Any], page: int, size: int) -> dict[str, Any]:
    """Query parameters for a list call: paging plus every filter that restricts the result."""
    query: dict[str, Any] = {"page": page, "size": size}
    for key, value in filters.items():
        if value is None:
            continue
        if isinstance(value, str) and (not value.strip() or value == ALL):
            continue
        query[key] = value
    return query


class ListView:
    """State and operations behind one list page.

    Filters edited by the user live in `filters` and only take effect when
    applied through `search()`; `load()` always queries with
    `applied_filters`. Failed loads keep the previous result on screen and
    set `error`.
    """

    def __init__(
        self,
        page: ListPage,
        clients: HospitalClients,
        filters: Mapping[str, Any] | None = None,
        page_size: int | None = None,
    ):
        """Initialize the view.

        Args:
            page: Page definition
            clients: Backend clients
            filters: Initial filter values (e.g. from the query string)
            page_size: Rows per page (defaults to the configured page size)
        """
        self.definition = page
        self.clients = clients
        self.page_size = page_size or clients.config.page_size

        self.filters: dict[str, Any] = dict(page.filters)
        if filters:
            self.filters.update(filters)
        self.applied_filters: dict[str, Any] = dict(self.filters)

        self.page = 0
        self.result: Page | None = None
        self.loading = False
        self.error: ErrorBanner | None = None

        self.actioning = False
        self.action_error: ErrorBanner | None = None

        self._sequence = RequestSequence()

    @property
    def items(self) -> list[Any]:
        return self.result.content if self.result else []

    @property
    def pagination(self) -> PaginationState | None:
        if self.result is None:
            return None
        return PaginationState.from_page(self.result)

    def build_query(self) -> dict[str, Any]:
        return build_query(self.applied_filters, self.page, self.page_size)

    async def load(self) -> Page | None:
        """Fetch the current page with the applied filters.

        Returns:
            The current result (unchanged when the fetch failed or was superseded)
        """
        token = self._sequence.next()
        query = self.build_query()
        page, size = self.page, self.page_size

        self.loading = True
        self.error = None

        try:
            payload = await self.definition.fetch(self.clients, query)
        except ApiError as e:
            if not self._sequence.is_latest(token):
                logger.debug(f"Discarding stale error for {self.definition.name} request {token}: {e.message}")
                return self.result
            self.error = ErrorBanner.from_exception(e, on_retry=self.retry)
            return self.result
        finally:
            if self._sequence.is_latest(token):
                self.loading = False

        if not self._sequence.is_latest(token):
            logger.debug(f"Discarding stale response for {self.definition.name} request {token}")
            return self.result

        try:
            self.result = Page.from_payload(payload, page=page, size=size)
        except TypeError as e:
            logger.warning(f"Unexpected list payload for {self.definition.name}: {e}")
            self.error = ErrorBanner.from_exception(ApiError(), on_retry=self.retry)
        return self.result

    async def retry(self) -> Page | None:
        return await self.load()

    def set_filter(self, key: str, value: Any) -> None:
        self.filters[key] = value

    async def search(self) -> Page | None:
        """Apply the edited filters and reload from the first page."""
        self.applied_filters = dict(self.filters)
        self.page = 0
        return await self.load()

    async def clear(self) -> Page | None:
        """Reset every filter to its default and reload from the first page."""
        self.filters = dict(self.definition.filters)
        self.applied_filters = dict(self.filters)
        self.page = 0
        return await self.load()

    async def go_to(self, page: int) -> Page | None:
        """Load a zero-based page.

        Raises:
            ValueError: If the page is outside the known range
        """
        total_pages = self.result.total_pages if self.result else 0
        if page < 0 or (total_pages and page >= total_pages):
            raise ValueError(f"Page {page + 1} is out of range")
        self.page = page
        return await self.load()

    async def next_page(self) -> Page | None:
        return await self.go_to(self.page + 1)

    async def prev_page(self) -> Page | None:
        return await self.go_to(self.page - 1)

    def find_item(self, item_id: str) -> dict[str, Any] | None:
        if not self.definition.id_key:
            return None
        for item in self.items:
            if isinstance(item, dict) and str(item.get(self.definition.id_key)) == str(item_id):
                return item
        return None

    def row_actions(self, item: Mapping[str, Any]) -> list[str]:
        """Names of the inline actions offered for one row."""
        machine = self.definition.machine
        if machine is None:
            return []
        return [name for name in machine.action_names(machine.current_status(item)) if name in self.definition.row_actions]

    async def run_row_action(self, item_id: str, action: str, args: Mapping[str, Any] | None = None) -> Any:
        """Run an inline action on one row, then reload the current page.

        Failures are recorded in `action_error`; the list itself is untouched.

        Returns:
            The backend's response, or None when the action failed or was refused
        """
        if self.actioning:
            logger.debug(f"Ignoring {action} on {self.definition.name}: another action is in flight")
            return None

        self.action_error = None
        item = self.find_item(item_id)
        machine = self.definition.machine
        handler = self.definition.row_actions.get(action)

        if item is None or machine is None or handler is None:
            status = machine.current_status(item) if (machine and item) else None
            self.action_error = ErrorBanner.from_exception(ActionNotAllowedError(action, status))
            return None

        try:
            machine.require(action, machine.current_status(item))
        except ActionNotAllowedError as e:
            self.action_error = ErrorBanner.from_exception(e)
            return None

        self.actioning = True
        try:
            result = await handler(self.clients, item_id, dict(args or {}))
        except (ApiError, FormValidationError) as e:
            self.action_error = ErrorBanner.from_exception(e)
            return None
        finally:
            self.actioning = False

        logger.info(f"{self.definition.name}: {action} on {item_id}")
        await self.load()
        return result
