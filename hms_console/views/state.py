"""Small pieces of view state shared by every page."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from hms_console.errors import FALLBACK_ERROR_MESSAGE, ApiError
from hms_console.models.envelope import Page


class RequestSequence:
    """Monotonically increasing request tokens.

    A view takes a token before each fetch and applies the outcome only if
    the token is still the latest one issued, so a slow earlier response
    cannot overwrite a newer one.
    """

    def __init__(self) -> None:
        self._latest = 0

    def next(self) -> int:
        self._latest += 1
        return self._latest

    def is_latest(self, token: int) -> bool:
        return token == self._latest

    @property
    def latest(self) -> int:
        return self._latest


@dataclass
class ErrorBanner:
    """A failure message, optionally paired with a retry callback.

    `error` keeps the exception the message came from so outer surfaces can
    map it to their own status codes.
    """

    message: str
    on_retry: Callable[[], Awaitable[Any]] | None = field(default=None, repr=False)
    error: Exception | None = field(default=None, repr=False)

    @classmethod
    def from_exception(
        cls, error: Exception, on_retry: Callable[[], Awaitable[Any]] | None = None
    ) -> "ErrorBanner":
        message = error.message if isinstance(error, ApiError) else str(error)
        return cls(message=message or FALLBACK_ERROR_MESSAGE, on_retry=on_retry, error=error)

    @property
    def can_retry(self) -> bool:
        return self.on_retry is not None

    async def retry(self) -> None:
        if self.on_retry is not None:
            await self.on_retry()


@dataclass(frozen=True)
class PaginationState:
    """Pagination controls for a zero-based page of results."""

    current_page: int
    total_pages: int
    total_elements: int
    page_size: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationState":
        return cls(
            current_page=page.page,
            total_pages=page.total_pages,
            total_elements=page.total_elements,
            page_size=page.size,
        )

    @property
    def visible(self) -> bool:
        # A single page needs no controls
        return self.total_pages > 1

    @property
    def page_buttons(self) -> list[int]:
        return list(range(self.total_pages))

    @property
    def prev_disabled(self) -> bool:
        return self.current_page <= 0

    @property
    def next_disabled(self) -> bool:
        return self.current_page >= self.total_pages - 1

    @property
    def start(self) -> int:
        """One-based index of the first element shown."""
        if self.total_elements == 0:
            return 0
        return self.current_page * self.page_size + 1

    @property
    def end(self) -> int:
        return min((self.current_page + 1) * self.page_size, self.total_elements)

    @property
    def summary(self) -> str:
        return f"Showing {self.start}-{self.end} of {self.total_elements}"
