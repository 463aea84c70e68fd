"""Request and response models for the console HTTP API."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from hms_console.views.state import PaginationState


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str
    timestamp: datetime
    version: str
    gateway_url: str


class RouteInfo(BaseModel):
    path: str
    page: str
    kind: str
    title: str


class PaginationInfo(BaseModel):
    """Pagination controls for a list page."""

    current_page: int
    total_pages: int
    total_elements: int
    page_size: int
    page_buttons: list[int]
    prev_disabled: bool
    next_disabled: bool
    start: int
    end: int
    visible: bool

    @classmethod
    def from_state(cls, state: PaginationState) -> "PaginationInfo":
        return cls(
            current_page=state.current_page,
            total_pages=state.total_pages,
            total_elements=state.total_elements,
            page_size=state.page_size,
            page_buttons=state.page_buttons,
            prev_disabled=state.prev_disabled,
            next_disabled=state.next_disabled,
            start=state.start,
            end=state.end,
            visible=state.visible,
        )


class ActionInfo(BaseModel):
    action: str
    label: str


class ListRow(BaseModel):
    item: Any
    link: str | None = None
    actions: list[str] = Field(default_factory=list)


class ListPageResponse(BaseModel):
    """A rendered list page."""

    kind: Literal["list"] = "list"
    path: str
    title: str
    columns: list[str]
    filters: dict[str, Any]
    rows: list[ListRow]
    pagination: PaginationInfo | None = None


class DetailPageResponse(BaseModel):
    """A rendered detail page with the actions its status allows."""

    kind: Literal["detail"] = "detail"
    path: str
    title: str
    entity: dict[str, Any] | None
    status: str | None
    actions: list[ActionInfo]


class FormPageResponse(BaseModel):
    """An empty create form, with booking slots when a doctor and date are chosen."""

    kind: Literal["form"] = "form"
    path: str
    title: str
    fields: list[str]
    required: list[str]
    values: dict[str, Any]
    available_slots: list[str] | None = None


class ActionRequest(BaseModel):
    """Inputs for a page action.

    On list pages `item_id` selects the row, and `page` and `filters` name the
    listing the row was shown on.
    """

    args: dict[str, Any] = Field(default_factory=dict)
    item_id: str | None = None
    page: int = Field(default=0, ge=0)
    filters: dict[str, Any] = Field(default_factory=dict)


class ActionResponse(BaseModel):
    action: str
    entity: Any = None


class FormSubmitRequest(BaseModel):
    values: dict[str, Any] = Field(default_factory=dict)


class FormSubmitResponse(BaseModel):
    created: dict[str, Any] | None
    redirect_to: str | None
