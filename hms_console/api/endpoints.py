"""API endpoints for the hospital console."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from hms_console import __version__
from hms_console.clients.registry import HospitalClients, get_clients
from hms_console.errors import ActionNotAllowedError, ApiError, FormValidationError, RouteNotFoundError
from hms_console.models.api import (
    ActionInfo,
    ActionRequest,
    ActionResponse,
    DetailPageResponse,
    FormPageResponse,
    FormSubmitRequest,
    FormSubmitResponse,
    HealthResponse,
    ListPageResponse,
    ListRow,
    PaginationInfo,
    RouteInfo,
)
from hms_console.routes import RouteMatch, open_view, resolve, route_table
from hms_console.utils.logging import get_logger
from hms_console.views.detail_view import DetailView
from hms_console.views.form_view import BookingForm, FormView
from hms_console.views.list_view import ListView
from hms_console.views.state import ErrorBanner

logger = get_logger(__name__)

router = APIRouter()

# Query parameter selecting the zero-based page on list pages
PAGE_PARAM = "page"


def http_error(error: Exception) -> HTTPException:
    """Translate a console error into the HTTP error the API reports."""
    if isinstance(error, ApiError):
        # No status means the backend was never reached
        return HTTPException(status_code=error.status_code or 502, detail=error.message)
    if isinstance(error, FormValidationError):
        return HTTPException(status_code=422, detail={"message": str(error), "fields": error.field_errors})
    if isinstance(error, ActionNotAllowedError):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, RouteNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, ValueError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail="Internal server error")


def _raise_banner(banner: ErrorBanner | None) -> None:
    if banner is None:
        return
    raise http_error(banner.error or ApiError(banner.message))


def _resolve(path: str, query: dict[str, Any] | None = None) -> RouteMatch:
    try:
        match = resolve(f"/{path}")
    except RouteNotFoundError as e:
        logger.info(f"No page for /{path}")
        raise http_error(e) from e
    if query:
        match.query.update(query)
    return match


def _list_response(view: ListView, match: RouteMatch) -> ListPageResponse:
    rows = []
    for item in view.items:
        if isinstance(item, dict):
            rows.append(ListRow(item=item, link=view.definition.link_for(item), actions=view.row_actions(item)))
        else:
            rows.append(ListRow(item=item))
    pagination = view.pagination
    return ListPageResponse(
        path=match.path,
        title=view.definition.title,
        columns=list(view.definition.columns),
        filters=view.applied_filters,
        rows=rows,
        pagination=PaginationInfo.from_state(pagination) if pagination else None,
    )


def _detail_response(view: DetailView, match: RouteMatch) -> DetailPageResponse:
    return DetailPageResponse(
        path=match.path,
        title=view.definition.title,
        entity=view.entity,
        status=view.status,
        actions=[ActionInfo(action=t.action, label=t.display_label) for t in view.available_actions()],
    )


def _form_fields(view: FormView) -> tuple[list[str], list[str]]:
    fields = []
    required = []
    for name, info in view.definition.form.model_fields.items():
        alias = info.alias or name
        fields.append(alias)
        if info.is_required():
            required.append(alias)
    return fields, required


@router.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(clients: HospitalClients = Depends(get_clients)) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(UTC),
        version=__version__,
        gateway_url=clients.config.gateway_url,
    )


@router.get("/routes", response_model=list[RouteInfo], tags=["Pages"])
async def list_routes() -> list[RouteInfo]:
    """Every console path and the page it opens."""
    return [RouteInfo(**route) for route in route_table()]


@router.get(
    "/pages/{path:path}",
    response_model=ListPageResponse | DetailPageResponse | FormPageResponse,
    tags=["Pages"],
)
async def render_page(
    path: str, request: Request, clients: HospitalClients = Depends(get_clients)
) -> ListPageResponse | DetailPageResponse | FormPageResponse:
    """Render a console page.

    List pages take their filters and the zero-based `page` from the query
    string; form pages take initial values from it.
    """
    query = dict(request.query_params)
    page_number = query.pop(PAGE_PARAM, None)
    match = _resolve(path, query)
    view = open_view(match, clients)

    if isinstance(view, ListView):
        if page_number is not None:
            try:
                view.page = max(int(page_number), 0)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=f"Invalid page: {page_number}") from e
        await view.load()
        _raise_banner(view.error)
        return _list_response(view, match)

    if isinstance(view, DetailView):
        await view.load()
        _raise_banner(view.error)
        return _detail_response(view, match)

    fields, required = _form_fields(view)
    slots = None
    if isinstance(view, BookingForm):
        await view.load_availability()
        _raise_banner(view.slots_error)
        slots = view.available_slots if view.availability is not None else None
    return FormPageResponse(
        path=match.path,
        title=view.definition.title,
        fields=fields,
        required=required,
        values=view.values,
        available_slots=slots,
    )


@router.post("/pages/{path:path}/actions/{action}", response_model=ActionResponse, tags=["Pages"])
async def run_page_action(
    path: str,
    action: str,
    request: ActionRequest,
    clients: HospitalClients = Depends(get_clients),
) -> ActionResponse:
    """Run a status action on a detail page, or an inline row action on a list page."""
    match = _resolve(path, request.filters)
    view = open_view(match, clients)

    if isinstance(view, DetailView):
        await view.load()
        _raise_banner(view.error)
        entity = await view.run_action(action, request.args)
        _raise_banner(view.action_error)
        # The reload after an item-level action can fail on its own
        _raise_banner(view.error)
        return ActionResponse(action=action, entity=entity)

    if isinstance(view, ListView):
        if not request.item_id:
            raise HTTPException(status_code=422, detail="item_id is required for list actions")
        view.page = request.page
        await view.load()
        _raise_banner(view.error)
        if view.find_item(request.item_id) is None:
            raise HTTPException(status_code=404, detail=f"No item {request.item_id} on this page")
        result = await view.run_row_action(request.item_id, action, request.args)
        _raise_banner(view.action_error)
        return ActionResponse(action=action, entity=result)

    raise HTTPException(status_code=405, detail="Form pages have no actions")


@router.post("/pages/{path:path}", response_model=FormSubmitResponse, tags=["Pages"])
async def submit_form(
    path: str,
    request: FormSubmitRequest,
    clients: HospitalClients = Depends(get_clients),
) -> FormSubmitResponse:
    """Submit a create form."""
    match = _resolve(path)
    view = open_view(match, clients)
    if not isinstance(view, FormView):
        raise HTTPException(status_code=405, detail=f"{match.path} is not a form")

    values: dict[str, Any] = dict(request.values)
    if isinstance(view, BookingForm):
        # Slot choice is validated against the loaded availability
        time = values.pop(BookingForm.TIME_FIELD, None)
        await view.update_many(values)
        _raise_banner(view.slots_error)
        if time:
            try:
                view.select_slot(time)
            except FormValidationError as e:
                raise http_error(e) from e
    else:
        await view.update_many(values)

    await view.submit()
    _raise_banner(view.error)
    logger.info(f"Submitted {view.definition.name}, redirect to {view.redirect_to}")
    return FormSubmitResponse(created=view.created, redirect_to=view.redirect_to)
