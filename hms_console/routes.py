"""Console paths and the pages behind them."""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, urlsplit

from hms_console.clients.registry import HospitalClients
from hms_console.errors import RouteNotFoundError
from hms_console.views import pages
from hms_console.views.detail_view import DetailView
from hms_console.views.form_view import BookingForm, FormView
from hms_console.views.list_view import ListView
from hms_console.views.pages import DetailPage, FormPage, ListPage

HOME = "/patients"

ConsolePage = ListPage | DetailPage | FormPage

ROUTES: list[tuple[str, ConsolePage]] = [
    ("/patients", pages.PATIENTS),
    ("/patients/register", pages.REGISTER_PATIENT),
    ("/patients/{id}", pages.PATIENT_DETAIL),
    ("/doctors", pages.DOCTORS),
    ("/doctors/new", pages.REGISTER_DOCTOR),
    ("/appointments", pages.APPOINTMENTS),
    ("/appointments/book", pages.BOOK_APPOINTMENT),
    ("/appointments/{id}", pages.APPOINTMENT_DETAIL),
    ("/records", pages.RECORDS),
    ("/records/new", pages.CREATE_RECORD),
    ("/records/{id}", pages.RECORD_DETAIL),
    ("/invoices", pages.INVOICES),
    ("/invoices/new", pages.CREATE_INVOICE),
    ("/invoices/{id}", pages.INVOICE_DETAIL),
    ("/medicines", pages.MEDICINES),
    ("/medicines/new", pages.ADD_MEDICINE),
    ("/medicines/{id}", pages.MEDICINE_DETAIL),
    ("/prescriptions", pages.PRESCRIPTIONS),
    ("/prescriptions/new", pages.CREATE_PRESCRIPTION),
    ("/prescriptions/{id}", pages.PRESCRIPTION_DETAIL),
    ("/lab-tests", pages.LAB_TESTS),
    ("/lab-tests/new", pages.ADD_LAB_TEST),
    ("/lab-tests/{id}", pages.LAB_TEST_DETAIL),
    ("/lab-orders", pages.LAB_ORDERS),
    ("/lab-orders/new", pages.CREATE_LAB_ORDER),
    ("/lab-orders/{id}", pages.LAB_ORDER_DETAIL),
    ("/wards", pages.WARDS),
    ("/wards/new", pages.CREATE_WARD),
    ("/beds", pages.BEDS),
    ("/beds/new", pages.CREATE_BED),
    ("/admissions", pages.ADMISSIONS),
    ("/admissions/new", pages.CREATE_ADMISSION),
    ("/admissions/{id}", pages.ADMISSION_DETAIL),
    ("/staff", pages.STAFF),
    ("/staff/new", pages.CREATE_STAFF),
    ("/staff/{id}", pages.STAFF_DETAIL),
    ("/leaves", pages.LEAVES),
    ("/leaves/new", pages.REQUEST_LEAVE),
    ("/leaves/{id}", pages.LEAVE_DETAIL),
    ("/items", pages.ITEMS),
    ("/items/new", pages.CREATE_ITEM),
    ("/items/{id}", pages.ITEM_DETAIL),
    ("/transactions", pages.TRANSACTIONS),
    ("/transactions/new", pages.RECORD_TRANSACTION),
    ("/blood-units", pages.BLOOD_UNITS),
    ("/blood-units/new", pages.REGISTER_BLOOD_UNIT),
    ("/blood-units/{id}", pages.BLOOD_UNIT_DETAIL),
    ("/blood-stock", pages.BLOOD_STOCK),
    ("/blood-requests", pages.BLOOD_REQUESTS),
    ("/blood-requests/new", pages.CREATE_BLOOD_REQUEST),
    ("/blood-requests/{id}", pages.BLOOD_REQUEST_DETAIL),
    ("/notifications", pages.NOTIFICATIONS),
    ("/notifications/send", pages.SEND_NOTIFICATION),
    ("/notifications/{id}", pages.NOTIFICATION_DETAIL),
]


@dataclass
class RouteMatch:
    """A resolved console path."""

    path: str
    pattern: str
    page: ConsolePage
    entity_id: str | None = None
    query: dict[str, str] = field(default_factory=dict)


def _split(path: str) -> list[str]:
    return [segment for segment in path.strip("/").split("/") if segment]


def _match(pattern: str, segments: list[str]) -> tuple[bool, str | None]:
    parts = _split(pattern)
    if len(parts) != len(segments):
        return False, None
    entity_id = None
    for part, segment in zip(parts, segments):
        if part == "{id}":
            entity_id = segment
        elif part != segment:
            return False, None
    return True, entity_id


def resolve(path: str) -> RouteMatch:
    """Map a console path (optionally with a query string) to its page.

    Literal segments take precedence over `{id}`, so `/appointments/book`
    is the booking form rather than an appointment with id "book". The
    root path resolves to the patients list.

    Raises:
        RouteNotFoundError: If no page is mapped to the path
    """
    parts = urlsplit(path)
    route_path = "/" + "/".join(_split(parts.path))
    query = dict(parse_qsl(parts.query))
    if route_path == "/":
        route_path = HOME

    segments = _split(route_path)
    candidates: list[tuple[int, str, ConsolePage, str | None]] = []
    for pattern, page in ROUTES:
        matched, entity_id = _match(pattern, segments)
        if not matched:
            continue
        literal_count = sum(1 for part in _split(pattern) if part != "{id}")
        candidates.append((literal_count, pattern, page, entity_id))

    if not candidates:
        raise RouteNotFoundError(route_path)

    _, pattern, page, entity_id = max(candidates, key=lambda c: c[0])
    return RouteMatch(path=route_path, pattern=pattern, page=page, entity_id=entity_id, query=query)


def open_view(match: RouteMatch, clients: HospitalClients) -> ListView | DetailView | FormView:
    """Build the controller for a resolved page; query parameters seed filters or form values."""
    page = match.page
    if isinstance(page, ListPage):
        return ListView(page, clients, filters=match.query)
    if isinstance(page, DetailPage):
        return DetailView(page, clients, match.entity_id or "")
    if page.booking:
        return BookingForm(page, clients, initial=match.query)
    return FormView(page, clients, initial=match.query)


def route_table() -> list[dict[str, Any]]:
    return [{"path": pattern, "page": page.name, "kind": page.kind, "title": page.title} for pattern, page in ROUTES]
