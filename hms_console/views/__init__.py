"""Page controllers: list, detail and form views over the backend clients."""

from hms_console.views.detail_view import DetailView
from hms_console.views.form_view import BookingForm, FormView
from hms_console.views.list_view import ListView
from hms_console.views.state import ErrorBanner, PaginationState, RequestSequence

__all__ = [
    "BookingForm",
    "DetailView",
    "ErrorBanner",
    "FormView",
    "ListView",
    "PaginationState",
    "RequestSequence",
]
