"""Exceptions raised by the console."""

FALLBACK_ERROR_MESSAGE = "An unexpected error occurred"


class ApiError(Exception):
    """A backend call failed.

    Every failure (transport, HTTP error, malformed body) is reduced to one
    human-readable message; the HTTP status is kept when there was a response.
    """

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or FALLBACK_ERROR_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)


class FormValidationError(ValueError):
    """A form was submitted with missing or malformed fields."""

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = field_errors
        fields = ", ".join(sorted(field_errors))
        super().__init__(f"Please correct the following fields: {fields}")


class ActionNotAllowedError(ValueError):
    """An action was requested that the entity's current status does not offer."""

    def __init__(self, action: str, status: str | None):
        self.action = action
        self.status = status
        super().__init__(f"Action '{action}' is not available while status is {status or 'unknown'}")


class RouteNotFoundError(LookupError):
    """No console page is mapped to a path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No page found for {path}")
