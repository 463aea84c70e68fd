"""Status badge colours."""

# Rich styles keyed by status string
STATUS_STYLES: dict[str, str] = {
    "ACTIVE": "green",
    "INACTIVE": "dim",
    "SCHEDULED": "blue",
    "CONFIRMED": "cyan",
    "COMPLETED": "green",
    "CANCELLED": "red",
    "NO_SHOW": "yellow",
    "DRAFT": "dim",
    "FINALIZED": "green",
    "AMENDED": "magenta",
    "ISSUED": "blue",
    "PARTIALLY_PAID": "yellow",
    "PAID": "green",
    "PENDING": "yellow",
    "DISPENSED": "green",
    "ORDERED": "blue",
    "SAMPLE_COLLECTED": "cyan",
    "IN_PROGRESS": "magenta",
    "AVAILABLE": "green",
    "OCCUPIED": "red",
    "MAINTENANCE": "yellow",
    "ADMITTED": "blue",
    "DISCHARGED": "dim",
    "APPROVED": "green",
    "REJECTED": "red",
    "USED": "dim",
    "EXPIRED": "red",
    "DISCARDED": "red",
    "FULFILLED": "green",
    "SENT": "blue",
    "FAILED": "red",
    "READ": "dim",
    "DISCONTINUED": "red",
}

DEFAULT_STYLE = "white"


def badge_style(status: str | None) -> str:
    if not status:
        return DEFAULT_STYLE
    return STATUS_STYLES.get(str(status), DEFAULT_STYLE)


def badge_label(status: str | None) -> str:
    """Human-readable badge text, e.g. PARTIALLY_PAID -> Partially Paid."""
    if not status:
        return "-"
    return str(status).replace("_", " ").title()
