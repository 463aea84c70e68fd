"""REST clients for the hospital backend services."""

from hms_console.clients.base import ACTOR_HEADER, ServiceClient, normalize_error_message
from hms_console.clients.registry import HospitalClients, get_clients

__all__ = ["ACTOR_HEADER", "HospitalClients", "ServiceClient", "get_clients", "normalize_error_message"]
