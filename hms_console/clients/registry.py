"""Registry bundling one client per backend over a shared HTTP connection pool."""

import httpx

from hms_console.clients.appointments import AppointmentsClient
from hms_console.clients.beds import BedsClient
from hms_console.clients.billing import BillingClient
from hms_console.clients.blood_bank import BloodBankClient
from hms_console.clients.inventory import InventoryClient
from hms_console.clients.lab import LabClient
from hms_console.clients.notifications import NotificationsClient
from hms_console.clients.patients import PatientsClient
from hms_console.clients.pharmacy import PharmacyClient
from hms_console.clients.records import RecordsClient
from hms_console.clients.staff import StaffClient
from hms_console.config import ConsoleConfig, get_config
from hms_console.utils.logging import get_logger

logger = get_logger(__name__)


class HospitalClients:
    """All backend clients, sharing one `httpx.AsyncClient` against the gateway."""

    def __init__(self, config: ConsoleConfig | None = None, http: httpx.AsyncClient | None = None):
        """Initialize the registry.

        Args:
            config: Console configuration (defaults to the global instance)
            http: HTTP client to share; created from the configuration when omitted
        """
        self.config = config or get_config()
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(base_url=self.config.gateway_url, timeout=self.config.timeout)

        self.patients = PatientsClient(self.http, self.config)
        self.appointments = AppointmentsClient(self.http, self.config)
        self.records = RecordsClient(self.http, self.config)
        self.billing = BillingClient(self.http, self.config)
        self.pharmacy = PharmacyClient(self.http, self.config)
        self.lab = LabClient(self.http, self.config)
        self.beds = BedsClient(self.http, self.config)
        self.staff = StaffClient(self.http, self.config)
        self.inventory = InventoryClient(self.http, self.config)
        self.blood_bank = BloodBankClient(self.http, self.config)
        self.notifications = NotificationsClient(self.http, self.config)

        logger.debug(f"Backend clients ready against {self.config.gateway_url}")

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HospitalClients":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


_clients: HospitalClients | None = None


def get_clients() -> HospitalClients:
    """Get or create the shared client registry."""
    global _clients
    if _clients is None:
        _clients = HospitalClients()
    return _clients


async def close_clients() -> None:
    """Close the shared registry, if one was created."""
    global _clients
    if _clients is not None:
        await _clients.aclose()
        _clients = None
