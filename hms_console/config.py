"""Console configuration."""

import os
from dataclasses import dataclass, field

DEFAULT_ACTOR = "SYSTEM"

# Path prefix each backend is reverse-proxied under at the gateway
SERVICE_PREFIXES: dict[str, str] = {
    "patients": "/api",
    "appointments": "/apt-api",
    "records": "/emr-api",
    "billing": "/bill-api",
    "notifications": "/notif-api",
    "pharmacy": "/pharm-api",
    "lab": "/lab-api",
    "beds": "/bed-api",
    "staff": "/staff-api",
    "inventory": "/inv-api",
    "blood_bank": "/blood-api",
}


@dataclass
class ConsoleConfig:
    """Configuration shared by the backend clients and the page controllers."""

    gateway_url: str = "http://localhost:3000"
    default_actor: str = DEFAULT_ACTOR
    page_size: int = 20
    timeout: float = 30.0
    api_version: str = "v1"
    service_prefixes: dict[str, str] = field(default_factory=lambda: dict(SERVICE_PREFIXES))

    @classmethod
    def from_env(cls) -> "ConsoleConfig":
        """Build a configuration from HMS_* environment variables."""
        config = cls()
        config.gateway_url = os.getenv("HMS_GATEWAY_URL", config.gateway_url)
        config.default_actor = os.getenv("HMS_USER_ID", config.default_actor)
        config.page_size = int(os.getenv("HMS_PAGE_SIZE", config.page_size))
        config.timeout = float(os.getenv("HMS_TIMEOUT", config.timeout))

        for service in config.service_prefixes:
            override = os.getenv(f"HMS_{service.upper()}_PREFIX")
            if override:
                config.service_prefixes[service] = override

        return config

    def service_prefix(self, service: str) -> str:
        """Full path prefix for a backend, including the API version."""
        try:
            prefix = self.service_prefixes[service]
        except KeyError:
            raise ValueError(f"Unknown backend service: {service}") from None
        return f"{prefix.rstrip('/')}/{self.api_version}"


_config: ConsoleConfig | None = None


def get_config() -> ConsoleConfig:
    """Get or create the console configuration."""
    global _config
    if _config is None:
        _config = ConsoleConfig.from_env()
    return _config
