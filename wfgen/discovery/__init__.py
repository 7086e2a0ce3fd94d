"""Backend service discovery."""

from wfgen.discovery.services import (
    DEFAULT_SERVICE,
    EXCLUDED_PREFIX,
    DiscoveryResult,
    discover_services,
    services_filter_block,
    services_json,
)

__all__ = [
    "DEFAULT_SERVICE",
    "EXCLUDED_PREFIX",
    "DiscoveryResult",
    "discover_services",
    "services_filter_block",
    "services_json",
]
