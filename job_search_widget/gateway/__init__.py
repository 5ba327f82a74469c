"""Search gateway registry with lazy loading.

Usage:
    from job_search_widget.gateway import get_gateway

    gateway = get_gateway("http", settings.gateway)
    async with gateway:
        listings = await gateway.search(request)
"""

import importlib

from job_search_widget.core.config import GatewayConfig
from job_search_widget.gateway.base import GatewayError, GatewayTimeoutError, SearchGateway

__all__ = [
    "GatewayError",
    "GatewayTimeoutError",
    "SearchGateway",
    "available_gateways",
    "get_gateway",
]

# Lazy registry: maps gateway name → (module_path, class_name)
_REGISTRY: dict[str, tuple[str, str]] = {
    "http": ("job_search_widget.gateway.http", "HttpSearchGateway"),
    "file": ("job_search_widget.gateway.file", "FileSearchGateway"),
}


def get_gateway(name: str, config: GatewayConfig | None = None) -> SearchGateway:
    """Instantiate and return a search gateway by name.

    Raises:
        ValueError: If the gateway name is unknown.
    """
    if name not in _REGISTRY:
        valid = ", ".join(sorted(_REGISTRY))
        msg = f"Unknown search gateway '{name}'. Available: {valid}"
        raise ValueError(msg)

    module_path, class_name = _REGISTRY[name]
    module = importlib.import_module(module_path)
    cls = getattr(module, class_name)
    return cls(config or GatewayConfig())  # type: ignore[no-any-return]


def available_gateways() -> list[str]:
    """Return sorted list of registered gateway names."""
    return sorted(_REGISTRY)
