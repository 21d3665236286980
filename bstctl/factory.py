"""Registry of device gateway backends, selected by name at startup."""

from __future__ import annotations

from typing import Any, Callable

from bstctl.base.gateway import BaseStatsGateway
from bstctl.exceptions import ConfigError

_GATEWAY_REGISTRY: dict[str, type[BaseStatsGateway]] = {}


def register_gateway(name: str) -> Callable[[type[BaseStatsGateway]], type[BaseStatsGateway]]:
    """Class decorator making a backend selectable through ``BSTCTL_GATEWAY``.

    Usage::

        @register_gateway("sonic")
        class SonicStatsGateway(BaseStatsGateway):
            ...
    """

    def decorator(cls: type[BaseStatsGateway]) -> type[BaseStatsGateway]:
        _GATEWAY_REGISTRY[name.lower()] = cls
        return cls

    return decorator


def gateway_class(name: str) -> type[BaseStatsGateway]:
    """Look up a backend class by case-insensitive name.

    Raises:
        ConfigError: If no backend is registered under *name*.
    """
    cls = _GATEWAY_REGISTRY.get(name.strip().lower())
    if cls is None:
        raise ConfigError(f"Unknown gateway '{name}'. Available: {', '.join(list_gateways())}")
    return cls


def create_gateway(name: str, **kwargs: Any) -> BaseStatsGateway:
    """Instantiate the backend *name*; nothing is connected until ``init_device``."""
    return gateway_class(name)(**kwargs)


def list_gateways() -> list[str]:
    return sorted(_GATEWAY_REGISTRY)
