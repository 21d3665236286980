"""Abstract base classes for device access."""

from bstctl.base.gateway import BaseStatsGateway
from bstctl.base.shell import DiagnosticShell
from bstctl.base.transport import BaseTransport

__all__ = [
    "BaseStatsGateway",
    "BaseTransport",
    "DiagnosticShell",
]
