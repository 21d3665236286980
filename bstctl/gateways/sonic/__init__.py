"""SONiC gateway over SSH."""

from bstctl.gateways.sonic.gateway import SonicStatsGateway
from bstctl.gateways.sonic.ssh import SonicSSHTransport

__all__ = [
    "SonicStatsGateway",
    "SonicSSHTransport",
]
