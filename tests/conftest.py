"""Shared fixtures for the bstctl test suite."""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest

from bstctl.base.gateway import BaseStatsGateway
from bstctl.gateways.simulated import SimulatedGateway
from bstctl.models.snapshot import PortHandle
from bstctl.session import InteractiveSession

# ── gateway fixtures ──────────────────────────────────────────────────


@pytest.fixture()
def sim_gateway():
    """SimulatedGateway with 8 ports, initialized and BST enabled."""
    gateway = SimulatedGateway(num_ports=8)
    gateway.init_device()
    gateway.enable_bst()
    return gateway


@pytest.fixture()
def mock_gateway():
    """MagicMock of BaseStatsGateway resolving every port to xe<port-1>."""
    gateway = MagicMock(spec=BaseStatsGateway)
    gateway.resolve_port.side_effect = lambda port: PortHandle(logical_port=port, device_port=f"xe{port - 1}")
    gateway.read_counter.return_value = 0
    return gateway


@pytest.fixture()
def mock_sonic_transport():
    """MagicMock of SonicSSHTransport with send_command."""
    transport = MagicMock()
    transport.send_command.return_value = ""
    transport.is_connected.return_value = True
    return transport


# ── session fixtures ──────────────────────────────────────────────────


@pytest.fixture()
def make_session():
    """Factory fixture: build an InteractiveSession fed with *keys*.

    Returns ``(session, stdout)``.
    """

    def _make(gateway, keys: str):
        stdout = io.StringIO()
        session = InteractiveSession(gateway, stdin=io.StringIO(keys), stdout=stdout)
        return session, stdout

    return _make
