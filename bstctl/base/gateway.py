"""Abstract device statistics gateway."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any, Self, TextIO

from bstctl.base.shell import DiagnosticShell
from bstctl.models.counters import CounterKind
from bstctl.models.snapshot import PortHandle


class BaseStatsGateway(ABC):
    """Capability interface between the statistics core and a switch.

    Each backend implements the four counter operations plus the startup
    steps. All calls block until the device answers and report failures by
    raising :class:`~bstctl.exceptions.DeviceError`.
    """

    shell_prompt: str = "BCM.0> "

    def __init__(self, **kwargs: Any) -> None:
        pass

    # ── Counter operations ─────────────────────────────────────────────

    @abstractmethod
    def resolve_port(self, logical_port: int) -> PortHandle:
        """Map an operator port number to a device port.

        Raises:
            PortResolutionError: If the port does not exist.
        """

    @abstractmethod
    def sync_counter(self, kind: CounterKind) -> None:
        """Latch the current hardware values of *kind* for all ports and queues."""

    @abstractmethod
    def read_counter(self, handle: PortHandle, queue: int, kind: CounterKind) -> int:
        """Return the last latched value of one (port, queue, kind) cell."""

    @abstractmethod
    def clear_counter(self, handle: PortHandle, queue: int, kind: CounterKind) -> None:
        """Reset one (port, queue, kind) cell to zero in hardware."""

    # ── Startup / lifecycle ────────────────────────────────────────────

    @abstractmethod
    def init_device(self) -> None:
        """Initialize the device (or connect to it)."""

    @abstractmethod
    def configure_default_vlan(self, vlan_id: int) -> None:
        """Add every front-panel port to *vlan_id* untagged."""

    @abstractmethod
    def enable_bst(self) -> None:
        """Turn on buffer statistics tracking."""

    @abstractmethod
    def disconnect(self) -> None:
        """Release the device."""

    # ── Diagnostic shell ───────────────────────────────────────────────

    @abstractmethod
    def run_shell_command(self, command: str) -> str:
        """Execute one diagnostic shell command and return its output."""

    def launch_shell(self, stdin: TextIO, stdout: TextIO) -> None:
        """Run the interactive diagnostic shell until the operator exits."""
        DiagnosticShell(self, stdin, stdout, prompt=self.shell_prompt).run()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
