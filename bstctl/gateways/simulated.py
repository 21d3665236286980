"""In-memory simulated switch for offline use and tests."""

from __future__ import annotations

from typing import Any

from loguru import logger
from tabulate import tabulate

from bstctl.base.gateway import BaseStatsGateway
from bstctl.exceptions import DeviceError, ErrorCode, PortResolutionError
from bstctl.factory import register_gateway
from bstctl.models.counters import COUNTER_CATALOG, QUEUE_COUNT, UINT64_MAX, CounterKind, queue_indices
from bstctl.models.snapshot import PortHandle

SHELL_HELP = """\
Commands:
  show <port>                        Show live buffer occupancy of a port
  set <port> <kind> <queue> <value>  Set live occupancy of one cell
  load <port> <value>                Set every cell of a port to <value>
  help                               Show this text
  exit | quit                        Return to the menu
Kinds: """ + ", ".join(spec.kind.value for spec in COUNTER_CATALOG)

Matrix = dict[CounterKind, list[int]]


def _empty_matrix(queue_count: int) -> Matrix:
    return {spec.kind: [0] * queue_count for spec in COUNTER_CATALOG}


@register_gateway("sim")
class SimulatedGateway(BaseStatsGateway):
    """Simulated switch with a live and a latched counter matrix per port.

    ``sync_counter`` copies live values into the latched matrix for one kind
    on every port; ``read_counter`` only ever sees latched values. Failures
    can be injected per operation through the ``fail_*`` sets.

    Usage::

        with SimulatedGateway(num_ports=8) as gw:
            gw.init_device()
            gw.enable_bst()
            gw.set_occupancy(3, CounterKind.UCAST, 0, 1024)
    """

    def __init__(self, num_ports: int = 32, queue_count: int = QUEUE_COUNT, **kwargs: Any) -> None:
        super().__init__()
        if num_ports < 1:
            raise ValueError(f"num_ports must be positive, got {num_ports}")
        self.num_ports = num_ports
        self.queue_count = queue_count

        self._live: dict[int, Matrix] = {p: _empty_matrix(queue_count) for p in range(1, num_ports + 1)}
        self._latched: dict[int, Matrix] = {p: _empty_matrix(queue_count) for p in range(1, num_ports + 1)}

        self.initialized = False
        self.bst_enabled = False
        self.vlans: dict[int, set[int]] = {}

        self.fail_sync: set[CounterKind] = set()
        self.fail_read: set[tuple[CounterKind, int]] = set()
        self.fail_clear: set[tuple[CounterKind, int]] = set()
        self.fail_vlan = False

    # ── Simulation controls ────────────────────────────────────────────

    def set_occupancy(self, port: int, kind: CounterKind, queue: int, value: int) -> None:
        """Set the live (not yet latched) occupancy of one cell."""
        self._check_port(port)
        self._check_queue(queue)
        if not 0 <= value <= UINT64_MAX:
            raise DeviceError(f"value {value} out of range", ErrorCode.PARAM)
        self._live[port][kind][queue] = value

    def live_value(self, port: int, kind: CounterKind, queue: int) -> int:
        return self._live[port][kind][queue]

    def latched_value(self, port: int, kind: CounterKind, queue: int) -> int:
        return self._latched[port][kind][queue]

    # ── Counter operations ─────────────────────────────────────────────

    def resolve_port(self, logical_port: int) -> PortHandle:
        if logical_port not in self._live:
            raise PortResolutionError(logical_port)
        return PortHandle(logical_port=logical_port, device_port=f"xe{logical_port - 1}")

    def sync_counter(self, kind: CounterKind) -> None:
        self._ensure_enabled()
        if kind in self.fail_sync:
            raise DeviceError(f"sync of {kind.value} failed", ErrorCode.TIMEOUT)
        for port, matrix in self._live.items():
            self._latched[port][kind] = list(matrix[kind])
        logger.debug(f"Latched {kind.value} on {self.num_ports} ports")

    def read_counter(self, handle: PortHandle, queue: int, kind: CounterKind) -> int:
        self._ensure_enabled()
        self._check_queue(queue)
        if (kind, queue) in self.fail_read:
            raise DeviceError(f"read of {kind.value} queue {queue} failed", ErrorCode.INTERNAL)
        return self._latched[self._port_of(handle)][kind][queue]

    def clear_counter(self, handle: PortHandle, queue: int, kind: CounterKind) -> None:
        self._ensure_enabled()
        self._check_queue(queue)
        if (kind, queue) in self.fail_clear:
            raise DeviceError(f"clear of {kind.value} queue {queue} failed", ErrorCode.INTERNAL)
        port = self._port_of(handle)
        self._live[port][kind][queue] = 0
        self._latched[port][kind][queue] = 0

    # ── Startup / lifecycle ────────────────────────────────────────────

    def init_device(self) -> None:
        self.initialized = True
        logger.info(f"Simulated switch initialized with {self.num_ports} ports")

    def configure_default_vlan(self, vlan_id: int) -> None:
        self._ensure_initialized()
        if self.fail_vlan:
            raise DeviceError(f"failed to add ports to VLAN {vlan_id}", ErrorCode.CONFIG)
        self.vlans.setdefault(vlan_id, set()).update(self._live.keys())

    def enable_bst(self) -> None:
        self._ensure_initialized()
        self.bst_enabled = True

    def disconnect(self) -> None:
        self.initialized = False
        self.bst_enabled = False

    # ── Diagnostic shell ───────────────────────────────────────────────

    def run_shell_command(self, command: str) -> str:
        args = command.split()
        verb = args[0].lower()

        if verb == "help":
            return SHELL_HELP
        if verb == "show" and len(args) == 2:
            return self._show(self._int_arg(args[1]))
        if verb == "set" and len(args) == 5:
            kind = self._kind_arg(args[2])
            self.set_occupancy(self._int_arg(args[1]), kind, self._int_arg(args[3]), self._int_arg(args[4]))
            return ""
        if verb == "load" and len(args) == 3:
            port, value = self._int_arg(args[1]), self._int_arg(args[2])
            for spec in COUNTER_CATALOG:
                for queue in queue_indices(self.queue_count):
                    self.set_occupancy(port, spec.kind, queue, value)
            return ""
        raise DeviceError(f"unknown command: {command}", ErrorCode.PARAM)

    def _show(self, port: int) -> str:
        self._check_port(port)
        headers = ["Counter"] + [f"Q{q}" for q in queue_indices(self.queue_count)]
        rows = [[spec.name] + self._live[port][spec.kind] for spec in COUNTER_CATALOG]
        return tabulate(rows, headers=headers, tablefmt="simple")

    # ── Helpers ────────────────────────────────────────────────────────

    @staticmethod
    def _int_arg(text: str) -> int:
        try:
            return int(text)
        except ValueError:
            raise DeviceError(f"not a number: {text}", ErrorCode.PARAM) from None

    @staticmethod
    def _kind_arg(text: str) -> CounterKind:
        try:
            return CounterKind(text.lower())
        except ValueError:
            raise DeviceError(f"unknown counter kind: {text}", ErrorCode.PARAM) from None

    def _port_of(self, handle: PortHandle) -> int:
        self._check_port(handle.logical_port)
        return handle.logical_port

    def _check_port(self, port: int) -> None:
        if port not in self._live:
            raise DeviceError(f"port {port} does not exist", ErrorCode.PORT)

    def _check_queue(self, queue: int) -> None:
        if not 0 <= queue < self.queue_count:
            raise DeviceError(f"queue {queue} out of range", ErrorCode.PARAM)

    def _ensure_initialized(self) -> None:
        if not self.initialized:
            raise DeviceError("device not initialized", ErrorCode.INIT)

    def _ensure_enabled(self) -> None:
        self._ensure_initialized()
        if not self.bst_enabled:
            raise DeviceError("BST is not enabled", ErrorCode.DISABLED)
