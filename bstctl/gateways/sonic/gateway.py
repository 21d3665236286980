"""SONiC switch gateway: BST counters via queue / priority-group watermarks."""

from __future__ import annotations

from typing import Any

from loguru import logger

from bstctl.base.gateway import BaseStatsGateway
from bstctl.base.transport import DEFAULT_TIMEOUT, BaseTransport
from bstctl.exceptions import DeviceError, ErrorCode, PortResolutionError, SSHError
from bstctl.factory import register_gateway
from bstctl.gateways.sonic._util import WatermarkTable, parse_interface_alias, parse_watermark_table
from bstctl.gateways.sonic.ssh import SonicSSHTransport
from bstctl.models.counters import CounterKind
from bstctl.models.snapshot import PortHandle

# counter kind -> (CLI object, watermark type)
WATERMARK_OBJECTS: dict[CounterKind, tuple[str, str]] = {
    CounterKind.UCAST: ("queue", "unicast"),
    CounterKind.MCAST: ("queue", "multicast"),
    CounterKind.PG_SHARED: ("priority-group", "shared"),
    CounterKind.PG_HEADROOM: ("priority-group", "headroom"),
}


@register_gateway("sonic")
class SonicStatsGateway(BaseStatsGateway):
    """Gateway for SONiC switches reached over SSH.

    On Broadcom platforms SONiC's watermark counters are the BST values.
    ``sync_counter`` runs the watermark ``show`` command for one kind and
    keeps the parsed table; reads are served from that table only, so a
    failed sync leaves the previously latched values in place.

    SONiC clears a watermark kind for all ports and queues at once. The
    clear command is therefore sent for queue 0 only and zeroes the latched
    table of every interface; later queues of the same kind are no-ops.

    Usage::

        with SonicStatsGateway(host="10.0.0.1", password="YourPaSsWoRd") as gw:
            gw.init_device()
            gw.sync_counter(CounterKind.UCAST)
            handle = gw.resolve_port(0)
            print(gw.read_counter(handle, 3, CounterKind.UCAST))
    """

    shell_prompt = "sonic$ "

    def __init__(
        self,
        host: str = "",
        password: str = "",
        username: str = "admin",
        ssh_port: int = 22,
        timeout: int = DEFAULT_TIMEOUT,
        persistent_watermark: bool = False,
        transport: BaseTransport | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__()
        if not host and transport is None:
            raise ValueError("SONiC gateway requires a host")
        self.host = host
        self.persistent_watermark = persistent_watermark
        self._transport: BaseTransport = transport or SonicSSHTransport(
            host=host,
            username=username,
            password=password,
            port=ssh_port,
            timeout=timeout,
        )
        self._latched: dict[CounterKind, WatermarkTable] = {}

    # ── Commands ───────────────────────────────────────────────────────

    def show_command(self, kind: CounterKind) -> str:
        obj, wm_type = WATERMARK_OBJECTS[kind]
        return f"show {obj} {self._watermark_word} {wm_type}"

    def clear_command(self, kind: CounterKind) -> str:
        obj, wm_type = WATERMARK_OBJECTS[kind]
        return f"sonic-clear {obj} {self._watermark_word} {wm_type}"

    @property
    def _watermark_word(self) -> str:
        return "persistent-watermark" if self.persistent_watermark else "watermark"

    # ── Counter operations ─────────────────────────────────────────────

    def resolve_port(self, logical_port: int) -> PortHandle:
        name = f"Ethernet{logical_port}"
        if name not in self.list_interfaces():
            raise PortResolutionError(logical_port, f"interface {name} not found on {self.host}")
        return PortHandle(logical_port=logical_port, device_port=name)

    def sync_counter(self, kind: CounterKind) -> None:
        command = self.show_command(kind)
        output = self._transport.send_command(command)
        try:
            table = parse_watermark_table(output)
        except ValueError as e:
            first_line = output.strip().splitlines()[0] if output.strip() else str(e)
            raise DeviceError(f"'{command}': {first_line}", ErrorCode.UNAVAIL) from e
        self._latched[kind] = table
        logger.debug(f"Latched {kind.value} watermarks for {len(table)} interfaces")

    def read_counter(self, handle: PortHandle, queue: int, kind: CounterKind) -> int:
        table = self._latched.get(kind)
        if table is None:
            raise DeviceError(f"{kind.value} watermarks have not been synced", ErrorCode.EMPTY)
        row = table.get(handle.device_port)
        if row is None:
            raise DeviceError(f"no {kind.value} watermarks for {handle.device_port}", ErrorCode.NOT_FOUND)
        if not 0 <= queue < len(row):
            raise DeviceError(f"queue {queue} not present for {handle.device_port}", ErrorCode.PARAM)
        value = row[queue]
        if value is None:
            raise DeviceError(f"{kind.value} queue {queue} is N/A on {handle.device_port}", ErrorCode.UNAVAIL)
        return value

    def clear_counter(self, handle: PortHandle, queue: int, kind: CounterKind) -> None:
        if queue != 0:
            return
        logger.warning(
            f"{kind.value} watermarks are cleared on all interfaces of {self.host}, not only {handle.device_port}"
        )
        self._transport.send_command(self.clear_command(kind))
        for row in self._latched.get(kind, {}).values():
            row[:] = [0] * len(row)

    # ── Startup / lifecycle ────────────────────────────────────────────

    def init_device(self) -> None:
        if not self._transport.is_connected():
            self._transport.connect()

    def configure_default_vlan(self, vlan_id: int) -> None:
        try:
            self._transport.send_command(f"sudo config vlan add {vlan_id}")
        except SSHError as e:
            if "already exists" not in e.message:
                raise
            logger.info(f"VLAN {vlan_id} already exists on {self.host}")

        for name in self.list_interfaces():
            self._transport.send_command(f"sudo config vlan member add -u {vlan_id} {name}")

    def enable_bst(self) -> None:
        self._transport.send_command("sudo counterpoll watermark enable")

    def disconnect(self) -> None:
        self._latched.clear()
        if self._transport.is_connected():
            self._transport.disconnect()

    # ── Diagnostic shell ───────────────────────────────────────────────

    def run_shell_command(self, command: str) -> str:
        return self._transport.send_command(command).rstrip("\n")

    # ── Helpers ────────────────────────────────────────────────────────

    def list_interfaces(self) -> list[str]:
        """Front-panel interface names, as listed by the switch."""
        output = self._transport.send_command("show interfaces alias")
        try:
            return list(parse_interface_alias(output))
        except ValueError as e:
            raise DeviceError(f"cannot parse interface list: {e}", ErrorCode.INTERNAL) from e
