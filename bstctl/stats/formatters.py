"""Console formatter for snapshots, clear results and device errors."""

from __future__ import annotations

from bstctl.exceptions import DeviceError, ErrorCode
from bstctl.models.counters import COUNTER_CATALOG, CounterSpec
from bstctl.models.snapshot import ClearResult, CounterFailure, StatsSnapshot

FAILURE_ACTIONS = {
    "sync": "sync the state of port",
    "read": "get the port stats",
    "clear": "clear the port stats",
}


def error_line(action: str, code: ErrorCode | int, message: str) -> str:
    """Return e.g. ``Failed to get the port stats, rc = -7 (Entry not found).``"""
    return f"Failed to {action}, rc = {int(code)} ({message})."


def failure_line(failure: CounterFailure) -> str:
    return error_line(FAILURE_ACTIONS[failure.operation], failure.code, failure.message)


def device_error_line(action: str, error: DeviceError) -> str:
    return error_line(action, error.code, error.message)


class ConsoleFormatter:
    """Render statistics as the plain-text operator console lines."""

    def __init__(self, catalog: tuple[CounterSpec, ...] = COUNTER_CATALOG) -> None:
        self.catalog = catalog

    def format_snapshot(self, snapshot: StatsSnapshot) -> str:
        """Sync errors first, then one line per cell read, kind by kind.

        A read failure is printed where it happened and ends that kind's
        block; every block is followed by a blank line.
        """
        lines: list[str] = [failure_line(f) for f in snapshot.sync_failures]

        for spec in self.catalog:
            failure = snapshot.read_failure(spec.kind)
            for queue, value in enumerate(snapshot.values[spec.kind]):
                if failure is not None and failure.queue == queue:
                    lines.append(failure_line(failure))
                    break
                if value is None:
                    continue
                lines.append(f"BST Counter: {spec.name} for COS queue: {queue} is : {value}")
            lines.append("")

        return "\n".join(lines)

    def format_clear(self, result: ClearResult) -> str:
        lines: list[str] = [failure_line(f) for f in result.failures]
        if result.is_complete:
            lines.append(f"Port {result.port} stats cleared")
        else:
            lines.append(
                f"Port {result.port} stats cleared for {len(result.cleared_kinds)} of {len(self.catalog)} counters"
            )
        return "\n".join(lines)
