"""Pydantic models for per-port statistics snapshots and clear results."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from bstctl.exceptions import DeviceError, ErrorCode
from bstctl.models.counters import COUNTER_CATALOG, QUEUE_COUNT, UINT64_MAX, CounterKind


class PortHandle(BaseModel):
    """Device-addressable port, resolved from an operator-facing port number."""

    model_config = ConfigDict(frozen=True)

    logical_port: int
    device_port: str


class CounterFailure(BaseModel):
    """One failed sync, read or clear call."""

    operation: Literal["sync", "read", "clear"]
    kind: CounterKind
    queue: int | None = None
    code: ErrorCode = ErrorCode.INTERNAL
    message: str = ""

    @classmethod
    def from_error(
        cls,
        operation: Literal["sync", "read", "clear"],
        kind: CounterKind,
        error: DeviceError,
        queue: int | None = None,
    ) -> CounterFailure:
        return cls(operation=operation, kind=kind, queue=queue, code=error.code, message=error.message)


class StatsSnapshot(BaseModel):
    """Matrix of [counter kind x queue] values for one port and one request.

    A cell holding ``None`` was not read (missing), which is distinct from a
    device value of zero.
    """

    port: int
    device_port: str = ""
    queue_count: int = QUEUE_COUNT
    values: dict[CounterKind, list[int | None]] = Field(default_factory=dict)
    sync_failures: list[CounterFailure] = Field(default_factory=list)
    read_failures: list[CounterFailure] = Field(default_factory=list)

    @classmethod
    def for_port(cls, handle: PortHandle, queue_count: int = QUEUE_COUNT) -> StatsSnapshot:
        """Create an empty snapshot with every cell missing."""
        return cls(
            port=handle.logical_port,
            device_port=handle.device_port,
            queue_count=queue_count,
            values={spec.kind: [None] * queue_count for spec in COUNTER_CATALOG},
        )

    def record(self, kind: CounterKind, queue: int, value: int) -> None:
        """Store a device value for one cell."""
        if not 0 <= value <= UINT64_MAX:
            raise ValueError(f"counter value {value} is not an unsigned 64-bit integer")
        self.values[kind][queue] = value

    def value(self, kind: CounterKind, queue: int) -> int | None:
        return self.values[kind][queue]

    def cells(self) -> Iterator[tuple[CounterKind, int, int | None]]:
        """Yield ``(kind, queue, value)`` in catalog and ascending queue order."""
        for spec in COUNTER_CATALOG:
            for queue, value in enumerate(self.values[spec.kind]):
                yield spec.kind, queue, value

    def read_failure(self, kind: CounterKind) -> CounterFailure | None:
        """Return the read failure that ended *kind*'s queue loop, if any."""
        for failure in self.read_failures:
            if failure.kind is kind:
                return failure
        return None

    @property
    def populated_count(self) -> int:
        return sum(1 for _, _, value in self.cells() if value is not None)

    @property
    def missing_cells(self) -> list[tuple[CounterKind, int]]:
        return [(kind, queue) for kind, queue, value in self.cells() if value is None]

    @property
    def is_complete(self) -> bool:
        return not self.sync_failures and not self.read_failures and not self.missing_cells


class ClearResult(BaseModel):
    """Outcome of clearing every counter of one port."""

    port: int
    device_port: str = ""
    cleared_kinds: list[CounterKind] = Field(default_factory=list)
    failures: list[CounterFailure] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.failures
