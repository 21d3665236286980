"""Data models for BST statistics."""

from bstctl.models.counters import (
    COUNTER_CATALOG,
    QUEUE_COUNT,
    UINT64_MAX,
    CounterKind,
    CounterSpec,
    queue_indices,
)
from bstctl.models.snapshot import ClearResult, CounterFailure, PortHandle, StatsSnapshot

__all__ = [
    "COUNTER_CATALOG",
    "QUEUE_COUNT",
    "UINT64_MAX",
    "CounterKind",
    "CounterSpec",
    "queue_indices",
    "ClearResult",
    "CounterFailure",
    "PortHandle",
    "StatsSnapshot",
]
