"""Counter catalog: which buffer statistics exist and how they are named."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CounterKind(Enum):
    """Buffer statistic types tracked per port and CoS queue."""

    UCAST = "ucast"
    MCAST = "mcast"
    PG_SHARED = "priority-group-shared"
    PG_HEADROOM = "priority-group-headroom"


@dataclass(frozen=True)
class CounterSpec:
    """A counter kind paired with its display name."""

    kind: CounterKind
    name: str


# Order determines both synchronization order and display order.
COUNTER_CATALOG: tuple[CounterSpec, ...] = (
    CounterSpec(CounterKind.UCAST, "BstStatIdUcast"),
    CounterSpec(CounterKind.MCAST, "BstStatIdMcast"),
    CounterSpec(CounterKind.PG_SHARED, "BstStatIdPriGroupShared"),
    CounterSpec(CounterKind.PG_HEADROOM, "BstStatIdPriGroupHeadroom"),
)

QUEUE_COUNT = 8

UINT64_MAX = 2**64 - 1


def queue_indices(queue_count: int = QUEUE_COUNT) -> range:
    """Ascending CoS queue indices."""
    return range(queue_count)
