"""Statistics collector: sync and read the [kind x queue] matrix of a port."""

from __future__ import annotations

from loguru import logger

from bstctl.base.gateway import BaseStatsGateway
from bstctl.exceptions import DeviceError, ErrorCode
from bstctl.models.counters import COUNTER_CATALOG, QUEUE_COUNT, UINT64_MAX, CounterSpec, queue_indices
from bstctl.models.snapshot import CounterFailure, StatsSnapshot


class StatsSnapshotCollector:
    """Collect a fresh :class:`StatsSnapshot` for one port per request.

    Synchronization is a per-kind latch across all queues, so the first
    sync failure stops all further syncs. A read failure only abandons the
    remaining queues of that kind.
    """

    def __init__(
        self,
        gateway: BaseStatsGateway,
        catalog: tuple[CounterSpec, ...] = COUNTER_CATALOG,
        queue_count: int = QUEUE_COUNT,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog
        self._queue_count = queue_count

    def collect(self, logical_port: int) -> StatsSnapshot:
        """Sync every counter kind, then read every cell of *logical_port*.

        Raises:
            PortResolutionError: If the port cannot be resolved; no snapshot
                is produced in that case.
        """
        handle = self._gateway.resolve_port(logical_port)
        snapshot = StatsSnapshot.for_port(handle, self._queue_count)

        for spec in self._catalog:
            try:
                self._gateway.sync_counter(spec.kind)
            except DeviceError as e:
                logger.warning(f"Sync of {spec.name} failed, skipping remaining syncs: {e.message}")
                snapshot.sync_failures.append(CounterFailure.from_error("sync", spec.kind, e))
                break

        for spec in self._catalog:
            for queue in queue_indices(self._queue_count):
                try:
                    value = self._gateway.read_counter(handle, queue, spec.kind)
                    if not 0 <= value <= UINT64_MAX:
                        raise DeviceError(f"value {value} out of range", ErrorCode.INTERNAL)
                except DeviceError as e:
                    logger.warning(f"Read of {spec.name} queue {queue} on port {logical_port} failed: {e.message}")
                    snapshot.read_failures.append(CounterFailure.from_error("read", spec.kind, e, queue))
                    break
                snapshot.record(spec.kind, queue, value)

        logger.info(f"Collected {snapshot.populated_count} counters for port {logical_port} ({handle.device_port})")
        return snapshot
