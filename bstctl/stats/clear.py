"""Clear operator: reset the [kind x queue] matrix of a port."""

from __future__ import annotations

from loguru import logger

from bstctl.base.gateway import BaseStatsGateway
from bstctl.exceptions import DeviceError
from bstctl.models.counters import COUNTER_CATALOG, QUEUE_COUNT, CounterSpec, queue_indices
from bstctl.models.snapshot import ClearResult, CounterFailure


class StatsClearOperator:
    """Clear every counter cell of one port, kind by kind."""

    def __init__(
        self,
        gateway: BaseStatsGateway,
        catalog: tuple[CounterSpec, ...] = COUNTER_CATALOG,
        queue_count: int = QUEUE_COUNT,
    ) -> None:
        self._gateway = gateway
        self._catalog = catalog
        self._queue_count = queue_count

    def clear(self, logical_port: int) -> ClearResult:
        """Clear all cells of *logical_port*; no sync precedes the writes.

        Raises:
            PortResolutionError: If the port cannot be resolved.
        """
        handle = self._gateway.resolve_port(logical_port)
        result = ClearResult(port=handle.logical_port, device_port=handle.device_port)

        for spec in self._catalog:
            for queue in queue_indices(self._queue_count):
                try:
                    self._gateway.clear_counter(handle, queue, spec.kind)
                except DeviceError as e:
                    logger.warning(f"Clear of {spec.name} queue {queue} on port {logical_port} failed: {e.message}")
                    result.failures.append(CounterFailure.from_error("clear", spec.kind, e, queue))
                    break
            else:
                result.cleared_kinds.append(spec.kind)

        logger.info(f"Cleared {len(result.cleared_kinds)}/{len(self._catalog)} counters on port {logical_port}")
        return result
