"""Statistics core: collect, clear and render BST counters."""

from bstctl.stats.clear import StatsClearOperator
from bstctl.stats.collector import StatsSnapshotCollector
from bstctl.stats.formatters import ConsoleFormatter

__all__ = [
    "StatsSnapshotCollector",
    "StatsClearOperator",
    "ConsoleFormatter",
]
