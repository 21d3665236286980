"""Buffer Statistics Tracking (BST) console.

Reads and clears per-port, per-CoS-queue buffer occupancy counters of a
switch through a pluggable device gateway (simulated or SONiC over SSH).
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a default ``loguru`` sink with a convenient format and filter.

    Logs go to stderr; stdout is reserved for the operator console.
    """
    os.environ["LOGURU_LEVEL"] = os.getenv("LOGURU_LEVEL", "WARNING")
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=os.getenv("LOGURU_LEVEL"), format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})


# Import gateways to trigger registration
import bstctl.gateways  # noqa: F401, E402
from bstctl.base.gateway import BaseStatsGateway  # noqa: E402
from bstctl.exceptions import (  # noqa: E402
    AuthenticationError,
    BSTError,
    ConfigError,
    DeviceError,
    ErrorCode,
    PortResolutionError,
    SSHError,
    StartupError,
)
from bstctl.factory import create_gateway, list_gateways  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "create_gateway",
    "list_gateways",
    "BaseStatsGateway",
    "BSTError",
    "DeviceError",
    "ErrorCode",
    "PortResolutionError",
    "AuthenticationError",
    "SSHError",
    "StartupError",
    "ConfigError",
]
