"""Device bring-up before the operator session starts."""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger

from bstctl.base.gateway import BaseStatsGateway
from bstctl.exceptions import DeviceError, StartupError
from bstctl.stats.formatters import device_error_line

DEFAULT_VLAN = 1


def bring_up(gateway: BaseStatsGateway, vlan_id: int = DEFAULT_VLAN, stdout: TextIO | None = None) -> None:
    """Initialize the device, join all ports to the default VLAN, enable BST.

    A default-VLAN failure is reported and ignored.

    Raises:
        StartupError: If device initialization or BST enabling fails.
    """
    out = stdout or sys.stdout

    print("Initializing the system.", file=out)
    try:
        gateway.init_device()
    except DeviceError as e:
        print(device_error_line("initialize the system", e), file=out)
        raise StartupError("initialize the system", e) from e

    print("Adding ports to default vlan.", file=out)
    try:
        gateway.configure_default_vlan(vlan_id)
    except DeviceError as e:
        logger.warning(f"Default VLAN {vlan_id} setup failed, continuing: {e.message}")
        print(device_error_line("add default ports", e), file=out)

    try:
        gateway.enable_bst()
    except DeviceError as e:
        print(device_error_line("Enable bst", e), file=out)
        raise StartupError("Enable bst", e) from e
    print("BST feature is enabled.", file=out)
