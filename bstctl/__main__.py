"""BST console entry point.

Takes no arguments; the device backend is chosen through environment
variables (see :mod:`bstctl.config`).

Examples:
  # Simulated switch with 8 ports
  BSTCTL_SIM_PORTS=8 bstctl

  # SONiC switch over SSH
  BSTCTL_GATEWAY=sonic BSTCTL_HOST=10.0.0.1 BSTCTL_PASSWORD=<PW> bstctl
"""

from __future__ import annotations

import sys

from bstctl import configure_logging, glogger
from bstctl.config import Settings
from bstctl.exceptions import ConfigError, StartupError
from bstctl.factory import create_gateway
from bstctl.session import InteractiveSession
from bstctl.startup import bring_up

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1
EXIT_PARAM = 2
EXIT_INTERRUPTED = 130

USAGE = """\
Syntax: bstctl

Parameters: None

Example: The following command is used to see the bst stats of a port
         bstctl

Usage Guidelines: This program requests the user to enter the port
                  number interactively. The device backend is selected
                  with BSTCTL_GATEWAY (sim, sonic); see BSTCTL_HOST,
                  BSTCTL_USERNAME, BSTCTL_PASSWORD, BSTCTL_SSH_PORT,
                  BSTCTL_PERSISTENT_WATERMARK, BSTCTL_SIM_PORTS and
                  BSTCTL_DEFAULT_VLAN."""


def _print_usage() -> None:
    print(USAGE)


def main(args: list[str] | None = None) -> None:
    """Main entry point: check arguments, bring up the device, run the session."""
    argv = sys.argv[1:] if args is None else args
    if argv:
        _print_usage()
        sys.exit(EXIT_PARAM)

    configure_logging()
    glogger.enable("bstctl")

    try:
        settings = Settings.from_env()
        glogger.info(f"Using the {settings.gateway} gateway")
        with create_gateway(settings.gateway, **settings.gateway_kwargs()) as gateway:
            bring_up(gateway, vlan_id=settings.default_vlan)
            status = InteractiveSession(gateway).run()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_STARTUP_FAILURE)
    except StartupError as e:
        glogger.error(f"Startup failed: {e}")
        sys.exit(EXIT_STARTUP_FAILURE)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)

    sys.exit(status)


if __name__ == "__main__":
    main()
