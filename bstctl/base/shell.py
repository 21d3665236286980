"""Line-oriented diagnostic shell shared by all gateways."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

from loguru import logger

from bstctl.exceptions import DeviceError

if TYPE_CHECKING:
    from bstctl.base.gateway import BaseStatsGateway

SHELL_EXIT_COMMANDS = ("exit", "quit")


class DiagnosticShell:
    """Read commands from the operator and hand them to the gateway.

    Blocks until ``exit``/``quit`` or end of input, then returns control to
    the caller. Command failures are printed and the shell keeps running.
    """

    def __init__(self, gateway: BaseStatsGateway, stdin: TextIO, stdout: TextIO, prompt: str = "BCM.0> ") -> None:
        self._gateway = gateway
        self._stdin = stdin
        self._stdout = stdout
        self.prompt = prompt

    def run(self) -> None:
        out = self._stdout
        print("Entering diagnostic shell. Type 'exit' to return to the menu.", file=out)
        logger.info("Diagnostic shell started")

        while True:
            out.write(self.prompt)
            out.flush()
            line = self._stdin.readline()
            if not line:
                print(file=out)
                break

            command = line.strip()
            if not command:
                continue
            if command.lower() in SHELL_EXIT_COMMANDS:
                break

            try:
                output = self._gateway.run_shell_command(command)
            except DeviceError as e:
                logger.warning(f"Shell command {command!r} failed: {e.message}")
                print(f"Error: {e.message} (rc = {int(e.code)})", file=out)
                continue
            if output:
                print(output, file=out)

        logger.info("Diagnostic shell closed")
