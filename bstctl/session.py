"""Menu-driven operator session."""

from __future__ import annotations

import sys
from enum import Enum, IntEnum
from typing import Callable, TextIO

from loguru import logger

from bstctl._util import parse_numeric
from bstctl.base.gateway import BaseStatsGateway
from bstctl.exceptions import DeviceError
from bstctl.stats.clear import StatsClearOperator
from bstctl.stats.collector import StatsSnapshotCollector
from bstctl.stats.formatters import ConsoleFormatter, device_error_line

MENU = """\
User Menu: Select one of the following options
1. Display bst statistics of a port.
2. Clear bst statistics of a port.
9. Launch diagnostic shell
0. Quit the application."""

INVALID_OPTION = "Invalid option entered. Please re-enter."
PORT_PROMPT = "Enter the port number."
EXIT_MESSAGE = "Exiting the application."


class SessionState(Enum):
    """States of the operator session."""

    MAIN_MENU = "main-menu"
    AWAIT_PORT = "await-port"
    DISPATCHING = "dispatching"
    DONE = "done"


class MenuChoice(IntEnum):
    """Numeric menu options."""

    QUIT = 0
    DISPLAY = 1
    CLEAR = 2
    SHELL = 9


class InteractiveSession:
    """Operator console state machine.

    ``MAIN_MENU`` reads a choice; display and clear go through
    ``AWAIT_PORT`` and ``DISPATCHING`` and come back to ``MAIN_MENU``;
    quit (or end of input) moves to the terminal ``DONE`` state. Errors of
    a single request are printed and never end the session.

    Usage::

        with create_gateway("sim") as gateway:
            gateway.init_device()
            gateway.enable_bst()
            InteractiveSession(gateway).run()
    """

    def __init__(
        self,
        gateway: BaseStatsGateway,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._gateway = gateway
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout

        self.collector = StatsSnapshotCollector(gateway)
        self.clearer = StatsClearOperator(gateway)
        self.formatter = ConsoleFormatter()

        self.state = SessionState.MAIN_MENU
        self.intent: MenuChoice | None = None
        self.port: int | None = None

        self._handlers: dict[SessionState, Callable[[], SessionState]] = {
            SessionState.MAIN_MENU: self._on_main_menu,
            SessionState.AWAIT_PORT: self._on_await_port,
            SessionState.DISPATCHING: self._on_dispatching,
        }

    def run(self) -> int:
        """Run until the operator quits; return the process exit status."""
        while self.state is not SessionState.DONE:
            self.step()
        return 0

    def step(self) -> SessionState:
        """Process one state and return the next one."""
        self.state = self._handlers[self.state]()
        return self.state

    # ── State handlers ─────────────────────────────────────────────────

    def _on_main_menu(self) -> SessionState:
        self._print()
        self._print(MENU)

        line = self._read_line()
        if line is None:
            return self._quit()

        choice = parse_numeric(line)
        if choice == MenuChoice.DISPLAY or choice == MenuChoice.CLEAR:
            self.intent = MenuChoice(choice)
            return SessionState.AWAIT_PORT
        if choice == MenuChoice.SHELL:
            self._launch_shell()
            return SessionState.MAIN_MENU
        if choice == MenuChoice.QUIT:
            return self._quit()

        logger.debug(f"Invalid menu input {line!r}")
        self._print(INVALID_OPTION)
        return SessionState.MAIN_MENU

    def _on_await_port(self) -> SessionState:
        self._print()
        self._print(PORT_PROMPT)

        line = self._read_line()
        if line is None:
            return self._quit()

        port = parse_numeric(line)
        if port is None:
            logger.debug(f"Invalid port input {line!r}")
            self._print(INVALID_OPTION)
            self.intent = None
            return SessionState.MAIN_MENU

        self.port = port
        return SessionState.DISPATCHING

    def _on_dispatching(self) -> SessionState:
        assert self.intent is not None and self.port is not None
        port = self.port
        try:
            if self.intent is MenuChoice.DISPLAY:
                snapshot = self.collector.collect(port)
                self._print(self.formatter.format_snapshot(snapshot))
            else:
                result = self.clearer.clear(port)
                self._print(self.formatter.format_clear(result))
        except DeviceError as e:
            logger.warning(f"Request for port {port} aborted: {e.message}")
            self._print(device_error_line(f"get the gport of port {port}", e))
        finally:
            self.intent = None
            self.port = None
        return SessionState.MAIN_MENU

    # ── Helpers ────────────────────────────────────────────────────────

    def _launch_shell(self) -> None:
        try:
            self._gateway.launch_shell(self._stdin, self._stdout)
        except DeviceError as e:
            self._print(device_error_line("launch the diagnostic shell", e))

    def _quit(self) -> SessionState:
        self._print(EXIT_MESSAGE)
        return SessionState.DONE

    def _read_line(self) -> str | None:
        """Return the next input line, or ``None`` at end of input."""
        line = self._stdin.readline()
        if not line:
            logger.info("End of input, leaving the session")
            return None
        return line

    def _print(self, text: str = "") -> None:
        print(text, file=self._stdout)
        self._stdout.flush()
