"""Command channel abstraction used by remote gateways."""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

DEFAULT_TIMEOUT = 10


class BaseTransport(ABC):
    """One request, one response command channel to a switch.

    Implementations raise :class:`bstctl.exceptions.DeviceError` subclasses
    on failure so gateways can report them with an error code.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        self.host = host
        self.username = username
        self.password = password
        self.port = port
        self.timeout = timeout

    @abstractmethod
    def connect(self) -> None:
        """Open the channel."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close the channel; a no-op when already closed."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Whether commands can be sent right now."""

    @abstractmethod
    def send_command(self, command: str, timeout: int | None = None) -> str:
        """Run *command* on the switch and return its standard output."""

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
