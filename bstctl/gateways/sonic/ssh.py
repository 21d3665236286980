"""SSH command transport for SONiC switches."""

from __future__ import annotations

import socket

import paramiko
from loguru import logger

from bstctl.base.transport import DEFAULT_TIMEOUT, BaseTransport
from bstctl.exceptions import AuthenticationError, ErrorCode, SSHError


class SonicSSHTransport(BaseTransport):
    """Run SONiC CLI commands over SSH, one ``exec_command`` per command.

    SONiC's CLI is plain bash, so no interactive shell or prompt matching
    is needed.
    """

    def __init__(
        self,
        host: str,
        username: str = "admin",
        password: str = "",
        port: int = 22,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        super().__init__(host, username, password, port, timeout)
        self._client: paramiko.SSHClient | None = None

    def connect(self) -> None:
        """Establish the SSH connection."""
        self._client = paramiko.SSHClient()
        self._client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            self._client.connect(
                hostname=self.host,
                port=self.port or 22,
                username=self.username,
                password=self.password,
                look_for_keys=False,
                allow_agent=False,
                timeout=self.timeout,
            )
        except paramiko.AuthenticationException as e:
            self._client = None
            raise AuthenticationError(f"SSH authentication failed: {e}", ErrorCode.INIT) from e
        except (paramiko.SSHException, OSError) as e:
            self._client = None
            raise SSHError(f"SSH connection failed: {e}", ErrorCode.INIT) from e

        logger.info(f"SONiC SSH connected to {self.host}")

    def disconnect(self) -> None:
        """Close the SSH connection."""
        if self._client:
            self._client.close()
            self._client = None

    def is_connected(self) -> bool:
        """Check if the SSH transport is active."""
        if self._client is None:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active()

    def send_command(self, command: str, timeout: int | None = None) -> str:
        """Run *command* and return its stdout.

        Raises:
            SSHError: On transport failure, timeout or non-zero exit status.
        """
        self._ensure_connected()
        assert self._client is not None
        logger.debug(f"[{self.host}] $ {command}")

        try:
            _, stdout, stderr = self._client.exec_command(command, timeout=timeout or self.timeout)
            output = stdout.read().decode("utf-8", errors="replace")
            errors = stderr.read().decode("utf-8", errors="replace")
            status = stdout.channel.recv_exit_status()
        except socket.timeout as e:
            raise SSHError(f"'{command}' timed out", ErrorCode.TIMEOUT) from e
        except paramiko.SSHException as e:
            raise SSHError(f"'{command}' failed: {e}") from e
        except (OSError, EOFError) as e:
            raise SSHError(f"'{command}' failed: {e}", ErrorCode.FAIL) from e

        if status != 0:
            detail = errors.strip() or output.strip() or f"exit status {status}"
            raise SSHError(f"'{command}' failed: {detail}", ErrorCode.FAIL)
        return output

    def _ensure_connected(self) -> None:
        if not self.is_connected():
            raise SSHError("Not connected. Call connect() first.", ErrorCode.INIT)
