"""Environment-based configuration.

The console takes no command-line arguments; the device backend and its
connection details come from ``BSTCTL_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from bstctl.exceptions import ConfigError
from bstctl.factory import gateway_class

ENV_VARS: dict[str, str] = {
    "gateway": "BSTCTL_GATEWAY",
    "host": "BSTCTL_HOST",
    "username": "BSTCTL_USERNAME",
    "password": "BSTCTL_PASSWORD",
    "ssh_port": "BSTCTL_SSH_PORT",
    "persistent_watermark": "BSTCTL_PERSISTENT_WATERMARK",
    "sim_ports": "BSTCTL_SIM_PORTS",
    "default_vlan": "BSTCTL_DEFAULT_VLAN",
}


class Settings(BaseModel):
    """Runtime settings for the BST console."""

    gateway: str = "sim"
    host: str = ""
    username: str = "admin"
    password: str = ""
    ssh_port: int = Field(default=22, ge=1, le=65535)
    persistent_watermark: bool = False
    sim_ports: int = Field(default=32, ge=1)
    default_vlan: int = Field(default=1, ge=1, le=4094)

    @field_validator("gateway")
    @classmethod
    def _normalize_gateway(cls, value: str) -> str:
        return value.strip().lower()

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``BSTCTL_*`` variables.

        Raises:
            ConfigError: On malformed values, an unknown gateway, or a
                missing host for the SONiC gateway.
        """
        env = os.environ if environ is None else environ
        values = {field: env[var] for field, var in ENV_VARS.items() if var in env}

        try:
            settings = cls(**values)
        except ValidationError as e:
            problems = "; ".join(f"{ENV_VARS.get(str(err['loc'][0]), err['loc'][0])}: {err['msg']}" for err in e.errors())
            raise ConfigError(f"Invalid configuration: {problems}") from e

        gateway_class(settings.gateway)
        if settings.gateway == "sonic" and not settings.host:
            raise ConfigError("BSTCTL_HOST is required for the sonic gateway")
        return settings

    def gateway_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for :func:`bstctl.factory.create_gateway`."""
        kwargs: dict[str, Any] = {}
        if self.gateway == "sonic":
            kwargs = {
                "host": self.host,
                "username": self.username,
                "password": self.password,
                "ssh_port": self.ssh_port,
                "persistent_watermark": self.persistent_watermark,
            }
        elif self.gateway == "sim":
            kwargs = {"num_ports": self.sim_ports}
        return kwargs
