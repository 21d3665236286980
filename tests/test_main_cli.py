"""Tests for the bstctl entry point."""

from __future__ import annotations

import io
from unittest.mock import MagicMock

import pytest

import bstctl.__main__ as cli
from bstctl.config import ENV_VARS
from bstctl.exceptions import ConfigError, DeviceError, ErrorCode


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LOGURU_LEVEL", "WARNING")


class TestMain:
    """Test main() exit statuses."""

    def test_arguments_print_usage(self, capsys):
        """Any argument prints usage and exits with status 2."""
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--help"])
        assert exc_info.value.code == cli.EXIT_PARAM
        assert "Syntax: bstctl" in capsys.readouterr().out

    def test_quit_immediately(self, monkeypatch, capsys):
        """Bring-up, menu, quit: exit status 0 and nothing logged at the default level."""
        monkeypatch.setenv("BSTCTL_SIM_PORTS", "4")
        monkeypatch.setattr("sys.stdin", io.StringIO("0\n"))

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        captured = capsys.readouterr()
        out = captured.out
        assert exc_info.value.code == cli.EXIT_OK
        assert captured.err == ""
        assert "BST feature is enabled." in out
        assert "User Menu: Select one of the following options" in out
        assert out.rstrip().endswith("Exiting the application.")

    def test_display_then_quit(self, monkeypatch, capsys):
        """A display request against the simulator prints 32 counter lines."""
        monkeypatch.setenv("BSTCTL_SIM_PORTS", "4")
        monkeypatch.setattr("sys.stdin", io.StringIO("1\n2\n0\n"))

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        out = capsys.readouterr().out
        assert exc_info.value.code == cli.EXIT_OK
        assert out.count("BST Counter: ") == 32

    def test_bad_config(self, monkeypatch, capsys):
        """Configuration errors exit with status 1."""
        monkeypatch.setenv("BSTCTL_GATEWAY", "bogus")

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == cli.EXIT_STARTUP_FAILURE
        assert "Unknown gateway 'bogus'" in capsys.readouterr().err

    def test_startup_failure(self, monkeypatch, capsys):
        """A failing BST enable exits with status 1 and disconnects."""
        gateway = MagicMock()
        gateway.__enter__.return_value = gateway
        gateway.enable_bst.side_effect = DeviceError("no buffer stats", ErrorCode.UNAVAIL)
        monkeypatch.setattr(cli, "create_gateway", lambda name, **kwargs: gateway)

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == cli.EXIT_STARTUP_FAILURE
        assert "Failed to Enable bst, rc = -16 (no buffer stats)." in capsys.readouterr().out
        gateway.__exit__.assert_called_once()

    def test_interrupt(self, monkeypatch, capsys):
        """Ctrl-C exits with status 130."""
        gateway = MagicMock()
        gateway.__enter__.return_value = gateway
        gateway.init_device.side_effect = KeyboardInterrupt
        monkeypatch.setattr(cli, "create_gateway", lambda name, **kwargs: gateway)

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == cli.EXIT_INTERRUPTED
        assert "Aborted." in capsys.readouterr().err

    def test_gateway_creation_config_error(self, monkeypatch, capsys):
        """A backend rejecting its configuration exits with status 1."""

        def create_gateway(name, **kwargs):
            raise ConfigError("Unknown gateway 'sim'. Available: ")

        monkeypatch.setattr(cli, "create_gateway", create_gateway)

        with pytest.raises(SystemExit) as exc_info:
            cli.main([])

        assert exc_info.value.code == cli.EXIT_STARTUP_FAILURE
        assert "Error: Unknown gateway 'sim'" in capsys.readouterr().err
