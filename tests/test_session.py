"""Tests for the InteractiveSession state machine."""

from __future__ import annotations

import pytest

from bstctl.exceptions import DeviceError, ErrorCode
from bstctl.models.counters import CounterKind
from bstctl.session import EXIT_MESSAGE, INVALID_OPTION, MENU, PORT_PROMPT, MenuChoice, SessionState


def _counter_lines(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.startswith("BST Counter:")]


class TestMainMenu:
    """Test MAIN_MENU transitions."""

    def test_menu_is_printed(self, mock_gateway, make_session):
        """The menu text is shown before reading a choice."""
        session, out = make_session(mock_gateway, "0\n")
        session.step()
        assert MENU in out.getvalue()

    def test_quit(self, mock_gateway, make_session):
        """0 moves to DONE, prints the exit message and run() returns 0."""
        session, out = make_session(mock_gateway, "0\n")
        assert session.run() == 0
        assert session.state is SessionState.DONE
        assert out.getvalue().rstrip().endswith(EXIT_MESSAGE)

    @pytest.mark.parametrize("keys", ["7\n", "\n", "abc\n", "123456\n", "1 \n", "3\n"])
    def test_invalid_choice_stays_in_menu(self, mock_gateway, make_session, keys):
        """Unknown or malformed choices report invalid option and touch no gateway operation."""
        session, out = make_session(mock_gateway, keys)

        assert session.step() is SessionState.MAIN_MENU
        assert INVALID_OPTION in out.getvalue()
        assert mock_gateway.method_calls == []

    @pytest.mark.parametrize(("keys", "intent"), [("1\n", MenuChoice.DISPLAY), ("2\n", MenuChoice.CLEAR)])
    def test_display_and_clear_await_port(self, mock_gateway, make_session, keys, intent):
        """1 and 2 move to AWAIT_PORT with the matching intent."""
        session, _ = make_session(mock_gateway, keys)

        assert session.step() is SessionState.AWAIT_PORT
        assert session.intent is intent

    def test_end_of_input_quits(self, mock_gateway, make_session):
        """EOF on the menu ends the session."""
        session, out = make_session(mock_gateway, "")
        assert session.run() == 0
        assert EXIT_MESSAGE in out.getvalue()

    def test_shell_returns_to_menu(self, mock_gateway, make_session):
        """9 runs the diagnostic shell and comes back to the menu."""
        session, _ = make_session(mock_gateway, "9\n")

        assert session.step() is SessionState.MAIN_MENU
        mock_gateway.launch_shell.assert_called_once()

    def test_shell_failure_is_reported(self, mock_gateway, make_session):
        """A shell that cannot start is reported and the session continues."""
        mock_gateway.launch_shell.side_effect = DeviceError("no shell", ErrorCode.UNAVAIL)
        session, out = make_session(mock_gateway, "9\n")

        assert session.step() is SessionState.MAIN_MENU
        assert "Failed to launch the diagnostic shell, rc = -16 (no shell)." in out.getvalue()


class TestAwaitPort:
    """Test AWAIT_PORT transitions."""

    def test_prompt_and_valid_port(self, mock_gateway, make_session):
        """A valid port moves to DISPATCHING."""
        session, out = make_session(mock_gateway, "1\n12\n")
        session.step()

        assert session.step() is SessionState.DISPATCHING
        assert session.port == 12
        assert PORT_PROMPT in out.getvalue()

    @pytest.mark.parametrize("port_keys", ["x\n", "\n", "999999\n"])
    def test_invalid_port_abandons_operation(self, mock_gateway, make_session, port_keys):
        """A malformed port reports invalid option and returns to the menu."""
        session, out = make_session(mock_gateway, "2\n" + port_keys)
        session.step()

        assert session.step() is SessionState.MAIN_MENU
        assert session.intent is None
        assert out.getvalue().count(INVALID_OPTION) == 1
        mock_gateway.resolve_port.assert_not_called()
        mock_gateway.clear_counter.assert_not_called()

    def test_end_of_input_quits(self, mock_gateway, make_session):
        """EOF while waiting for the port ends the session."""
        session, _ = make_session(mock_gateway, "1\n")
        session.step()

        assert session.step() is SessionState.DONE


class TestDispatching:
    """Test DISPATCHING against the simulated switch."""

    def test_display_end_to_end(self, sim_gateway, make_session):
        """Display of port 3 prints 32 counter lines in catalog/queue order, then the menu again."""
        sim_gateway.set_occupancy(3, CounterKind.UCAST, 0, 1)
        sim_gateway.set_occupancy(3, CounterKind.UCAST, 1, 2)
        for queue in range(8):
            sim_gateway.set_occupancy(3, CounterKind.PG_SHARED, queue, 5)

        session, out = make_session(sim_gateway, "1\n3\n0\n")
        session.run()

        ucast = [1, 2, 0, 0, 0, 0, 0, 0]
        expected = (
            [f"BST Counter: BstStatIdUcast for COS queue: {q} is : {ucast[q]}" for q in range(8)]
            + [f"BST Counter: BstStatIdMcast for COS queue: {q} is : 0" for q in range(8)]
            + [f"BST Counter: BstStatIdPriGroupShared for COS queue: {q} is : 5" for q in range(8)]
            + [f"BST Counter: BstStatIdPriGroupHeadroom for COS queue: {q} is : 0" for q in range(8)]
        )
        output = out.getvalue()
        assert _counter_lines(output) == expected
        assert output.count(MENU) == 2

    def test_clear_end_to_end(self, sim_gateway, make_session):
        """Clear prints the confirmation and zeroes the port."""
        sim_gateway.set_occupancy(4, CounterKind.MCAST, 2, 99)
        session, out = make_session(sim_gateway, "2\n4\n1\n4\n0\n")
        session.run()

        output = out.getvalue()
        assert "Port 4 stats cleared" in output
        assert "BST Counter: BstStatIdMcast for COS queue: 2 is : 0" in _counter_lines(output)

    def test_unknown_port_keeps_session_alive(self, sim_gateway, make_session):
        """A port resolution failure is reported; the session goes back to the menu."""
        session, out = make_session(sim_gateway, "1\n99\n0\n")

        assert session.run() == 0
        output = out.getvalue()
        assert "Failed to get the gport of port 99, rc = -18 (port 99 not found)." in output
        assert _counter_lines(output) == []
        assert EXIT_MESSAGE in output

    def test_partial_display_after_read_failure(self, sim_gateway, make_session):
        """Read failures show the error and the remaining kinds still print."""
        sim_gateway.fail_read.add((CounterKind.MCAST, 5))
        session, out = make_session(sim_gateway, "1\n1\n0\n")
        session.run()

        lines = _counter_lines(out.getvalue())
        assert len(lines) == 8 + 5 + 8 + 8
        assert "Failed to get the port stats, rc = -1 (read of mcast queue 5 failed)." in out.getvalue()

    def test_dispatch_resets_request_state(self, sim_gateway, make_session):
        """After dispatching, intent and port are cleared."""
        session, _ = make_session(sim_gateway, "2\n1\n")
        session.step()
        session.step()

        assert session.step() is SessionState.MAIN_MENU
        assert session.intent is None
        assert session.port is None
