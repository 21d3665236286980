"""Private helpers for console input."""

from __future__ import annotations

MAX_DIGITS_IN_CHOICE = 5

_DIGITS = frozenset("0123456789")


def parse_numeric(line: str) -> int | None:
    """Parse one operator input line as a non-negative number.

    The line terminator (``\\n`` or ``\\r\\n``) is dropped; what remains must
    be 1 to 5 ASCII digits. Returns ``None`` otherwise.

    >>> parse_numeric("123\\n")
    123
    >>> parse_numeric("12a3\\n") is None
    True
    """
    text = line.removesuffix("\n").removesuffix("\r")
    if not text or len(text) > MAX_DIGITS_IN_CHOICE:
        return None
    if not set(text) <= _DIGITS:
        return None
    return int(text)
