"""Private parsers for SONiC CLI table output."""

from __future__ import annotations

WatermarkTable = dict[str, list[int | None]]


def _table_rows(output: str, first_header: str) -> tuple[list[str], list[list[str]]]:
    """Split a SONiC ``tabulate``-style table into header and row tokens.

    The header is the first line whose first token is *first_header*; the
    dashed separator line below it is skipped.
    """
    lines = output.splitlines()
    for i, line in enumerate(lines):
        tokens = line.split()
        if tokens and tokens[0] == first_header:
            header = tokens
            body = lines[i + 1 :]
            break
    else:
        raise ValueError(f"no table with a '{first_header}' column in output")

    rows: list[list[str]] = []
    for line in body:
        stripped = line.strip()
        if not stripped or stripped.startswith("-"):
            continue
        rows.append(stripped.split())
    return header, rows


def parse_watermark_table(output: str) -> WatermarkTable:
    """Parse ``show queue|priority-group watermark ...`` output.

    Example input::

        Egress shared pool occupancy per unicast queue:
               Port    UC0    UC1    UC2    UC3    UC4    UC5    UC6    UC7
        -----------  -----  -----  -----  -----  -----  -----  -----  -----
          Ethernet0      0      0      0      0      0      0      0      0

    Columns map to queue indices by position (UC0/PG0/MC8 are all queue 0).
    ``N/A`` cells become ``None``.

    Returns:
        Mapping of interface name to per-queue values.
    """
    header, rows = _table_rows(output, "Port")
    columns = len(header) - 1
    table: WatermarkTable = {}

    for tokens in rows:
        name, cells = tokens[0], tokens[1 : 1 + columns]
        values: list[int | None] = []
        for cell in cells:
            if cell.upper() == "N/A":
                values.append(None)
            elif cell.isdigit():
                values.append(int(cell))
            else:
                raise ValueError(f"invalid watermark value '{cell}' for {name}")
        table[name] = values

    return table


def parse_interface_alias(output: str) -> dict[str, str]:
    """Parse ``show interfaces alias`` output into ``{name: alias}``."""
    _, rows = _table_rows(output, "Name")
    return {tokens[0]: (tokens[1] if len(tokens) > 1 else "") for tokens in rows}
