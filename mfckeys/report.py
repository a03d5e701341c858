"""Fixed-width console table of an extracted key table (Proxmark tool layout)."""

from mfckeys.rfid.key_table import KeyTable

SEPARATOR = "+---+----------------+----------------+"


def render_header(table: KeyTable) -> list[str]:
    # Density label is right-aligned in the 3-char column, e.g. " 1K"
    return [
        SEPARATOR,
        f"|{table.density.label:>3}|            {table.uid_hex}             |",
        SEPARATOR,
        "|sec|key A           |key B           |",
        SEPARATOR,
    ]


def render_table(table: KeyTable) -> str:
    """Render the UID, density and every sector's keys as a text table."""
    lines = render_header(table)
    for pair in table.pairs:
        lines.append(f"|{pair.sector:03d}|  {pair.key_a_hex}  |  {pair.key_b_hex}  |")
    lines.append(SEPARATOR)
    return "\n".join(lines)
