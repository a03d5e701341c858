"""
Key encoding — converts a KeyTable to the key file formats of other tools.

Supports two output layouts:
- mfocGUI: two files, all A keys and all B keys (a<uid>.dump / b<uid>.dump)
- Proxmark: one file, all A keys followed by all B keys (<uid>.bin)
"""

from enum import Enum

from .key_table import KeyTable, format_uid


class Mode(str, Enum):
    GUI = "gui"
    LINEAR = "linear"


def gui_filenames(uid: bytes) -> tuple[str, str]:
    """Return the mfocGUI (A keys, B keys) filenames for a UID."""
    uid_hex = format_uid(uid)
    return f"a{uid_hex}.dump", f"b{uid_hex}.dump"


def linear_filename(uid: bytes) -> str:
    """Return the Proxmark key filename for a UID."""
    return f"{format_uid(uid)}.bin"


def encode_gui(table: KeyTable) -> tuple[bytes, bytes]:
    """Build the A-key and B-key buffers, each in sector order."""
    a_keys = b"".join(p.key_a for p in table.pairs)
    b_keys = b"".join(p.key_b for p in table.pairs)
    return a_keys, b_keys


def encode_linear(table: KeyTable) -> bytes:
    """Build a single buffer of all A keys followed by all B keys."""
    a_keys, b_keys = encode_gui(table)
    return a_keys + b_keys


def encode(table: KeyTable, mode: Mode) -> dict[str, bytes]:
    """Map each output filename for `mode` to its key buffer."""
    if mode == Mode.GUI:
        a_name, b_name = gui_filenames(table.uid)
        a_keys, b_keys = encode_gui(table)
        return {a_name: a_keys, b_name: b_keys}
    return {linear_filename(table.uid): encode_linear(table)}
