"""
Dump decoding — converts raw MIFARE Classic dumps to a KeyTable.

Supports multiple input formats:
- Raw binary dump (1024 or 4096 bytes)
- Hex string dump
- Base64 string dump
- Proxmark3 emulator (eml) text dump
"""

import base64
import logging

from mfckeys.errors import InvalidSizeError, MalformedDumpError
from .key_table import KeyTable, SectorKeyPair
from .mifare import (
    BYTES_PER_BLOCK, FIRST_TRAILER_OFFSET, UID_LENGTH,
    block_stride, density_for_size, parse_sector_trailer,
)

logger = logging.getLogger(__name__)


def decode(raw: bytes) -> KeyTable:
    """
    Extract the UID and every sector's Key A / Key B from a raw dump.

    The dump length selects the density. Trailers are walked from offset
    0x30; after each one the cursor skips the data blocks of the following
    sector (0x30 bytes, or 0xF0 once past sector 31).

    Raises:
        InvalidSizeError: the dump is neither 1024 nor 4096 bytes.
    """
    density = density_for_size(len(raw))
    if density is None:
        raise InvalidSizeError(len(raw))

    uid = bytes(raw[:UID_LENGTH])
    pairs = []
    cursor = FIRST_TRAILER_OFFSET
    for sector in range(density.layout.trailer_count):
        trailer = parse_sector_trailer(bytes(raw[cursor:cursor + BYTES_PER_BLOCK]))
        pairs.append(SectorKeyPair(sector, trailer["key_a"], trailer["key_b"]))
        cursor += BYTES_PER_BLOCK + block_stride(sector)

    table = KeyTable(uid=uid, density=density, pairs=tuple(pairs))
    logger.debug(f"Decoded {density.label} dump, UID={table.uid_hex}, {len(pairs)} key pairs")
    return table


def decode_hex(hex_string: str) -> KeyTable:
    """Decode a hex-encoded dump (2048 or 8192 hex chars, whitespace ignored)."""
    clean = "".join(hex_string.split())
    try:
        data = bytes.fromhex(clean)
    except ValueError as e:
        raise MalformedDumpError(f"Invalid hex dump: {e}") from e
    return decode(data)


def decode_base64(b64_string: str) -> KeyTable:
    """Decode a base64-encoded dump (whitespace ignored)."""
    clean = "".join(b64_string.split())
    try:
        data = base64.b64decode(clean, validate=True)
    except ValueError as e:
        raise MalformedDumpError(f"Invalid base64 dump: {e}") from e
    return decode(data)


def decode_eml(dump_text: str) -> KeyTable:
    """
    Decode a Proxmark3 emulator (eml) dump.

    Expected format (one 16-byte block per line):
    DEADBEEF220804006263646566676869
    00000000000000000000000000000000
    """
    blocks = []
    for number, line in enumerate(dump_text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if len(line) != BYTES_PER_BLOCK * 2:
            raise MalformedDumpError(
                f"eml line {number} should be {BYTES_PER_BLOCK * 2} hex chars, got {len(line)}"
            )
        try:
            blocks.append(bytes.fromhex(line))
        except ValueError as e:
            raise MalformedDumpError(f"eml line {number} is not hex: {e}") from e
    return decode(b"".join(blocks))
