"""Shared dump builders for the key extraction tests."""

import pytest


def trailer_offset(sector: int) -> int:
    """Absolute byte offset of a sector trailer, computed from block numbers."""
    if sector < 32:
        block = sector * 4 + 3
    else:
        block = 128 + (sector - 32) * 16 + 15
    return block * 16


def key_a_for(sector: int) -> bytes:
    return bytes([0xA0, sector, 0x11, 0x22, 0x33, sector])


def key_b_for(sector: int) -> bytes:
    return bytes([0xB0, sector, 0x44, 0x55, 0x66, sector])


def build_dump(size: int, uid: bytes = bytes.fromhex("DEADBEEF")) -> bytes:
    """Create a dump with distinct keys in every trailer and filler elsewhere."""
    data = bytearray([0x55] * size)
    data[0:8] = uid + bytes.fromhex("08040062")
    sectors = 16 if size == 1024 else 40
    for s in range(sectors):
        offset = trailer_offset(s)
        data[offset:offset + 16] = key_a_for(s) + bytes.fromhex("FF078069") + key_b_for(s)
    return bytes(data)


@pytest.fixture
def dump_1k() -> bytes:
    return build_dump(1024)


@pytest.fixture
def dump_4k() -> bytes:
    return build_dump(4096)
