"""
MIFARE Classic 1K/4K constants and structure definitions.

A MIFARE Classic 1K tag has:
- 16 sectors (0-15) of 4 blocks each (64 blocks, 1024 bytes)

A MIFARE Classic 4K tag has:
- 32 sectors (0-31) of 4 blocks each, then
- 8 sectors (32-39) of 16 blocks each (256 blocks, 4096 bytes)

Every block is 16 bytes. Block 0 holds the UID and manufacturer data. The last
block of every sector is the sector trailer (Key A + access bits + Key B).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Block geometry
BYTES_PER_BLOCK = 16
SMALL_SECTOR_BLOCKS = 4
LARGE_SECTOR_BLOCKS = 16
SMALL_SECTOR_COUNT = 32  # 4K sectors 0-31 are small, 32-39 are large

# Dump sizes
DUMP_SIZE_1K = 1024
DUMP_SIZE_4K = 4096

# UID field at the start of block 0
UID_FIELD_LENGTH = 8
UID_LENGTH = 4

# Sector trailer layout within a 16-byte block
KEY_A_OFFSET = 0
KEY_A_LENGTH = 6
ACCESS_BITS_OFFSET = 6
ACCESS_BITS_LENGTH = 4
KEY_B_OFFSET = 10
KEY_B_LENGTH = 6
KEY_LENGTH = 6

# Absolute offset of the sector 0 trailer (block 3)
FIRST_TRAILER_OFFSET = 0x30

# Distance from the end of one trailer to the start of the next
SMALL_SECTOR_STRIDE = 0x30
LARGE_SECTOR_STRIDE = 0xF0
STRIDE_THRESHOLD = 31


class Density(str, Enum):
    ONE_K = "1K"
    FOUR_K = "4K"

    @property
    def label(self) -> str:
        return self.value

    @property
    def layout(self) -> "DensityLayout":
        return LAYOUTS[self]


@dataclass(frozen=True)
class DensityLayout:
    """Fixed key-pair geometry of one card density."""

    density: Density
    dump_size: int
    trailer_count: int

    @property
    def key_region_bytes(self) -> int:
        """Total bytes of all A keys (equal to all B keys)."""
        return self.trailer_count * KEY_LENGTH


LAYOUTS = {
    Density.ONE_K: DensityLayout(Density.ONE_K, DUMP_SIZE_1K, 16),
    Density.FOUR_K: DensityLayout(Density.FOUR_K, DUMP_SIZE_4K, 40),
}


def density_for_size(size: int) -> Optional[Density]:
    """Return the density matching a dump length, or None."""
    for layout in LAYOUTS.values():
        if layout.dump_size == size:
            return layout.density
    return None


def block_stride(sector: int) -> int:
    """
    Return the byte distance from the end of the trailer read for `sector`
    to the start of the next trailer.

    The threshold is the same for both densities; 1K dumps never reach it.
    """
    if sector < STRIDE_THRESHOLD:
        return SMALL_SECTOR_STRIDE
    return LARGE_SECTOR_STRIDE


def blocks_in_sector(sector: int) -> int:
    """Return the number of blocks in a given sector."""
    if sector < SMALL_SECTOR_COUNT:
        return SMALL_SECTOR_BLOCKS
    return LARGE_SECTOR_BLOCKS


def sector_to_block(sector: int) -> int:
    """Return the first block number for a given sector."""
    if sector < SMALL_SECTOR_COUNT:
        return sector * SMALL_SECTOR_BLOCKS
    return (SMALL_SECTOR_COUNT * SMALL_SECTOR_BLOCKS
            + (sector - SMALL_SECTOR_COUNT) * LARGE_SECTOR_BLOCKS)


def block_to_sector(block: int) -> int:
    """Return the sector number for a given block."""
    small_blocks = SMALL_SECTOR_COUNT * SMALL_SECTOR_BLOCKS
    if block < small_blocks:
        return block // SMALL_SECTOR_BLOCKS
    return SMALL_SECTOR_COUNT + (block - small_blocks) // LARGE_SECTOR_BLOCKS


def sector_trailer_block(sector: int) -> int:
    """Return the sector trailer block number for a given sector."""
    return sector_to_block(sector) + blocks_in_sector(sector) - 1


def is_sector_trailer(block: int) -> bool:
    """Check if a block number is a sector trailer."""
    return sector_trailer_block(block_to_sector(block)) == block


def block_to_byte_offset(block: int) -> int:
    """Return the byte offset in a full dump for a given block."""
    return block * BYTES_PER_BLOCK


def trailer_offsets(density: Density) -> list[int]:
    """Return the absolute byte offset of every sector trailer, in sector order."""
    return [block_to_byte_offset(sector_trailer_block(s))
            for s in range(density.layout.trailer_count)]


def parse_sector_trailer(data: bytes) -> dict:
    """
    Parse a 16-byte sector trailer block.

    Returns dict with key_a, access_bits, and key_b as bytes.
    """
    if len(data) != BYTES_PER_BLOCK:
        raise ValueError(f"Sector trailer must be {BYTES_PER_BLOCK} bytes, got {len(data)}")
    return {
        "key_a": data[KEY_A_OFFSET:KEY_A_OFFSET + KEY_A_LENGTH],
        "access_bits": data[ACCESS_BITS_OFFSET:ACCESS_BITS_OFFSET + ACCESS_BITS_LENGTH],
        "key_b": data[KEY_B_OFFSET:KEY_B_OFFSET + KEY_B_LENGTH],
    }
