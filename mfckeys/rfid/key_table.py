"""Decoded key table — UID, card density and the ordered sector key pairs."""

from dataclasses import dataclass

from .mifare import KEY_LENGTH, UID_LENGTH, Density


def format_uid(uid: bytes) -> str:
    """Render a 4-byte UID as 8 zero-padded lower-case hex digits."""
    return f"{int.from_bytes(uid[:UID_LENGTH], 'big'):08x}"


@dataclass(frozen=True)
class SectorKeyPair:
    """Key A and Key B of one sector trailer."""

    sector: int
    key_a: bytes
    key_b: bytes

    def __post_init__(self):
        for name, key in (("key_a", self.key_a), ("key_b", self.key_b)):
            if len(key) != KEY_LENGTH:
                raise ValueError(f"{name} must be {KEY_LENGTH} bytes, got {len(key)}")

    @property
    def key_a_hex(self) -> str:
        return self.key_a.hex()

    @property
    def key_b_hex(self) -> str:
        return self.key_b.hex()

    def to_dict(self) -> dict:
        return {
            "sector": self.sector,
            "key_a": self.key_a_hex,
            "key_b": self.key_b_hex,
        }


@dataclass(frozen=True)
class KeyTable:
    """All sector keys extracted from one dump, in card order."""

    uid: bytes
    density: Density
    pairs: tuple[SectorKeyPair, ...]

    def __post_init__(self):
        if len(self.uid) != UID_LENGTH:
            raise ValueError(f"UID must be {UID_LENGTH} bytes, got {len(self.uid)}")
        expected = self.density.layout.trailer_count
        if len(self.pairs) != expected:
            raise ValueError(
                f"{self.density.label} key table needs {expected} pairs, got {len(self.pairs)}"
            )

    @property
    def uid_hex(self) -> str:
        return format_uid(self.uid)

    @property
    def key_region_bytes(self) -> int:
        return self.density.layout.key_region_bytes

    def to_dict(self) -> dict:
        return {
            "uid": self.uid_hex,
            "density": self.density.label,
            "pairs": [p.to_dict() for p in self.pairs],
        }
