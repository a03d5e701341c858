"""Exceptions raised while extracting and writing MIFARE Classic keys."""

from typing import Optional


class KeyExtractError(Exception):
    """Base class for every fatal key-extraction failure."""


class DecodeError(KeyExtractError):
    """The input could not be decoded into a key table."""


class InvalidSizeError(DecodeError):
    """The dump is neither 1024 nor 4096 bytes long."""

    def __init__(self, size: int, path: Optional[str] = None):
        self.size = size
        self.path = path
        if path:
            message = f"File '{path}' is not the correct size! ({size} bytes)"
        else:
            message = f"Dump is not the correct size! Expected 1024 or 4096 bytes, got {size}"
        super().__init__(message)


class MalformedDumpError(DecodeError):
    """A text-encoded dump (hex, base64, eml) could not be parsed."""


class IoFailure(KeyExtractError):
    """The input could not be read or an output file could not be written."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(f"{message} '{path}'")


class AllocationFailure(KeyExtractError):
    """Not enough memory to hold the dump or the key buffers."""

    def __init__(self, message: str = "Can not allocate enough memory!"):
        super().__init__(message)
