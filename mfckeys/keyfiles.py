"""
Reading dumps from disk and writing extracted key files.

The synchronous helpers serve the command line; `write_key_files_async`
serves the HTTP API and writes through aiofiles.
"""

import logging
from pathlib import Path
from typing import Union

import aiofiles

from mfckeys.errors import AllocationFailure, InvalidSizeError, IoFailure, MalformedDumpError
from mfckeys.rfid.dump_decoder import decode, decode_eml
from mfckeys.rfid.key_table import KeyTable
from mfckeys.rfid.mifare import density_for_size

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

EML_SUFFIX = ".eml"


def read_dump(path: PathLike) -> bytes:
    """
    Read a binary dump after checking its size on disk.

    Raises InvalidSizeError before reading anything if the file is neither
    1024 nor 4096 bytes long.
    """
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as e:
        raise IoFailure("Can not open file", str(path)) from e

    if density_for_size(size) is None:
        raise InvalidSizeError(size, str(path))

    try:
        with open(path, "rb") as f:
            return f.read()
    except MemoryError as e:
        raise AllocationFailure() from e
    except OSError as e:
        raise IoFailure("Can not read file", str(path)) from e


def load_key_table(path: PathLike) -> KeyTable:
    """Read and decode a dump file; `.eml` files are parsed as text."""
    path = Path(path)
    if path.suffix.lower() == EML_SUFFIX:
        try:
            text = path.read_text(encoding="ascii")
        except (OSError, UnicodeDecodeError) as e:
            raise IoFailure("Can not read file", str(path)) from e
        try:
            return decode_eml(text)
        except InvalidSizeError as e:
            raise InvalidSizeError(e.size, str(path)) from e
        except MalformedDumpError as e:
            raise MalformedDumpError(f"File '{path}': {e}") from e

    table = decode(read_dump(path))
    logger.info(f"Loaded {table.density.label} dump {path} (UID {table.uid_hex})")
    return table


def write_keys(data: bytes, path: PathLike) -> Path:
    """Write one key buffer to `path`."""
    path = Path(path)
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        raise IoFailure("Can not write the file", str(path)) from e
    logger.info(f"Wrote {len(data)} bytes to {path}")
    return path


def write_key_files(files: dict[str, bytes], output_dir: PathLike) -> list[Path]:
    """Write every named key buffer into `output_dir`, stopping at the first failure."""
    output_dir = Path(output_dir)
    return [write_keys(data, output_dir / name) for name, data in files.items()]


async def write_key_files_async(files: dict[str, bytes], output_dir: PathLike) -> list[Path]:
    """Async variant of write_key_files for the HTTP API."""
    output_dir = Path(output_dir)
    written = []
    for name, data in files.items():
        path = output_dir / name
        try:
            async with aiofiles.open(str(path), "wb") as f:
                await f.write(data)
        except OSError as e:
            raise IoFailure("Can not write the file", str(path)) from e
        logger.info(f"Wrote {len(data)} bytes to {path}")
        written.append(path)
    return written
