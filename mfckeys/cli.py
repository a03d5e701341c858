"""
Command line front end — extract keys from a raw MIFARE Classic dump and
convert them to either the mfocGUI or the Proxmark key format.

Example:
    mfckeys -m mycard.mfd
    mfckeys -p -o keys/ mycard.mfd
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from mfckeys import config
from mfckeys.errors import AllocationFailure, KeyExtractError
from mfckeys.keyfiles import load_key_table, write_key_files
from mfckeys.report import render_table
from mfckeys.rfid.key_encoders import Mode, encode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mfckeys",
        description="Extract keys from raw MIFARE Classic 1K/4K dumps and convert "
                    "them to the mfocGUI or Proxmark key format.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Example:\n    mfckeys -m mycard.mfd",
    )
    modes = parser.add_mutually_exclusive_group(required=True)
    modes.add_argument("-m", "--mfocgui", dest="mode", action="store_const", const=Mode.GUI,
                       help="convert a raw dump to the mfocGUI key format")
    modes.add_argument("-p", "--proxmark", dest="mode", action="store_const", const=Mode.LINEAR,
                       help="convert a raw dump to the proxmark key format")
    parser.add_argument("-o", "--output-dir", type=Path, default=config.OUTPUT_DIR,
                        help="directory for the key files (default: %(default)s)")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="do not print the key table")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="enable debug logging")
    parser.add_argument("-v", "--version", action="version", version=config.VERSION,
                        help="print the version and exit")
    parser.add_argument("input_file", type=Path, help="raw dump (.mfd/.bin) or .eml file")
    return parser


def setup_logging(debug: bool):
    name = (config.LOG_LEVEL or "WARNING").upper()
    level = getattr(logging, name, None)
    unknown = not isinstance(level, int)
    if unknown:
        level = logging.WARNING
    logging.basicConfig(level=logging.DEBUG if debug else level, format=config.LOG_FORMAT)
    if unknown:
        logger.warning(f"Unknown log level '{config.LOG_LEVEL}', using WARNING")


def run(input_file: Path, mode: Mode, output_dir: Path, quiet: bool = False) -> list[Path]:
    """Decode `input_file`, print its keys and write the key files for `mode`."""
    table = load_key_table(input_file)
    if not quiet:
        print(render_table(table))
        print()

    try:
        files = encode(table, mode)
    except MemoryError as e:
        raise AllocationFailure() from e

    written = write_key_files(files, output_dir)
    for path in written:
        print(f"Wrote keys to: {path}")
    return written


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    try:
        run(args.input_file, args.mode, args.output_dir, quiet=args.quiet)
    except KeyExtractError as e:
        logger.debug("Key extraction failed", exc_info=True)
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
