"""Application configuration."""

import os
from pathlib import Path

VERSION = "0.3.0"

# Where key files are written when no output directory is given
OUTPUT_DIR = Path(os.getenv("MFCKEYS_OUTPUT_DIR", "."))

# Empty means each entry point picks its own default level
LOG_LEVEL = os.getenv("MFCKEYS_LOG_LEVEL", "")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
