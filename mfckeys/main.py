"""
MFCKeys — MIFARE Classic key extraction service.

FastAPI backend providing APIs for:
- Extracting sector keys from raw 1K/4K dumps (binary, hex, eml)
- Encoding keys to the mfocGUI (a/b .dump) and Proxmark (.bin) formats
- Exporting key files to the configured output directory
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mfckeys import config
from mfckeys.api import keys

logging.basicConfig(
    level=(config.LOG_LEVEL or "INFO").upper(),
    format=config.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the key output directory exists on startup."""
    logger.info("Starting MFCKeys...")
    config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    logger.info(f"Key files will be written to {config.OUTPUT_DIR.resolve()}")
    yield
    logger.info("Shutting down MFCKeys")


app = FastAPI(
    title="MFCKeys",
    description="MIFARE Classic key extraction",
    version=config.VERSION,
    lifespan=lifespan,
)

app.include_router(keys.router)


@app.get("/api/health")
async def health():
    """Report that the service is up."""
    return {"status": "ok", "version": config.VERSION}
