"""API routes for key extraction — decode dumps, encode and export key files."""

import base64

from fastapi import APIRouter, HTTPException, UploadFile, File
from pydantic import BaseModel

from mfckeys import config
from mfckeys.errors import DecodeError, IoFailure
from mfckeys.keyfiles import write_key_files_async
from mfckeys.rfid.dump_decoder import decode, decode_base64, decode_eml, decode_hex
from mfckeys.rfid.key_encoders import Mode, encode
from mfckeys.rfid.mifare import DUMP_SIZE_4K

router = APIRouter(prefix="/api/keys", tags=["keys"])


# ──────────────────────────────────────────────
# Request models
# ──────────────────────────────────────────────

class ExtractHexRequest(BaseModel):
    hex_data: str


class ExtractEmlRequest(BaseModel):
    dump_text: str


class ExtractBase64Request(BaseModel):
    b64_data: str


class EncodeRequest(BaseModel):
    hex_data: str
    mode: Mode = Mode.GUI


# ──────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────

@router.post("/extract/file")
async def extract_file(file: UploadFile = File(...)):
    """Extract the key table from an uploaded binary dump."""
    # One byte past the largest dump is enough to reject oversized uploads
    data = await file.read(DUMP_SIZE_4K + 1)
    try:
        return decode(data).to_dict()
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/extract/hex")
async def extract_hex(req: ExtractHexRequest):
    """Extract the key table from a hex-encoded dump."""
    try:
        return decode_hex(req.hex_data).to_dict()
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/extract/eml")
async def extract_eml(req: ExtractEmlRequest):
    """Extract the key table from a Proxmark3 eml text dump."""
    try:
        return decode_eml(req.dump_text).to_dict()
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/extract/base64")
async def extract_base64(req: ExtractBase64Request):
    """Extract the key table from a base64-encoded dump."""
    try:
        return decode_base64(req.b64_data).to_dict()
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/encode")
async def encode_keys(req: EncodeRequest):
    """Encode the keys of a hex dump and return the key files base64-encoded."""
    try:
        table = decode_hex(req.hex_data)
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    files = encode(table, req.mode)
    return {
        "uid": table.uid_hex,
        "mode": req.mode.value,
        "files": {name: base64.b64encode(data).decode("ascii") for name, data in files.items()},
    }


@router.post("/export")
async def export_keys(req: EncodeRequest):
    """Encode the keys of a hex dump and write the key files to the output directory."""
    try:
        table = decode_hex(req.hex_data)
    except DecodeError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        written = await write_key_files_async(encode(table, req.mode), config.OUTPUT_DIR)
    except IoFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {
        "uid": table.uid_hex,
        "mode": req.mode.value,
        "paths": [str(p) for p in written],
    }
