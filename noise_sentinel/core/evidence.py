"""
Evidence images arrive as base64 (optionally a data URL) and are stored
gzip-compressed and base64-encoded in a single text column.
"""
import base64
import binascii
import gzip
from typing import Optional

DATA_URL_PREFIX = "data:image/jpeg;base64,"

def compress_evidence(image_data: Optional[str]) -> Optional[str]:
    if not image_data:
        return None
    # strip "data:image/...;base64," when present
    if "," in image_data and image_data.startswith("data:"):
        image_data = image_data.split(",", 1)[1]
    try:
        raw = base64.b64decode(image_data, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Evidence must be a base64-encoded image.")
    return base64.b64encode(gzip.compress(raw)).decode("ascii")

def decompress_evidence(stored: Optional[str]) -> Optional[str]:
    """Return a data URL for stored evidence; values that are not gzip payloads are returned as-is"""
    if not stored:
        return None
    try:
        raw = gzip.decompress(base64.b64decode(stored, validate=True))
    except (binascii.Error, ValueError, OSError, EOFError):
        return stored
    return DATA_URL_PREFIX + base64.b64encode(raw).decode("ascii")
