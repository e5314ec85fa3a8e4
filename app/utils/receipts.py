# app/utils/receipts.py
import base64
import binascii
import re
import time
from typing import Optional, Tuple

DEFAULT_CONTENT_TYPE = "image/jpeg"
CACHE_CONTROL = "public, max-age=31536000"

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,", re.IGNORECASE)
_URL_SAFE_ALPHABET = str.maketrans("-_", "+/")

def receipt_key(file_name: str, folder: str) -> str:
    return f"{folder}/{file_name}"

def receipt_key_from_url(photo_url: Optional[str], folder: str) -> Optional[str]:
    """Storage key for a photoUrl: the URL's last path segment under the receipts folder"""
    if not photo_url:
        return None
    file_name = photo_url.split("/")[-1]
    if not file_name:
        return None
    return receipt_key(file_name, folder)

def default_file_name() -> str:
    return f"receipt_{int(time.time() * 1000)}.jpg"

def decode_image(image_base64: str) -> Tuple[bytes, str]:
    """
    Decode a base64 payload, optionally prefixed with a data URL header.

    Standard and URL-safe alphabets are both accepted, as is missing padding.
    Returns the raw bytes and the content type (from the header, else JPEG).
    Raises ValueError on malformed base64.
    """
    content_type = DEFAULT_CONTENT_TYPE
    match = _DATA_URL.match(image_base64)
    if match:
        content_type = match.group("mime").lower()
        image_base64 = image_base64[match.end():]
    payload = "".join(image_base64.split()).translate(_URL_SAFE_ALPHABET)
    payload += "=" * (-len(payload) % 4)
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Invalid image data") from e
    return data, content_type
