"""Helpers for moving image payloads between bytes, base64 and data URLs."""

import base64
import binascii
from io import BytesIO

from PIL import Image, UnidentifiedImageError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class InvalidImagePayload(ValueError):
    """Raised when a payload cannot be read as an image."""


def decode_image_payload(payload: bytes | str) -> bytes:
    """Return raw image bytes from bytes, a data URL, or bare base64 text."""
    if isinstance(payload, bytes):
        return payload
    _, _, data = payload.strip().rpartition(",")
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidImagePayload("Image data is not valid base64") from exc


def detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(PNG_SIGNATURE):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return "image/jpeg"


def to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def normalize_to_png(image_bytes: bytes) -> bytes:
    """Re-encode an image as PNG unless it already is one."""
    if image_bytes.startswith(PNG_SIGNATURE):
        return image_bytes
    try:
        with Image.open(BytesIO(image_bytes)) as image:
            if image.mode not in {"RGB", "RGBA", "L", "LA", "P"}:
                image = image.convert("RGBA")
            buffer = BytesIO()
            image.save(buffer, format="PNG")
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        ValueError,
    ) as exc:
        raise InvalidImagePayload("Generated image could not be decoded") from exc
    return buffer.getvalue()
