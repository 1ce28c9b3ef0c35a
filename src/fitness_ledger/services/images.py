"""Progress photo encoding."""

import base64
import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ImageEncoder(Protocol):
    """Turns raw image bytes into a storable reference."""

    def encode(self, image_bytes: bytes) -> str:
        """Return an encoded reference for the image."""


def encode_photo(encoder: ImageEncoder | None, image_bytes: bytes) -> str:
    """Encode a photo, falling back to the unprocessed bytes on failure."""
    if encoder is None:
        return to_data_url(image_bytes)
    try:
        return encoder.encode(image_bytes)
    except Exception:
        logger.warning("Photo encoding failed, storing original", exc_info=True)
        return to_data_url(image_bytes)


def to_data_url(image_bytes: bytes, mime_type: str | None = None) -> str:
    """Convert bytes to a base64 data URL."""
    resolved = mime_type or _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{resolved};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
