"""Pillow-based progress photo encoder."""

import io
from dataclasses import dataclass

from PIL import Image

from fitness_ledger.services.images import ImageEncoder, to_data_url


@dataclass
class PillowImageEncoder(ImageEncoder):
    """Downscales photos to a maximum width and re-encodes them as JPEG."""

    max_width: int = 1024
    quality: int = 80

    def encode(self, image_bytes: bytes) -> str:
        """Return a JPEG data URL no wider than ``max_width``."""
        with Image.open(io.BytesIO(image_bytes)) as image:
            scale = min(1.0, self.max_width / image.width)
            size = (
                max(1, round(image.width * scale)),
                max(1, round(image.height * scale)),
            )
            resized = image.convert("RGB").resize(size)
        buffer = io.BytesIO()
        resized.save(buffer, format="JPEG", quality=self.quality)
        return to_data_url(buffer.getvalue(), mime_type="image/jpeg")
