"""Image decoding utilities."""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


def decode_image(data: bytes) -> Image.Image | None:
    """Decode raw bytes into a fully loaded image, or None if undecodable."""
    if not data:
        return None
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (
        UnidentifiedImageError,
        Image.DecompressionBombError,
        OSError,
        SyntaxError,
        ValueError,
    ) as e:
        logger.debug("Image decode failed: %s", e)
        return None
    return img
