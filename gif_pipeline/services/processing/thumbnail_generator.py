"""
Thumbnail generator for the Trending GIF Pipeline.
"""

import asyncio
import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from gif_pipeline.core.exceptions import ImageProcessingError
from gif_pipeline.core.logging import logger

THUMBNAIL_WIDTH = 100


def scaled_size(size: Tuple[int, int], width: int = THUMBNAIL_WIDTH) -> Tuple[int, int]:
    """Return ``(width, height)`` keeping the aspect ratio of ``size``."""
    original_width, original_height = size
    height = max(1, round(original_height * width / original_width))
    return width, height


def resize_image(data: bytes, width: int = THUMBNAIL_WIDTH) -> bytes:
    """
    Resize an encoded image to a fixed width.

    The output keeps the input's format. Animated images are reduced to their
    first frame. The result depends only on the input bytes and the width.

    Args:
        data: Encoded image bytes
        width: Target width in pixels

    Returns:
        Encoded thumbnail bytes

    Raises:
        ImageProcessingError: If the image cannot be decoded or encoded
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            image_format = img.format
            thumbnail = img.resize(scaled_size(img.size, width), Image.Resampling.LANCZOS)

        buffer = io.BytesIO()
        thumbnail.save(buffer, format=image_format)
        return buffer.getvalue()

    except UnidentifiedImageError as e:
        raise ImageProcessingError(f"Cannot identify image: {str(e)}")

    except (OSError, ValueError) as e:
        logger.error(f"Error resizing image: {str(e)}")
        raise ImageProcessingError(str(e))


class ThumbnailGenerator:
    """
    Service for generating image thumbnails.
    This service uses Pillow in a worker thread to resize images.
    """

    def __init__(self, width: int = THUMBNAIL_WIDTH):
        self.width = width

    async def generate(self, data: bytes) -> bytes:
        """
        Generate a thumbnail from encoded image bytes.

        Raises:
            ImageProcessingError: If there's an error resizing the image
        """
        return await asyncio.to_thread(resize_image, data, self.width)
