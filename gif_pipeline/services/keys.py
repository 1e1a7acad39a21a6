"""
Object key derivation for originals and thumbnails.
"""

import base64

from gif_pipeline.core.exceptions import InvalidKeyError

ORIGINAL_PREFIX = "original/"
THUMBNAIL_PREFIX = "thumbnail/"
GIF_SUFFIX = ".gif"


def original_key(url: str) -> str:
    """Return ``base64(url) + ".gif"`` for a GIF URL."""
    return base64.b64encode(url.encode("utf-8")).decode("ascii") + GIF_SUFFIX


def original_object_key(url: str) -> str:
    """Return the full bucket key an original is stored under."""
    return ORIGINAL_PREFIX + original_key(url)


def thumbnail_key(key: str) -> str:
    """
    Map an original key to its thumbnail key.

    Only the first occurrence of ``original`` is replaced. Keys without it
    have no thumbnail counterpart.

    Raises:
        InvalidKeyError: If the key does not contain ``original``
    """
    if "original" not in key:
        raise InvalidKeyError(key)
    return key.replace("original", "thumbnail", 1)
