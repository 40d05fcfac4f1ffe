"""
HueForge Imaging Utilities
Decodes uploaded image bytes into the RGBA pixel buffers the color engine reads.
"""
import base64
import binascii
import io
from typing import Optional

import numpy as np
from fastapi import HTTPException
from PIL import Image, UnidentifiedImageError

from hueforge.config import config
from hueforge.utils.logging import get_logger

log = get_logger()


def decode_base64_image(b64_data: str) -> bytes:
    """
    Decode base64 image data, tolerating a ``data:`` URL prefix.

    Raises:
        HTTPException: 400 for invalid base64
    """
    if ',' in b64_data:
        b64_data = b64_data.split(',', 1)[1]
    try:
        return base64.b64decode(b64_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=400, detail=f"Invalid base64 image data: {str(e)}")


def validate_magic_bytes(file_bytes: bytes) -> str:
    """
    Validate file magic bytes to ensure it's actually an image.

    Args:
        file_bytes: Raw file bytes

    Returns:
        Detected MIME type

    Raises:
        HTTPException: 400 for invalid/corrupt files
    """
    if len(file_bytes) < 12:
        raise HTTPException(status_code=400, detail="File too small or corrupt")

    if file_bytes.startswith(b'\xff\xd8\xff'):
        return "image/jpeg"
    if file_bytes.startswith(b'\x89PNG\r\n\x1a\n'):
        return "image/png"
    if file_bytes[:4] == b'RIFF' and file_bytes[8:12] == b'WEBP':
        return "image/webp"
    if file_bytes[:6] in (b'GIF87a', b'GIF89a'):
        return "image/gif"
    raise HTTPException(
        status_code=400,
        detail="Invalid image file. Magic bytes don't match supported formats."
    )


def resize_long_edge(image: Image.Image, max_dimension: Optional[int] = None) -> Image.Image:
    """
    Scale an image so its longest edge is at most ``max_dimension``.

    Images already small enough are returned unchanged (never upscaled).
    """
    if max_dimension is None:
        max_dimension = config.MAX_DIMENSION

    width, height = image.size
    scale = min(1.0, max_dimension / max(width, height))
    if scale >= 1.0:
        return image

    new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
    return image.resize(new_size, Image.Resampling.BILINEAR)


def load_rgba(file_bytes: bytes, max_dimension: Optional[int] = None) -> np.ndarray:
    """
    Decode image bytes into an (H, W, 4) uint8 RGBA array.

    Only the first frame of animated formats is read.

    Raises:
        HTTPException: 400 for oversized, unsupported or undecodable images
    """
    if len(file_bytes) > config.MAX_FILE_MB * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )

    mime_type = validate_magic_bytes(file_bytes)
    if mime_type not in config.SUPPORTED_MIME_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {mime_type}")

    try:
        image = Image.open(io.BytesIO(file_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise HTTPException(status_code=400, detail=f"Failed to decode image: {str(e)}")

    original_size = image.size
    image = resize_long_edge(image.convert("RGBA"), max_dimension)
    rgba = np.array(image, dtype=np.uint8)

    log.debug("Decoded image", extra={
        "mime_type": mime_type,
        "original_size": original_size,
        "sampled_size": image.size,
    })
    return rgba
