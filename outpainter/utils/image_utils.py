"""
Image codec helpers for Outpainter
Decodes raw bytes into PIL images and encodes canvases and masks back to PNG.
"""

import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from ..core.configuration_manager import ConfigurationManager
from ..core.exceptions import DecodeError, EncodeError

logger = logging.getLogger(__name__)

CANONICAL_FORMAT = "png"

# Modes Pillow can write to PNG without conversion
PNG_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")


def decode_image(raw: bytes) -> Tuple[Image.Image, str, Tuple[int, int]]:
    """
    Decode raw image bytes.

    Args:
        raw: Encoded image (PNG, JPEG, GIF, WebP, ... anything Pillow reads)

    Returns:
        (image, lower-case format name, (width, height))

    Raises:
        DecodeError: If the bytes are empty, malformed or unsupported
    """
    if not raw:
        raise DecodeError("Cannot decode an empty image", size_bytes=0)
    try:
        image = Image.open(io.BytesIO(raw))
        # Force the full decode so truncated data fails here
        image.load()
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as e:
        raise DecodeError(
            f"Failed to decode image ({len(raw)} bytes): {e}",
            size_bytes=len(raw),
        ) from e

    image_format = (image.format or "").lower()
    logger.debug(f"Decoded {image_format} image {image.size[0]}x{image.size[1]} "
                 f"mode={image.mode}")
    return image, image_format, image.size


def encode_png(
    image: Image.Image,
    compress_level: Optional[int] = None,
    output: str = "image",
) -> bytes:
    """
    Encode an image as PNG.

    Args:
        image: Image to encode
        compress_level: zlib level 0-9 (config: output.png_compress_level)
        output: Name used in error messages ("canvas", "mask", ...)

    Raises:
        EncodeError: If Pillow cannot write the image
    """
    if compress_level is None:
        compress_level = ConfigurationManager().get_value(
            "output.png_compress_level")

    buffer = io.BytesIO()
    try:
        image.save(buffer, format="PNG", compress_level=compress_level)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to encode {output} as PNG: {e}",
                          output=output) from e
    return buffer.getvalue()


def to_mode(image: Image.Image, mode: str) -> Image.Image:
    """Convert to a working mode, keeping palette transparency"""
    if image.mode == mode:
        return image
    if image.mode == "P" and "transparency" in image.info and mode == "RGB":
        return image.convert("RGBA").convert(mode)
    return image.convert(mode)


def ensure_png_mode(image: Image.Image) -> Image.Image:
    """Convert modes PNG cannot store (CMYK, YCbCr, ...) to RGB or RGBA"""
    if image.mode in PNG_MODES:
        return image
    return image.convert("RGBA" if "A" in image.mode else "RGB")
