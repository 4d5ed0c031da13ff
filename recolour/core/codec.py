"""Pillow-backed decode/encode between image data and Raster.

decode() accepts anything Pillow can open (PNG, JPEG, BMP, GIF, ...) and
always yields RGBA. encode() returns an RGBA PIL image; to_png_bytes() is
the lossless round trip used when an image has to travel as bytes.
"""

import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from recolour.core.errors import DecodeError
from recolour.core.types import Raster


def from_image(image: Image.Image) -> Raster:
    """Copy a PIL image into a new RGBA Raster."""
    if image.mode != 'RGBA':
        image = image.convert('RGBA')
    return Raster(np.array(image, dtype=np.uint8))


def decode(data: bytes) -> Raster:
    """Decode encoded image bytes.

    Raises DecodeError if Pillow cannot read them, including images over
    Pillow's decompression-bomb limit (Image.MAX_IMAGE_PIXELS).
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return from_image(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f'cannot decode image data ({len(data)} bytes): {e}') from e


def encode(raster: Raster) -> Image.Image:
    """Return an RGBA PIL image holding a copy of the raster's pixels."""
    return Image.fromarray(raster.pixels.copy())


def to_png_bytes(raster: Raster) -> bytes:
    buf = io.BytesIO()
    encode(raster).save(buf, format='PNG')
    return buf.getvalue()
