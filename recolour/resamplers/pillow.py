"""Pillow's bilinear resize (Image.Resampling.BILINEAR).

Pillow filters over the whole source footprint when shrinking, so large
downscales look smoother than the reference backend. Results can differ
between Pillow releases by a unit or so per channel.

Example:
    recolour-tool convert photo.jpg out.png --resampler pillow
"""

from PIL import Image

from recolour.core.codec import encode, from_image
from recolour.core.types import Raster, Resampler

resampler = Resampler(
    name='pillow',
    help="Pillow's bilinear Image.resize. Smoother on large downscales.",
)


@resampler.run
def run(source: Raster, width: int, height: int) -> Raster:
    resized = encode(source).resize((width, height), Image.Resampling.BILINEAR)
    return from_image(resized)
