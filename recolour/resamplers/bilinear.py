"""Reference bilinear interpolation in pure numpy.

Pixel centres are aligned: output pixel x samples the source at
(x + 0.5) * src_w / dst_w - 0.5, clamped to the edge. Each channel,
alpha included, is a weighted blend of the four nearest source pixels,
rounded half up. A same-size resize returns an exact copy.

No rendering backend required, so results are identical on every
platform. This is the default backend.

Example:
    recolour-tool convert photo.jpg out.png --resampler bilinear
"""

import numpy as np

from recolour.core.types import Raster, Resampler

resampler = Resampler(
    name='bilinear',
    help='Reference bilinear interpolation (numpy, platform independent). Default.',
)


def _axis(src_len: int, dst_len: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Lower index, upper index and blend fraction for each output position."""
    pos = (np.arange(dst_len, dtype=np.float64) + 0.5) * (src_len / dst_len) - 0.5
    pos = np.clip(pos, 0, src_len - 1)
    lo = np.floor(pos).astype(np.intp)
    hi = np.minimum(lo + 1, src_len - 1)
    return lo, hi, pos - lo


@resampler.run
def run(source: Raster, width: int, height: int) -> Raster:
    src = source.pixels.astype(np.float64)
    y0, y1, fy = _axis(source.height, height)
    x0, x1, fx = _axis(source.width, width)

    fx = fx[None, :, None]
    fy = fy[:, None, None]
    top = src[y0][:, x0] * (1.0 - fx) + src[y0][:, x1] * fx
    bottom = src[y1][:, x0] * (1.0 - fx) + src[y1][:, x1] * fx
    blended = top * (1.0 - fy) + bottom * fy

    pixels = np.clip(np.floor(blended + 0.5), 0, 255).astype(np.uint8)
    return Raster(pixels)
