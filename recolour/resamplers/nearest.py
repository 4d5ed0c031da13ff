"""Nearest-neighbour sampling in pure numpy.

Output pixel x takes source pixel floor((x + 0.5) * src_w / dst_w).
Never blends, so the output only contains colours already in the source.
Good for pixel art that is already on-palette.
"""

import numpy as np

from recolour.core.types import Raster, Resampler

resampler = Resampler(
    name='nearest',
    help='Nearest-neighbour sampling. No new colours introduced.',
)


def _indices(src_len: int, dst_len: int) -> np.ndarray:
    idx = np.floor((np.arange(dst_len, dtype=np.float64) + 0.5) * (src_len / dst_len)).astype(np.intp)
    return np.clip(idx, 0, src_len - 1)


@resampler.run
def run(source: Raster, width: int, height: int) -> Raster:
    ys = _indices(source.height, height)
    xs = _indices(source.width, width)
    return Raster(np.ascontiguousarray(source.pixels[ys][:, xs]))
