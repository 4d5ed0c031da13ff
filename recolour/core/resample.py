"""Resample orchestration.

The interpolation itself belongs to a backend from recolour/resamplers/
(looked up by name in recolour.registry). This module only calls it, checks
the size of what comes back, and tags the result for point sampling so the
palette-exact pixels are not smeared again when displayed.
"""

import logging

from recolour.core.errors import ResampleDimensionMismatch
from recolour.core.types import FILTER_POINT, Raster, Resampler

log = logging.getLogger(__name__)

DEFAULT_BACKEND = 'bilinear'


def _backend(backend: str | Resampler) -> Resampler:
    if isinstance(backend, Resampler):
        return backend
    from recolour import registry

    return registry.get(backend)


def resample(
    source: Raster,
    target_width: int,
    target_height: int,
    backend: str | Resampler = DEFAULT_BACKEND,
) -> Raster:
    """Resize source to exactly target_width x target_height.

    Raises ResampleDimensionMismatch if the backend returns any other size.
    The returned raster is always a new object with filter_mode 'point'.
    """
    if target_width < 1 or target_height < 1:
        raise ValueError(f'target dimensions must be at least 1x1, got {target_width}x{target_height}')

    impl = _backend(backend)
    result = impl.execute(source, target_width, target_height)
    if result.size != (target_width, target_height):
        raise ResampleDimensionMismatch(
            f'resampler {impl.name!r} returned {result.width}x{result.height}, '
            f'expected {target_width}x{target_height}'
        )
    if result is source or result.pixels is source.pixels:
        result = result.copy()

    log.debug(
        'resample %dx%d -> %dx%d with %s', source.width, source.height, target_width, target_height, impl.name
    )
    return Raster(result.pixels, FILTER_POINT)
