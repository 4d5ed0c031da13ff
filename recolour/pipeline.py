"""Resize-then-recolour pipeline: decode → plan fit → resample → quantize.

Two entry points differ only in where the source comes from:
  from_path(path, box)        reads and decodes a file; returns None when the
                              path does not lead to a readable image
  from_existing(source, box)  takes a Raster or PIL image already in memory

Each call is independent. Nothing is cached between calls, and the caller's
source raster is never modified.

Example:
    from recolour import from_path
    raster = from_path('portrait.jpg', (285, 160))
    if raster is None:
        ...  # missing or unreadable file
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from PIL import Image

from recolour.core.codec import decode, encode, from_image
from recolour.core.errors import DecodeError
from recolour.core.fit import plan_fit
from recolour.core.quantize import quantize
from recolour.core.report import palette_usage
from recolour.core.resample import resample
from recolour.core.types import BoundingBox, ConversionReport, Raster, RecolourConfig

log = logging.getLogger(__name__)

DEFAULT_CONFIG = RecolourConfig()

BoxLike = BoundingBox | Sequence[float] | str


def _run(source: Raster, box: BoxLike, config: RecolourConfig, report: ConversionReport | None = None) -> Raster:
    box = BoundingBox.coerce(box)
    width, height = plan_fit(source.width, source.height, box)
    resized = resample(source, width, height, config.resampler)
    result = quantize(resized, config.palette, config.weight_against_grey, config.alpha_threshold)

    if report is not None:
        report.source_width, report.source_height = source.size
        report.target_width, report.target_height = result.size
        report.box = (box.max_width, box.max_height)
        report.resampler = config.resampler
        report.palette_size = len(config.palette)
        report.distinct_before = len(resized.distinct_colours())
        report.distinct_after = len(result.distinct_colours())
        report.usage, report.transparent_pct = palette_usage(result, config.palette)
    return result


def convert(source: Raster, box: BoxLike, config: RecolourConfig | None = None) -> Raster:
    """Fit, resample and quantize a raster. Raises on invalid box or palette."""
    return _run(source, box, config or DEFAULT_CONFIG)


def _read(path: str | os.PathLike) -> Raster | None:
    p = Path(path)
    if not p.is_file():
        log.warning('image not found: %s', p)
        return None
    try:
        data = p.read_bytes()
    except OSError as e:
        log.warning('cannot read %s: %s', p, e)
        return None
    try:
        return decode(data)
    except DecodeError as e:
        log.warning('not a readable image: %s (%s)', p, e)
        return None


def from_path(path: str | os.PathLike, box: BoxLike, config: RecolourConfig | None = None) -> Raster | None:
    """Load an image file and convert it.

    Returns None when the path is missing, is not a file, cannot be read or
    does not decode as an image. Every other failure propagates.
    """
    box = BoundingBox.coerce(box)
    source = _read(path)
    if source is None:
        return None
    log.debug('loaded %s (%dx%d)', path, source.width, source.height)
    return convert(source, box, config)


def from_existing(source: Raster | Image.Image, box: BoxLike, config: RecolourConfig | None = None) -> Raster:
    """Convert an in-memory raster or PIL image. The source is left untouched."""
    if isinstance(source, Image.Image):
        source = from_image(source)
    return convert(source, box, config)


def convert_file(
    path: str | os.PathLike,
    out_path: str | os.PathLike,
    box: BoxLike,
    config: RecolourConfig | None = None,
) -> ConversionReport | None:
    """Convert path, write the result to out_path as PNG and return a report.

    Returns None (and writes nothing) when path is not a readable image.
    """
    box = BoundingBox.coerce(box)
    source = _read(path)
    if source is None:
        return None

    report = ConversionReport(source=str(path), output_path=str(out_path))
    result = _run(source, box, config or DEFAULT_CONFIG, report)

    out_dir = os.path.dirname(os.fspath(out_path))
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    encode(result).save(out_path, format='PNG')
    log.info('wrote %s (%dx%d)', out_path, result.width, result.height)
    return report
