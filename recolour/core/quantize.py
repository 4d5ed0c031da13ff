"""Recolour a raster to a fixed palette.

Each distinct colour in the raster is resolved once, then every pixel is
rewritten by table lookup. A resized sprite usually has a few hundred
distinct colours against tens of thousands of pixels.

Resolution rules for a distinct colour p:
  - p.a < alpha_threshold          -> (0, 0, 0, 0)
  - otherwise the palette entry c minimising
        euclid(c.rgb, p.rgb) * w
    where w = weight_against_grey if c is grey and p is not, else 1.0.
    Ties go to the first entry in palette order. The output is the palette
    entry itself, alpha included.

Example:
    from recolour import DEFAULT_PALETTE, Raster, quantize
    out = quantize(Raster.from_colours(1, 1, [(255, 0, 0, 255)]), DEFAULT_PALETTE)
    out.get(0, 0)  # Color(r=128, g=0, b=0, a=255)
"""

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from recolour.core.palette import ALPHA_THRESHOLD, WEIGHT_AGAINST_GREY
from recolour.core.types import TRANSPARENT, Color, Palette, Raster, as_palette, to_colour

log = logging.getLogger(__name__)

# Rows of distinct colours scored per batch; bounds the (rows, palette, 3) scratch array
CHUNK_ROWS = 4096


def _is_grey(colours: np.ndarray) -> np.ndarray:
    return (colours[:, 0] == colours[:, 1]) & (colours[:, 1] == colours[:, 2])


def weighted_distances(colours: np.ndarray, palette: Palette, weight_against_grey: float) -> np.ndarray:
    """Score every colour against every palette entry.

    colours is (N, 3+) integer RGB(A); returns (N, len(palette)) float64.
    """
    rgb = colours[:, :3].astype(np.float64)
    pal = palette.array[:, :3].astype(np.float64)
    diff = rgb[:, None, :] - pal[None, :, :]
    dist = np.sqrt((diff * diff).sum(axis=-1))
    penalised = palette.grey_mask[None, :] & ~_is_grey(colours)[:, None]
    return dist * np.where(penalised, weight_against_grey, 1.0)


def resolve_colours(
    colours: np.ndarray,
    palette: Palette,
    weight_against_grey: float = WEIGHT_AGAINST_GREY,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> np.ndarray:
    """Map (N, 4) uint8 colours to their (N, 4) uint8 replacements."""
    resolved = np.empty((len(colours), 4), dtype=np.uint8)
    for start in range(0, len(colours), CHUNK_ROWS):
        chunk = colours[start : start + CHUNK_ROWS]
        # argmin returns the first index of the minimum: first-match tie-break
        best = np.argmin(weighted_distances(chunk, palette, weight_against_grey), axis=1)
        resolved[start : start + len(chunk)] = palette.array[best]
    resolved[colours[:, 3] < alpha_threshold] = TRANSPARENT
    return resolved


def nearest_palette_index(
    colour: Sequence[int],
    palette: Palette | Iterable[Sequence[int]],
    weight_against_grey: float = WEIGHT_AGAINST_GREY,
) -> tuple[int, float]:
    """Return (index, weighted distance) of the best palette entry for one colour.

    Alpha is ignored here; the transparency rule lives in resolve_colours.
    """
    palette = as_palette(palette)
    row = np.array([tuple(to_colour(colour))], dtype=np.uint8)
    scores = weighted_distances(row, palette, weight_against_grey)[0]
    index = int(np.argmin(scores))
    return index, float(scores[index])


def _distinct(source: Raster) -> tuple[np.ndarray, np.ndarray]:
    flat = source.pixels.reshape(-1, 4)
    distinct, inverse = np.unique(flat, axis=0, return_inverse=True)
    return distinct, inverse.reshape(-1)


def build_quantization_map(
    source: Raster,
    palette: Palette | Iterable[Sequence[int]],
    weight_against_grey: float = WEIGHT_AGAINST_GREY,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> dict[Color, Color]:
    """Return {source colour: output colour} for every distinct colour in source."""
    palette = as_palette(palette)
    if source.pixel_count == 0:
        return {}
    distinct, _inverse = _distinct(source)
    resolved = resolve_colours(distinct, palette, weight_against_grey, alpha_threshold)
    qmap: dict[Color, Color] = {}
    for src, dst in zip(distinct, resolved, strict=True):
        qmap[Color(*(int(v) for v in src))] = Color(*(int(v) for v in dst))
    return qmap


def quantize(
    source: Raster,
    palette: Palette | Iterable[Sequence[int]],
    weight_against_grey: float = WEIGHT_AGAINST_GREY,
    alpha_threshold: int = ALPHA_THRESHOLD,
) -> Raster:
    """Return a new raster where every pixel is a palette entry or fully transparent.

    Raises EmptyPalette before touching any pixels. A raster with no pixels
    is returned as-is. The source raster is not modified.
    """
    palette = as_palette(palette)
    if source.pixel_count == 0:
        return source

    distinct, inverse = _distinct(source)
    table = resolve_colours(distinct, palette, weight_against_grey, alpha_threshold)
    pixels = table[inverse].reshape(source.pixels.shape)
    log.debug(
        'quantize %dx%d: %d distinct colours against %d palette entries',
        source.width,
        source.height,
        len(distinct),
        len(palette),
    )
    return Raster(pixels, source.filter_mode)
