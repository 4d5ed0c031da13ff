"""Best-fit planning: the largest size that fits a bounding box at the source aspect ratio.

The axis that overflows the box the most (the larger of width/max_width and
height/max_height) is the binding axis. Both dimensions are divided by that
ratio, so the binding axis lands exactly on its bound and the other axis
stays within its own. Sources smaller than the box are scaled up the same way.

Ratios are exact fractions so that results are pixel-exact and do not depend
on float error. Rounding is half-to-even (Python's round), which is what
the game engine's Mathf.Round did: 300x50 in 285x160 gives 285x48, since
47.5 rounds to 48.
"""

import logging
from collections.abc import Sequence
from fractions import Fraction

from recolour.core.types import BoundingBox

log = logging.getLogger(__name__)


def scale_factor(source_width: int, source_height: int, box: BoundingBox) -> Fraction:
    """Ratio every source dimension is divided by. >1 shrinks, <1 enlarges."""
    sx = Fraction(source_width) / Fraction(box.max_width)
    sy = Fraction(source_height) / Fraction(box.max_height)
    return max(sx, sy)


def plan_fit(
    source_width: int,
    source_height: int,
    box: BoundingBox | Sequence[float] | str,
) -> tuple[int, int]:
    """Return (target_width, target_height) for a source fitted into box.

    Raises InvalidBoundingBox for a zero, negative or non-finite bound, and
    ValueError for a non-positive source dimension.

    Each target dimension is clamped to at least 1 pixel: a 1000x1 source in
    a 10x10 box gives 10x1 rather than 10x0. This is the only value the
    planner adjusts instead of raising, and it is logged at debug level.
    """
    box = BoundingBox.coerce(box)
    source_width, source_height = int(source_width), int(source_height)
    if source_width <= 0 or source_height <= 0:
        raise ValueError(f'source dimensions must be positive, got {source_width}x{source_height}')

    factor = scale_factor(source_width, source_height, box)
    raw = (round(Fraction(source_width) / factor), round(Fraction(source_height) / factor))
    width, height = max(1, raw[0]), max(1, raw[1])
    if (width, height) != raw:
        log.debug('plan_fit %dx%d: target %dx%d clamped to %dx%d', source_width, source_height, *raw, width, height)
    log.debug(
        'plan_fit %dx%d into %sx%s: scale %.4f -> %dx%d',
        source_width,
        source_height,
        box.max_width,
        box.max_height,
        float(factor),
        width,
        height,
    )
    return (width, height)
