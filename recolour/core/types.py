"""Shared types for recolour: Color, Palette, Raster, BoundingBox, RecolourConfig, Resampler, ConversionReport."""

from __future__ import annotations

import math
import numbers
import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import numpy as np

from recolour.core.errors import EmptyPalette, InvalidBoundingBox

FILTER_BILINEAR = 'bilinear'
FILTER_POINT = 'point'


class Color(NamedTuple):
    """An RGBA colour with 8-bit channels. Hashable, compared by exact channel match."""

    r: int
    g: int
    b: int
    a: int = 255

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def is_grey(self) -> bool:
        return self.r == self.g == self.b

    @property
    def hex(self) -> str:
        return f'#{self.r:02x}{self.g:02x}{self.b:02x}'


TRANSPARENT = Color(0, 0, 0, 0)


def to_colour(value: Sequence[int]) -> Color:
    """Build a Color from an (r, g, b) or (r, g, b, a) sequence, checking every channel is 0..255."""
    colour = Color(*value)
    for channel in colour:
        if isinstance(channel, bool) or not isinstance(channel, numbers.Integral) or not 0 <= channel <= 255:
            raise ValueError(f'colour channels must be integers in 0..255, got {tuple(value)!r}')
    return Color(*(int(c) for c in colour))


class Palette:
    """Immutable ordered set of allowed output colours.

    Order matters only for tie-breaking: the first entry at the minimum
    distance wins. Names are optional and used for reports.
    """

    def __init__(self, colours: Iterable[Sequence[int]], names: Iterable[str] | None = None):
        entries = tuple(to_colour(c) for c in colours)
        if not entries:
            raise EmptyPalette('palette must contain at least one colour')
        labels = tuple(names) if names is not None else tuple(f'#{i}' for i in range(len(entries)))
        if len(labels) != len(entries):
            raise ValueError(f'palette has {len(entries)} colours but {len(labels)} names')
        self._colours = entries
        self._names = labels
        self._array = np.array(entries, dtype=np.uint8).reshape(-1, 4)
        self._array.setflags(write=False)
        self._grey = np.array([c.is_grey for c in entries], dtype=bool)
        self._grey.setflags(write=False)

    @classmethod
    def from_hex(cls, mapping: dict[str, str]) -> Palette:
        """Build a palette from {name: '#rrggbb'}, keeping dict order."""
        from recolour.core.palette import hex_to_rgb

        return cls([(*hex_to_rgb(v), 255) for v in mapping.values()], names=mapping.keys())

    @property
    def colours(self) -> tuple[Color, ...]:
        return self._colours

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def array(self) -> np.ndarray:
        """(N, 4) uint8 view, read-only."""
        return self._array

    @property
    def grey_mask(self) -> np.ndarray:
        """(N,) bool, True where the entry is a true grey (r == g == b)."""
        return self._grey

    def name_of(self, index: int) -> str:
        return self._names[index]

    def __len__(self) -> int:
        return len(self._colours)

    def __iter__(self) -> Iterator[Color]:
        return iter(self._colours)

    def __getitem__(self, index: int) -> Color:
        return self._colours[index]

    def __contains__(self, colour: object) -> bool:
        return colour in self._colours

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        return self._colours == other._colours

    def __hash__(self) -> int:
        return hash(self._colours)

    def __repr__(self) -> str:
        return f'Palette({len(self)} colours)'


def as_palette(palette: Palette | Iterable[Sequence[int]]) -> Palette:
    """Accept a Palette or any sequence of colour tuples."""
    if isinstance(palette, Palette):
        return palette
    return Palette(palette)


@dataclass(eq=False)
class Raster:
    """A dense row-major RGBA pixel buffer.

    pixels has shape (height, width, 4) and dtype uint8; (0, 0) is the
    top-left pixel. filter_mode is a display hint for whoever renders the
    raster, it never changes pixel values.
    """

    pixels: np.ndarray
    filter_mode: str = FILTER_BILINEAR

    def __post_init__(self) -> None:
        if not isinstance(self.pixels, np.ndarray):
            raise ValueError('pixels must be a numpy array')
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f'pixels must have shape (height, width, 4), got {self.pixels.shape}')
        if self.pixels.dtype != np.uint8:
            raise ValueError(f'pixels must be uint8, got {self.pixels.dtype}')
        if self.filter_mode not in (FILTER_BILINEAR, FILTER_POINT):
            raise ValueError(f'unknown filter mode: {self.filter_mode}')

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def get(self, x: int, y: int) -> Color:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return Color(r, g, b, a)

    def distinct_colours(self) -> set[Color]:
        flat = np.unique(self.pixels.reshape(-1, 4), axis=0)
        return {Color(*(int(v) for v in row)) for row in flat}

    def copy(self) -> Raster:
        return Raster(self.pixels.copy(), self.filter_mode)

    @classmethod
    def blank(cls, width: int, height: int, colour: Sequence[int] = TRANSPARENT) -> Raster:
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[...] = tuple(to_colour(colour))
        return cls(pixels)

    @classmethod
    def from_colours(cls, width: int, height: int, colours: Sequence[Sequence[int]]) -> Raster:
        """Build a raster from a flat row-major list of colours."""
        if len(colours) != width * height:
            raise ValueError(f'expected {width * height} colours for {width}x{height}, got {len(colours)}')
        data = np.array([tuple(to_colour(c)) for c in colours], dtype=np.uint8)
        return cls(data.reshape(height, width, 4))


@dataclass(frozen=True)
class BoundingBox:
    """Upper bound, in pixels, that a fitted raster must stay within."""

    max_width: float
    max_height: float

    def __post_init__(self) -> None:
        for label, value in (('max_width', self.max_width), ('max_height', self.max_height)):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidBoundingBox(f'{label} must be a number, got {value!r}')
            if not math.isfinite(value) or value <= 0:
                raise InvalidBoundingBox(f'{label} must be a positive finite number, got {value!r}')
            object.__setattr__(self, label, int(value) if isinstance(value, numbers.Integral) else float(value))

    @classmethod
    def parse(cls, text: str) -> BoundingBox:
        """Parse '285x160' (also accepts '285,160' and '285 160')."""
        m = re.fullmatch(r'\s*(-?\d+(?:\.\d+)?)\s*[x×, ]\s*(-?\d+(?:\.\d+)?)\s*', text)
        if not m:
            raise InvalidBoundingBox(f'cannot parse bounding box: {text!r} (expected WIDTHxHEIGHT)')
        w, h = (float(g) if '.' in g else int(g) for g in m.groups())
        return cls(w, h)

    @classmethod
    def coerce(cls, box: BoundingBox | Sequence[float] | str) -> BoundingBox:
        if isinstance(box, BoundingBox):
            return box
        if isinstance(box, str):
            return cls.parse(box)
        if len(box) != 2:
            raise InvalidBoundingBox(f'bounding box needs two values, got {box!r}')
        return cls(box[0], box[1])


@dataclass(frozen=True)
class RecolourConfig:
    """Everything the pipeline needs besides the image and the box."""

    palette: Palette | None = None
    weight_against_grey: float = 1.5  # >1 makes grey palette entries worse matches for coloured pixels
    alpha_threshold: int = 128  # alpha below this becomes fully transparent
    resampler: str = 'bilinear'

    def __post_init__(self) -> None:
        if self.palette is None:
            from recolour.core.palette import DEFAULT_PALETTE

            object.__setattr__(self, 'palette', DEFAULT_PALETTE)
        else:
            object.__setattr__(self, 'palette', as_palette(self.palette))


class Resampler:
    """A self-registering resampling backend.

    Usage in a resampler module:

        resampler = Resampler(name='nearest', help='Nearest-neighbour sampling')

        @resampler.run
        def run(source, width, height):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable[[Raster, int, int], Raster] | None = None

    def run(self, fn: Callable[[Raster, int, int], Raster]) -> Callable[[Raster, int, int], Raster]:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, source: Raster, width: int, height: int) -> Raster:
        """Execute the backend's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Resampler {self.name} has no run function')
        return self._run_fn(source, width, height)


@dataclass
class ConversionReport:
    """Accumulates facts about one conversion for text/JSON output."""

    source: str = ''
    source_width: int = 0
    source_height: int = 0
    target_width: int = 0
    target_height: int = 0
    box: tuple[float, float] = (0, 0)
    resampler: str = ''
    palette_size: int = 0
    distinct_before: int = 0
    distinct_after: int = 0
    output_path: str | None = None
    usage: list[dict[str, Any]] = field(default_factory=list)
    transparent_pct: float = 0.0
