"""recolour — Resize images into a bounding box and recolour them to a fixed palette.

Public entry points:
  from_path(path, box)        decode a file, fit, resample, quantize (None if unreadable)
  from_existing(raster, box)  same pipeline for an in-memory Raster or PIL image
  quantize(raster, palette)   palette-only recolour, no resize
  plan_fit(w, h, box)         best-fit target dimensions
"""

from recolour.core.errors import (
    DecodeError,
    EmptyPalette,
    InvalidBoundingBox,
    RecolourError,
    ResampleDimensionMismatch,
)
from recolour.core.fit import plan_fit
from recolour.core.palette import DEFAULT_PALETTE, GREYSCALE_PALETTE
from recolour.core.quantize import build_quantization_map, quantize
from recolour.core.resample import resample
from recolour.core.types import TRANSPARENT, BoundingBox, Color, Palette, Raster, RecolourConfig
from recolour.pipeline import convert, convert_file, from_existing, from_path

__all__ = [
    'DEFAULT_PALETTE',
    'GREYSCALE_PALETTE',
    'TRANSPARENT',
    'BoundingBox',
    'Color',
    'DecodeError',
    'EmptyPalette',
    'InvalidBoundingBox',
    'Palette',
    'Raster',
    'RecolourConfig',
    'RecolourError',
    'ResampleDimensionMismatch',
    'build_quantization_map',
    'convert',
    'convert_file',
    'from_existing',
    'from_path',
    'plan_fit',
    'quantize',
    'resample',
]
