"""Exception types for recolour.

Everything raised deliberately by the library derives from RecolourError.
A missing or unreadable source file is not an error: from_path returns None.
"""


class RecolourError(Exception):
    """Base class for recolour failures."""


class InvalidBoundingBox(RecolourError):
    """A bounding box dimension is zero, negative or not finite."""


class EmptyPalette(RecolourError):
    """A palette was built or used with no colours."""


class ResampleDimensionMismatch(RecolourError):
    """A resampler returned a raster that is not the requested size."""


class DecodeError(RecolourError):
    """Bytes could not be decoded into an image."""
