"""Auto-discovery of resampler backends.

Every .py file in this package that defines a `resampler` object is
auto-registered by recolour.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the backend files at runtime.
"""

# PyInstaller hidden imports: keep in sync with the resampler modules
import recolour.resamplers.bilinear as _bilinear  # noqa: F401
import recolour.resamplers.nearest as _nearest  # noqa: F401
import recolour.resamplers.pillow as _pillow  # noqa: F401
