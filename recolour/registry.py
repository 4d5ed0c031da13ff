"""Resampler registry.

Backends live in recolour/resamplers/, one module each, exposing a module-level
`resampler = Resampler(...)`. discover() imports them all on first use; a
host application can add its own engine-specific backend with register().

Frozen PyInstaller binaries return nothing from pkgutil.iter_modules, so the
known module names below are imported instead (resamplers/__init__.py keeps
them bundled).

A host backend registered before the first lookup wins over a built-in
backend of the same name.
"""

import importlib
import pkgutil

from recolour.core.types import Resampler

_registry: dict[str, Resampler] = {}
_discovered = False

# Known resampler module names, used when frozen binaries hide the package
_RESAMPLER_MODULES = [
    'bilinear',
    'nearest',
    'pillow',
]


def register(impl: Resampler, replace: bool = False) -> Resampler:
    """Add a backend under impl.name. Raises ValueError if the name is taken."""
    if not isinstance(impl, Resampler):
        raise TypeError(f'expected a Resampler, got {type(impl).__name__}')
    existing = _registry.get(impl.name)
    if existing is not None and existing is not impl and not replace:
        raise ValueError(f'resampler {impl.name!r} is already registered')
    _registry[impl.name] = impl
    return impl


def unregister(name: str) -> None:
    _registry.pop(name, None)


def discover() -> dict[str, Resampler]:
    """Import every backend module once and return the registry."""
    global _discovered
    if _discovered:
        return _registry

    import recolour.resamplers as pkg

    modnames = [name for _finder, name, _ispkg in pkgutil.iter_modules(pkg.__path__) if not name.startswith('_')]
    for modname in modnames or _RESAMPLER_MODULES:
        module = importlib.import_module(f'recolour.resamplers.{modname}')
        impl = getattr(module, 'resampler', None)
        # A backend the host registered first keeps its name
        if isinstance(impl, Resampler) and impl.name not in _registry:
            register(impl)

    _discovered = True
    return _registry


def get(name: str) -> Resampler:
    """Get a resampler by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown resampler: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_resamplers() -> dict[str, Resampler]:
    """Return all registered resamplers."""
    return discover()
