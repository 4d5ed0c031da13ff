"""Fixed output palettes and colour helpers.

DEFAULT_PALETTE is the 32-colour game palette: 8 greys from black to white,
then 4 shades each of red, yellow, green, teal, blue and purple. Adding or
removing entries changes the colour depth of every converted image.
"""

from recolour.core.types import Palette

WEIGHT_AGAINST_GREY = 1.5  # raise for palettes with few non-grey colours
ALPHA_THRESHOLD = 128

_SHADES = (53, 78, 103, 128)

_GREYS: dict[str, tuple[int, int, int]] = {
    'grey0': (0, 0, 0),
    'grey1': (36, 36, 36),
    'grey2': (73, 73, 73),
    'grey3': (109, 109, 109),
    'grey4': (146, 146, 146),
    'grey5': (182, 182, 182),
    'grey6': (219, 219, 219),
    'grey7': (255, 255, 255),
}

# Channel masks per colour family: which of r, g, b carry the shade
_FAMILIES: dict[str, tuple[int, int, int]] = {
    'red': (1, 0, 0),
    'yellow': (1, 1, 0),
    'green': (0, 1, 0),
    'teal': (0, 1, 1),
    'blue': (0, 0, 1),
    'purple': (1, 0, 1),
}


def _game_colours() -> dict[str, tuple[int, int, int]]:
    colours = dict(_GREYS)
    for family, (mr, mg, mb) in _FAMILIES.items():
        for i, shade in enumerate(_SHADES, start=1):
            colours[f'{family}{i}'] = (shade * mr, shade * mg, shade * mb)
    return colours


GAME_COLOURS = _game_colours()

DEFAULT_PALETTE = Palette([(*rgb, 255) for rgb in GAME_COLOURS.values()], names=GAME_COLOURS.keys())
GREYSCALE_PALETTE = Palette([(*rgb, 255) for rgb in _GREYS.values()], names=_GREYS.keys())

PALETTES: dict[str, Palette] = {
    'default': DEFAULT_PALETTE,
    'greyscale': GREYSCALE_PALETTE,
}


def get_palette(name: str) -> Palette:
    """Get a built-in palette by name."""
    if name not in PALETTES:
        raise KeyError(f'Unknown palette: {name}. Available: {", ".join(sorted(PALETTES))}')
    return PALETTES[name]


def hex_to_rgb(hex_str: str) -> tuple[int, int, int]:
    """Convert '#rrggbb' or '#rgb' to (r, g, b). Raises ValueError on bad input."""
    h = hex_str.strip().lstrip('#')
    if len(h) == 3:
        h = ''.join(c * 2 for c in h)
    if len(h) != 6:
        raise ValueError(f'Invalid hex colour: {hex_str!r}')
    try:
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    except ValueError as e:
        raise ValueError(f'Invalid hex colour: {hex_str!r}') from e


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'#{r:02x}{g:02x}{b:02x}'


def rgb_distance(a: tuple[int, int, int], b: tuple[int, int, int]) -> float:
    """Euclidean distance in RGB space. Plain ints, so no uint8 wraparound."""
    dr = int(a[0]) - int(b[0])
    dg = int(a[1]) - int(b[1])
    db = int(a[2]) - int(b[2])
    return (dr * dr + dg * dg + db * db) ** 0.5
