"""Tests for recolour.core.palette — built-in palettes and colour helpers."""

import numpy as np
import pytest
from recolour.core.errors import EmptyPalette
from recolour.core.palette import (
    DEFAULT_PALETTE,
    GREYSCALE_PALETTE,
    PALETTES,
    get_palette,
    hex_to_rgb,
    rgb_distance,
    rgb_to_hex,
)
from recolour.core.types import Color, Palette


class TestHexToRgb:
    def test_white(self):
        assert hex_to_rgb('#ffffff') == (255, 255, 255)

    def test_uppercase(self):
        assert hex_to_rgb('#FF8000') == (255, 128, 0)

    def test_short_hex(self):
        assert hex_to_rgb('#fff') == (255, 255, 255)

    def test_no_hash(self):
        assert hex_to_rgb('ff0000') == (255, 0, 0)

    def test_invalid_raises(self):
        for bad in ('invalid', '#ff', '#ffffffff', '#gg0000'):
            with pytest.raises(ValueError):
                hex_to_rgb(bad)

    def test_rgb_to_hex(self):
        assert rgb_to_hex(0, 53, 128) == '#003580'


class TestRgbDistance:
    def test_same_colour(self):
        assert rgb_distance((255, 255, 255), (255, 255, 255)) == 0.0

    def test_black_white(self):
        d = rgb_distance((0, 0, 0), (255, 255, 255))
        assert d == pytest.approx(441.67, abs=0.01)

    def test_symmetry(self):
        a = (100, 50, 200)
        b = (120, 60, 180)
        assert rgb_distance(a, b) == rgb_distance(b, a)

    def test_uses_int_not_uint8(self):
        """(0 - 200) must not wrap when channels arrive as numpy uint8."""
        a = tuple(np.array([0, 0, 0], dtype=np.uint8))
        b = tuple(np.array([200, 200, 200], dtype=np.uint8))
        assert rgb_distance(a, b) > 300


class TestDefaultPalette:
    def test_has_32_colours(self):
        assert len(DEFAULT_PALETTE) == 32

    def test_greys_first_black_to_white(self):
        greys = [c.r for c in DEFAULT_PALETTE.colours[:8]]
        assert greys == [0, 36, 73, 109, 146, 182, 219, 255]
        assert all(c.is_grey for c in DEFAULT_PALETTE.colours[:8])

    def test_all_opaque(self):
        assert all(c.a == 255 for c in DEFAULT_PALETTE)

    def test_families(self):
        assert DEFAULT_PALETTE[8] == Color(53, 0, 0, 255)
        assert DEFAULT_PALETTE[11] == Color(128, 0, 0, 255)
        assert DEFAULT_PALETTE[15] == Color(128, 128, 0, 255)
        assert DEFAULT_PALETTE[21] == Color(0, 78, 78, 255)
        assert DEFAULT_PALETTE[31] == Color(128, 0, 128, 255)

    def test_names(self):
        assert DEFAULT_PALETTE.name_of(0) == 'grey0'
        assert DEFAULT_PALETTE.name_of(11) == 'red4'
        assert DEFAULT_PALETTE.name_of(28) == 'purple1'
        assert len(set(DEFAULT_PALETTE.names)) == 32

    def test_only_first_eight_are_grey(self):
        assert DEFAULT_PALETTE.grey_mask.tolist() == [True] * 8 + [False] * 24

    def test_greyscale_is_default_greys(self):
        assert GREYSCALE_PALETTE.colours == DEFAULT_PALETTE.colours[:8]


class TestPaletteLookup:
    def test_known_names(self):
        assert set(PALETTES) == {'default', 'greyscale'}
        assert get_palette('greyscale') is GREYSCALE_PALETTE

    def test_unknown_raises_keyerror(self):
        with pytest.raises(KeyError, match='Available: default, greyscale'):
            get_palette('cga')


class TestPaletteType:
    def test_empty_raises(self):
        with pytest.raises(EmptyPalette):
            Palette([])

    def test_from_hex_keeps_order(self):
        p = Palette.from_hex({'ink': '#000000', 'paper': '#ffffff', 'accent': '#ff0000'})
        assert p.names == ('ink', 'paper', 'accent')
        assert p.colours == (Color(0, 0, 0), Color(255, 255, 255), Color(255, 0, 0))

    def test_names_must_match_colours(self):
        with pytest.raises(ValueError):
            Palette([(0, 0, 0, 255)], names=['a', 'b'])

    @pytest.mark.parametrize('colour', [(300, 0, 0), (0, -1, 0), (0, 0, 0, 256), (1.5, 0, 0)])
    def test_out_of_range_channels_rejected(self, colour):
        with pytest.raises(ValueError, match='0..255'):
            Palette([(0, 0, 0, 255), colour])

    def test_numpy_channels_accepted(self):
        p = Palette([np.array([1, 2, 3, 255], dtype=np.uint8)])
        assert p[0] == Color(1, 2, 3, 255)
        assert type(p[0].r) is int

    def test_default_alpha_is_opaque(self):
        assert Palette([(1, 2, 3)])[0] == Color(1, 2, 3, 255)

    def test_array_is_read_only(self):
        with pytest.raises(ValueError):
            DEFAULT_PALETTE.array[0, 0] = 1

    def test_membership(self):
        assert Color(0, 0, 128, 255) in DEFAULT_PALETTE
        assert Color(0, 0, 127, 255) not in DEFAULT_PALETTE
