"""Tests for the wavelength colour mapping and palettes."""

import pytest

from quantumsketches.model.colors import (
    DARK_PALETTE, LIGHT_PALETTE, Theme, blend, palette_for, shade, wavelength_to_color,
)


class TestWavelengthToColor:
    @pytest.mark.parametrize(
        "wavelength, expected",
        [
            (470, (0, 153, 255)),
            (550, (146, 255, 0)),
            (650, (255, 0, 0)),
            (700, (255, 0, 0)),
            (740, (166, 0, 0)),
        ],
    )
    def test_known_colors(self, wavelength, expected):
        assert wavelength_to_color(wavelength) == expected

    @pytest.mark.parametrize("wavelength", [0, 300, 379, 781, 1000])
    def test_outside_visible_range_is_black(self, wavelength):
        assert wavelength_to_color(wavelength) == (0, 0, 0)

    def test_channels_stay_in_byte_range(self):
        for wavelength in range(370, 800, 3):
            rgb = wavelength_to_color(wavelength)
            assert len(rgb) == 3
            assert all(isinstance(c, int) and 0 <= c <= 255 for c in rgb)

    @pytest.mark.parametrize("boundary", [420, 440, 490, 510, 580, 645, 700])
    def test_continuous_at_band_boundaries(self, boundary):
        below = wavelength_to_color(boundary - 1e-6)
        at = wavelength_to_color(boundary)
        assert all(abs(a - b) <= 1 for a, b in zip(below, at))

    def test_edges_are_dimmer_than_centre(self):
        assert max(wavelength_to_color(385)) < max(wavelength_to_color(450))
        assert max(wavelength_to_color(775)) < max(wavelength_to_color(650))


class TestColorArithmetic:
    def test_shade_clamps(self):
        assert shade((250, 10, 0), 10) == (255, 20, 10)
        assert shade((5, 100, 200), -20) == (0, 80, 180)

    def test_blend_endpoints(self):
        a, b = (0, 0, 0), (200, 100, 50)
        assert blend(a, b, 0.0) == a
        assert blend(a, b, 1.0) == b
        assert blend(a, b, 0.5) == (100, 50, 25)
        assert blend(a, b, 7.0) == b


class TestTheme:
    @pytest.mark.parametrize(
        "raw, expected",
        [("dark", Theme.DARK), ("light", Theme.LIGHT), (" Dark ", Theme.DARK),
         ("purple", Theme.LIGHT), ("", Theme.LIGHT), (None, Theme.LIGHT), (1, Theme.LIGHT)],
    )
    def test_from_setting(self, raw, expected):
        assert Theme.from_setting(raw) is expected

    def test_palette_for(self):
        assert palette_for(Theme.LIGHT) is LIGHT_PALETTE
        assert palette_for(Theme.DARK) is DARK_PALETTE
        assert DARK_PALETTE.background == (25, 30, 40)
        assert LIGHT_PALETTE.background == (248, 250, 252)
