"""
Color Model
===========
Wavelength → RGB conversion and the light/dark palettes shared by all sketches.

Functions:
    wavelength_to_color: Visible wavelength (nm) to an 8-bit RGB triple.
    palette_for: Resolve a Theme into its Palette.
    shade, blend: Channel-clamped colour arithmetic used by the renderers.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from quantumsketches.utils import clamp

RGB = tuple[int, int, int]


def _band_rgb(wl: float) -> tuple[float, float, float]:
    # violet -> blue -> cyan -> green -> yellow -> red
    if 380 <= wl < 440:
        return -(wl - 440) / (440 - 380), 0.0, 1.0
    if 440 <= wl < 490:
        return 0.0, (wl - 440) / (490 - 440), 1.0
    if 490 <= wl < 510:
        return 0.0, 1.0, -(wl - 510) / (510 - 490)
    if 510 <= wl < 580:
        return (wl - 510) / (580 - 510), 1.0, 0.0
    if 580 <= wl < 645:
        return 1.0, -(wl - 645) / (645 - 580), 0.0
    if 645 <= wl <= 780:
        return 1.0, 0.0, 0.0
    return 0.0, 0.0, 0.0


def _intensity_factor(wl: float) -> float:
    """Brightness falloff towards the ultraviolet and infrared edges."""
    if 380 <= wl < 420:
        return 0.3 + 0.7 * (wl - 380) / (420 - 380)
    if 420 <= wl <= 700:
        return 1.0
    if 700 < wl <= 780:
        return 0.3 + 0.7 * (780 - wl) / (780 - 700)
    return 0.0


def wavelength_to_color(wavelength: float) -> RGB:
    """
    Convert a wavelength in nanometres to an approximate display colour.

    Args:
        wavelength: Wavelength in nm. Values outside 380-780 map to black.

    Returns:
        (r, g, b) with every channel in [0, 255].
    """
    r, g, b = _band_rgb(wavelength)
    factor = _intensity_factor(wavelength)
    return tuple(int(clamp(round(c * factor * 255), 0, 255)) for c in (r, g, b))  # type: ignore[return-value]


def shade(rgb: RGB, delta: int) -> RGB:
    """Lighten (delta > 0) or darken (delta < 0) every channel."""
    return tuple(int(clamp(c + delta, 0, 255)) for c in rgb)  # type: ignore[return-value]


def blend(a: RGB, b: RGB, t: float) -> RGB:
    """Interpolate from a (t=0) to b (t=1); channels are clamped."""
    t = clamp(t, 0.0, 1.0)
    return tuple(int(clamp(round(ca + (cb - ca) * t), 0, 255)) for ca, cb in zip(a, b))  # type: ignore[return-value]


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_setting(cls, value: Any) -> Theme:
        """Resolve a persisted value; anything unknown falls back to LIGHT."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.LIGHT


@dataclass(frozen=True)
class Palette:
    background: RGB
    barrier: RGB
    screen: RGB
    text: RGB
    accent: RGB
    label_background: RGB
    label_border: RGB
    observer: RGB
    particle_a: RGB
    particle_b: RGB
    entanglement: RGB
    state_up: RGB
    state_down: RGB


LIGHT_PALETTE = Palette(
    background=(248, 250, 252),
    barrier=(120, 130, 150),
    screen=(150, 160, 180),
    text=(40, 40, 50),
    accent=(0, 0, 0),
    label_background=(255, 255, 255),
    label_border=(80, 80, 80),
    observer=(200, 150, 50),
    particle_a=(59, 130, 246),
    particle_b=(236, 72, 153),
    entanglement=(139, 92, 246),
    state_up=(50, 120, 220),
    state_down=(220, 80, 50),
)

DARK_PALETTE = Palette(
    background=(25, 30, 40),
    barrier=(100, 110, 130),
    screen=(80, 90, 110),
    text=(220, 220, 220),
    accent=(255, 255, 255),
    label_background=(35, 40, 55),
    label_border=(180, 180, 180),
    observer=(255, 200, 100),
    particle_a=(96, 165, 250),
    particle_b=(244, 114, 182),
    entanglement=(167, 139, 250),
    state_up=(100, 180, 255),
    state_down=(255, 130, 100),
)

_PALETTES: dict[Theme, Palette] = {
    Theme.LIGHT: LIGHT_PALETTE,
    Theme.DARK: DARK_PALETTE,
}


def palette_for(theme: Theme) -> Palette:
    return _PALETTES[theme]
