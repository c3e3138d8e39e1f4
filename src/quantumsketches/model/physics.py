"""
Physics Evaluator
=================
Two-slit interference with a single-slit diffraction envelope, evaluated in
screen-pixel units.

Why is this file needed?
------------------------
1. Single source of truth: The screen strip, the intensity graph and the
   profile dialog all call the same evaluator, so they can never disagree.
2. Vectorisation: Every function accepts scalars or numpy arrays. A whole
   screen row (or a 2D near-field grid) is evaluated in one call.

The model for a screen position x at distance L behind the barrier:

    Δ  = |x - slit1| - |x - slit2|                 (path difference)
    φ  = 2π Δ / λ                                  (phase)
    I₂ = cos²(φ / 2)                               (two-slit term)
    θ  = atan2(x - centre, L)
    β  = π w sin θ / λ
    E  = (sin β / β)²   if |β| > 0.01 else 1       (diffraction envelope)
    I  = clamp(I₂ · E, 0, 1)

With an observer present the fringes vanish and the screen shows two
independent Gaussian bands centred on the slit projections.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Union

import numpy as np
import numpy.typing as npt

from quantumsketches.config import VISIBLE_MIN_NM, VISIBLE_MAX_NM
from quantumsketches.model.geometry import ViewportGeometry
from quantumsketches.model.state import SimulationParameters
from quantumsketches.utils import lerp, remap

ArrayLike = Union[float, npt.NDArray[np.float64]]

# Simulated wavelength range in base px (380 nm -> 20 px, 780 nm -> 50 px)
SIM_WAVELENGTH_MIN: float = 20.0
SIM_WAVELENGTH_MAX: float = 50.0

ENVELOPE_THRESHOLD: float = 0.01

# Base-layout offsets (px at scale 1.0)
SLIT_EXIT_OFFSET: float = 18.0
OBSERVED_BAND_WIDTH: float = 40.0
SCREEN_MARGIN: float = 40.0

# Wave-field phase velocity relative to the animation clock
FIELD_TIME_FACTOR: float = 0.3

# Observer-mode particle stream
PARTICLE_COUNT: int = 15
PARTICLE_PERIOD: float = 3.0


def _result(values: npt.NDArray[np.float64]) -> ArrayLike:
    """Return a Python float for 0-d results, the array otherwise."""
    return float(values) if values.ndim == 0 else values


def simulation_wavelength(wavelength_nm: float, scale: float) -> float:
    """Map a visible wavelength onto an on-screen wavelength in px."""
    return remap(
        wavelength_nm,
        VISIBLE_MIN_NM, VISIBLE_MAX_NM,
        SIM_WAVELENGTH_MIN * scale, SIM_WAVELENGTH_MAX * scale,
    )


@dataclass(frozen=True)
class SlitSetup:
    """Scene quantities needed by the evaluator, all in screen px."""
    center_x: float
    slit1_x: float
    slit2_x: float
    slit_exit_y: float
    source_y: float
    barrier_y: float
    screen_y: float
    slit_width: float
    sim_wavelength: float
    band_width: float
    screen_left: float
    screen_right: float
    scale: float

    @classmethod
    def from_state(cls, params: SimulationParameters, geometry: ViewportGeometry) -> SlitSetup:
        s = geometry.scaled
        center = geometry.center_x
        separation = s(params.slit_separation)
        return cls(
            center_x=center,
            slit1_x=center - separation / 2,
            slit2_x=center + separation / 2,
            slit_exit_y=geometry.barrier_y + s(SLIT_EXIT_OFFSET),
            source_y=geometry.source_y,
            barrier_y=geometry.barrier_y,
            screen_y=geometry.screen_y,
            slit_width=s(params.slit_width),
            sim_wavelength=simulation_wavelength(params.wavelength, geometry.scale_factor),
            band_width=s(OBSERVED_BAND_WIDTH),
            screen_left=s(SCREEN_MARGIN),
            screen_right=geometry.sim_width - s(SCREEN_MARGIN),
            scale=geometry.scale_factor,
        )

    @property
    def screen_distance(self) -> float:
        """Perpendicular distance L between barrier and screen."""
        return self.screen_y - self.barrier_y


# -------------------------------------------------------------------------------
# Building blocks
# -------------------------------------------------------------------------------

def path_difference(
    x: ArrayLike,
    y: ArrayLike,
    slit1: tuple[float, float],
    slit2: tuple[float, float],
) -> ArrayLike:
    """Distance to slit 1 minus distance to slit 2."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    d1 = np.hypot(x - slit1[0], y - slit1[1])
    d2 = np.hypot(x - slit2[0], y - slit2[1])
    return _result(d1 - d2)


def phase(delta: ArrayLike, sim_wavelength: float) -> ArrayLike:
    return _result(2.0 * np.pi * np.asarray(delta, dtype=np.float64) / sim_wavelength)


def interference_term(phi: ArrayLike) -> ArrayLike:
    """Two-source intensity cos²(φ/2), in [0, 1]."""
    return _result(np.cos(np.asarray(phi, dtype=np.float64) / 2.0) ** 2)


def diffraction_envelope(theta: ArrayLike, slit_width: float, sim_wavelength: float) -> ArrayLike:
    """
    Single-slit envelope (sin β / β)².

    |β| <= ENVELOPE_THRESHOLD evaluates to exactly 1, which removes the 0/0
    singularity on the axis and for zero-width slits.
    """
    beta = np.pi * slit_width * np.sin(np.asarray(theta, dtype=np.float64)) / sim_wavelength
    significant = np.abs(beta) > ENVELOPE_THRESHOLD
    safe_beta = np.where(significant, beta, 1.0)
    envelope = np.where(significant, (np.sin(safe_beta) / safe_beta) ** 2, 1.0)
    return _result(envelope)


def observed_intensity(setup: SlitSetup, x: ArrayLike) -> ArrayLike:
    """Two non-interfering Gaussian bands, one behind each slit."""
    x = np.asarray(x, dtype=np.float64)
    band1 = np.exp(-(np.abs(x - setup.slit1_x) / setup.band_width) ** 2)
    band2 = np.exp(-(np.abs(x - setup.slit2_x) / setup.band_width) ** 2)
    return _result(np.clip(band1 + band2, 0.0, 1.0))


# -------------------------------------------------------------------------------
# Screen evaluation
# -------------------------------------------------------------------------------

class IntensityProfile(NamedTuple):
    x: npt.NDArray[np.float64]
    interference: npt.NDArray[np.float64]
    envelope: npt.NDArray[np.float64]
    intensity: npt.NDArray[np.float64]


def _screen_components(setup: SlitSetup, x: npt.NDArray[np.float64]) -> tuple[ArrayLike, ArrayLike]:
    slit1 = (setup.slit1_x, setup.slit_exit_y)
    slit2 = (setup.slit2_x, setup.slit_exit_y)
    delta = path_difference(x, setup.screen_y, slit1, slit2)
    term = interference_term(phase(delta, setup.sim_wavelength))
    theta = np.arctan2(x - setup.center_x, setup.screen_distance)
    envelope = diffraction_envelope(theta, setup.slit_width, setup.sim_wavelength)
    return term, envelope


def screen_intensity(setup: SlitSetup, x: ArrayLike, observed: bool = False) -> ArrayLike:
    """
    Normalised intensity on the detection screen at horizontal position x.

    Args:
        setup: Scene quantities for the current parameters and geometry.
        x: Screen x coordinate(s) in px.
        observed: If True, evaluate the particle-like (which-path) pattern.

    Returns:
        Intensity in [0, 1]; a float for scalar input, an array otherwise.
    """
    x = np.asarray(x, dtype=np.float64)
    if observed:
        return observed_intensity(setup, x)

    term, envelope = _screen_components(setup, x)
    return _result(np.clip(np.asarray(term) * np.asarray(envelope), 0.0, 1.0))


def intensity_profile(
    setup: SlitSetup,
    samples: int = 400,
    observed: bool = False,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Sample the screen between its margins; returns (x, intensity)."""
    xs = np.linspace(setup.screen_left, setup.screen_right, max(samples, 2))
    return xs, np.asarray(screen_intensity(setup, xs, observed=observed))


def profile_components(setup: SlitSetup, samples: int = 400) -> IntensityProfile:
    """Interference term, envelope and their clamped product across the screen."""
    xs = np.linspace(setup.screen_left, setup.screen_right, max(samples, 2))
    term, envelope = _screen_components(setup, xs)
    term = np.broadcast_to(term, xs.shape).astype(np.float64)
    envelope = np.broadcast_to(envelope, xs.shape).astype(np.float64)
    return IntensityProfile(
        x=xs,
        interference=term,
        envelope=envelope,
        intensity=np.clip(term * envelope, 0.0, 1.0),
    )


# -------------------------------------------------------------------------------
# Animated visualisations
# -------------------------------------------------------------------------------

def wave_field(
    setup: SlitSetup,
    xs: npt.NDArray[np.float64],
    ys: npt.NDArray[np.float64],
    t: float,
) -> npt.NDArray[np.float64]:
    """
    Instantaneous superposed amplitude of the two slit wavelets.

    Args:
        xs: Column coordinates, shape (n,).
        ys: Row coordinates, shape (m,).
        t: Animation time.

    Returns:
        Array of shape (m, n) with values in [0, 1] (0.5 = no displacement).
    """
    grid_x, grid_y = np.meshgrid(np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64))
    d1 = np.hypot(grid_x - setup.slit1_x, grid_y - setup.slit_exit_y)
    d2 = np.hypot(grid_x - setup.slit2_x, grid_y - setup.slit_exit_y)
    wave1 = np.sin(2.0 * np.pi * (d1 / setup.sim_wavelength - t * FIELD_TIME_FACTOR))
    wave2 = np.sin(2.0 * np.pi * (d2 / setup.sim_wavelength - t * FIELD_TIME_FACTOR))
    return ((wave1 + wave2) / 2.0 + 1.0) / 2.0


def particle_position(setup: SlitSetup, index: int, t: float) -> tuple[float, float]:
    """
    Position of the index-th particle of the observed stream at time t.

    Each particle leaves the source, passes through one slit (chosen from a
    time-dependent seed) and travels on to the screen with a small spread.
    """
    s = setup.scale
    seed = (t * 0.5 + index * 0.7) % 1.0
    progress = ((t + index * 0.3) % PARTICLE_PERIOD) / PARTICLE_PERIOD
    chosen_x = setup.slit1_x if seed < 0.5 else setup.slit2_x

    start_y = setup.source_y + 20 * s
    before_slit_y = setup.barrier_y - 5 * s
    after_slit_y = setup.barrier_y + 20 * s
    end_y = setup.screen_y - 5 * s

    if progress < 0.35:
        k = progress / 0.35
        return lerp(setup.center_x, chosen_x, k), lerp(start_y, before_slit_y, k)
    if progress < 0.45:
        return chosen_x, lerp(before_slit_y, after_slit_y, (progress - 0.35) / 0.1)

    k = (progress - 0.45) / 0.55
    spread = (seed - 0.5) * 30 * s * k
    return chosen_x + spread, lerp(after_slit_y, end_y, k)
