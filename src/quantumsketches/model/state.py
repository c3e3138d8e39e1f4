"""
Simulation State (Data Model)
=============================
This module defines the mutable state of the three sketches.

Why is this file needed?
------------------------
1. State Management: Slider values, the animation clock and the spin
   measurement outcomes live in explicit dataclasses instead of module globals.
2. Decoupling: Control panels write to these objects; canvases only read them
   (apart from advancing the clock once per frame).
3. Invariants: Setters clamp every numeric input to the configured slider
   range, and the spin state machine keeps an entangled pair anti-correlated.

Classes:
    SimulationParameters: Wavelength, slit geometry, speed and time of the double slit.
    DoubleSlitState: Parameters plus the observer toggle.
    Spin, ParticleState: One measurable spin-1/2 particle.
    SuperpositionState: A single weighted superposition.
    EntangledPair: Two anti-correlated particles.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

import numpy as np

from quantumsketches.config import (
    WAVELENGTH, SLIT_SEPARATION, SLIT_WIDTH, WAVE_SPEED, DISTANCE,
    DOUBLE_SLIT_TIME_STEP, QUANTUM_TIME_STEP,
    OBSERVER_DECAY, MEASUREMENT_DECAY, ENTANGLEMENT_DECAY, PARTNER_FLASH,
)
from quantumsketches.utils import clamp

logger = logging.getLogger(__name__)


def _decayed(value: float, rate: float, frames: float) -> float:
    return max(0.0, value - rate * frames)


# -------------------------------------------------------------------------------
# Double slit
# -------------------------------------------------------------------------------

@dataclass
class SimulationParameters:
    wavelength: float = WAVELENGTH.default  # nm
    slit_separation: float = SLIT_SEPARATION.default  # base px
    slit_width: float = SLIT_WIDTH.default  # base px
    wave_speed: float = WAVE_SPEED.default
    time: float = 0.0

    def __post_init__(self) -> None:
        self.set_wavelength(self.wavelength)
        self.set_slit_separation(self.slit_separation)
        self.set_slit_width(self.slit_width)
        self.set_wave_speed(self.wave_speed)

    def set_wavelength(self, value: float) -> None:
        self.wavelength = WAVELENGTH.clamp(value)

    def set_slit_separation(self, value: float) -> None:
        self.slit_separation = SLIT_SEPARATION.clamp(value)

    def set_slit_width(self, value: float) -> None:
        self.slit_width = SLIT_WIDTH.clamp(value)

    def set_wave_speed(self, value: float) -> None:
        self.wave_speed = WAVE_SPEED.clamp(value)

    def advance(self, frames: float = 1.0) -> None:
        """Advance the animation clock by the given number of 60 Hz frames."""
        self.time += DOUBLE_SLIT_TIME_STEP * self.wave_speed * frames


@dataclass
class DoubleSlitState:
    params: SimulationParameters = field(default_factory=SimulationParameters)
    observer_active: bool = False
    observer_decay: float = 0.0

    def toggle_observer(self) -> bool:
        """Switch between wave (unobserved) and particle (observed) behaviour."""
        self.observer_active = not self.observer_active
        self.observer_decay = 1.0
        logger.info(f"Observer {'enabled' if self.observer_active else 'disabled'}.")
        return self.observer_active

    def advance(self, frames: float = 1.0) -> None:
        self.params.advance(frames)
        self.observer_decay = _decayed(self.observer_decay, OBSERVER_DECAY, frames)


# -------------------------------------------------------------------------------
# Spin particles
# -------------------------------------------------------------------------------

class Spin(IntEnum):
    UP = 0
    DOWN = 1

    def opposite(self) -> Spin:
        return Spin.DOWN if self is Spin.UP else Spin.UP

    @property
    def arrow(self) -> str:
        return "↑" if self is Spin.UP else "↓"

    @property
    def ket(self) -> str:
        return f"|{self.arrow}⟩"


@dataclass
class ParticleState:
    measured: bool = False
    spin: Spin = Spin.UP
    decay: float = 0.0  # measurement flash, 1 -> 0

    def collapse(self, spin: Spin, flash: float = 1.0) -> None:
        self.measured = True
        self.spin = spin
        self.decay = flash

    def reset(self) -> None:
        """Return to the unmeasured state in place."""
        self.measured = False
        self.spin = Spin.UP
        self.decay = 0.0

    def advance(self, frames: float = 1.0) -> None:
        self.decay = _decayed(self.decay, MEASUREMENT_DECAY, frames)


@dataclass
class SuperpositionState:
    """A single particle in the state α|↑⟩ + β|↓⟩ with |α|² = prob_up."""
    prob_up: float = 0.5
    particle: ParticleState = field(default_factory=ParticleState)
    time: float = 0.0
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.prob_up = clamp(self.prob_up, 0.0, 1.0)

    @property
    def prob_down(self) -> float:
        return 1.0 - self.prob_up

    @property
    def probabilities(self) -> tuple[float, float]:
        return self.prob_up, self.prob_down

    @property
    def measured(self) -> bool:
        return self.particle.measured

    def set_probability(self, prob_up: float) -> None:
        """Change the spin-up weight; an unmeasured particle is re-prepared."""
        self.prob_up = clamp(prob_up, 0.0, 1.0)
        if not self.particle.measured:
            self.reset()

    def measure(self) -> Optional[Spin]:
        """
        Collapse the superposition.

        Returns:
            The measured spin, or None if the particle was already measured.
        """
        if self.particle.measured:
            logger.debug("Measurement ignored: particle already collapsed.")
            return None

        spin = Spin.UP if self.rng.random() < self.prob_up else Spin.DOWN
        self.particle.collapse(spin)
        logger.info(f"Superposition collapsed to {spin.ket} (P(up)={self.prob_up:.2f}).")
        return spin

    def reset(self) -> None:
        self.particle.reset()

    def advance(self, frames: float = 1.0) -> None:
        self.time += QUANTUM_TIME_STEP * frames
        self.particle.advance(frames)


@dataclass
class EntangledPair:
    """Two spins prepared in the singlet state |↑↓⟩ - |↓↑⟩."""
    distance: float = DISTANCE.default  # base px between the particles
    generated: bool = False
    a: ParticleState = field(default_factory=ParticleState)
    b: ParticleState = field(default_factory=ParticleState)
    entanglement_decay: float = 0.0
    time: float = 0.0
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.set_distance(self.distance)

    def set_distance(self, value: float) -> None:
        self.distance = DISTANCE.clamp(value)

    def particle(self, label: str) -> ParticleState:
        if label == "A":
            return self.a
        if label == "B":
            return self.b
        raise ValueError(f"Unknown particle '{label}', expected 'A' or 'B'.")

    def partner(self, label: str) -> ParticleState:
        return self.particle("B" if label == "A" else "A" if label == "B" else label)

    @property
    def collapsed(self) -> bool:
        return self.a.measured and self.b.measured

    def can_measure(self, label: str) -> bool:
        return self.generated and not self.particle(label).measured

    def generate(self) -> None:
        """Prepare a fresh entangled pair; clears any previous measurement."""
        self.generated = True
        self.a.reset()
        self.b.reset()
        self.entanglement_decay = 1.0
        logger.info("Entangled pair generated.")

    def measure(self, label: str) -> bool:
        """
        Measure particle 'A' or 'B'.

        The first measurement draws the outcome uniformly and collapses the
        partner to the opposite spin in the same call.

        Returns:
            True if a measurement happened, False if it was a no-op (no pair,
            or the particle was already measured).
        """
        measured = self.particle(label)
        partner = self.partner(label)

        if not self.generated or measured.measured:
            logger.debug(f"Measurement of {label} ignored (generated={self.generated}).")
            return False

        spin = Spin.UP if self.rng.random() < 0.5 else Spin.DOWN

        measured.collapse(spin, flash=1.0)
        partner.collapse(spin.opposite(), flash=PARTNER_FLASH)
        logger.info(f"Measured {label}: {spin.ket}; partner collapsed to {spin.opposite().ket}.")
        return True

    def advance(self, frames: float = 1.0) -> None:
        self.time += QUANTUM_TIME_STEP * frames
        self.a.advance(frames)
        self.b.advance(frames)
        self.entanglement_decay = _decayed(self.entanglement_decay, ENTANGLEMENT_DECAY, frames)
