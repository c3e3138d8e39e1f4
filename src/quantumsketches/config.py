"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (slider ranges, frame steps, decay
   rates) scattered throughout the views and the model.
2. Consistency: The control panels and the state setters clamp against the
   same ranges, so a value can never drift outside what the sliders allow.

Exports:
    SliderSpec: Range/default record for one numeric control.
    WAVELENGTH, SLIT_SEPARATION, SLIT_WIDTH, WAVE_SPEED, PROBABILITY, DISTANCE
    THEME_SETTINGS_KEY (str): QSettings key of the persisted theme.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SliderSpec:
    """Numeric range of one input control, in the units shown to the user."""
    minimum: int
    maximum: int
    default: int
    step: int = 1

    def clamp(self, value: float) -> float:
        return min(max(value, self.minimum), self.maximum)


# --- Double slit ---
WAVELENGTH = SliderSpec(minimum=380, maximum=780, default=550)  # nm
SLIT_SEPARATION = SliderSpec(minimum=0, maximum=200, default=80)  # base px
SLIT_WIDTH = SliderSpec(minimum=0, maximum=40, default=15)  # base px
WAVE_SPEED = SliderSpec(minimum=1, maximum=10, default=5)

# --- Superposition ---
PROBABILITY = SliderSpec(minimum=0, maximum=100, default=50)  # percent spin up

# --- Entanglement ---
DISTANCE = SliderSpec(minimum=100, maximum=500, default=300, step=10)  # base px

# Visible range used by the colour mapping (nm)
VISIBLE_MIN_NM: float = 380.0
VISIBLE_MAX_NM: float = 780.0

# Per-frame increments (one frame = one 60 Hz tick)
DOUBLE_SLIT_TIME_STEP: float = 0.05  # multiplied by wave speed
QUANTUM_TIME_STEP: float = 0.02

OBSERVER_DECAY: float = 0.03
MEASUREMENT_DECAY: float = 0.02
ENTANGLEMENT_DECAY: float = 0.015
PARTNER_FLASH: float = 0.8

# Animation loop
TARGET_FPS: int = 60
MAX_FRAMES_PER_TICK: float = 4.0

# Window
DEFAULT_WINDOW_SIZE: tuple[int, int] = (1400, 900)

# Persisted settings
THEME_SETTINGS_KEY: str = "ui/theme"
