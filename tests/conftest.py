"""Pytest configuration and shared fixtures."""

import os
import sys
from pathlib import Path

import pytest

# Widgets are rendered without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add the src directory to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from quantumsketches.model.geometry import calculate_dimensions  # noqa: E402
from quantumsketches.model.physics import SlitSetup  # noqa: E402
from quantumsketches.model.state import SimulationParameters  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """Provide the single QApplication instance for widget tests."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def geometry():
    """Geometry of a typical 1400x900 desktop window."""
    return calculate_dimensions(1400, 900)


@pytest.fixture
def default_setup(geometry):
    """Slit setup for the default parameters (550 nm, d=80, w=15)."""
    return SlitSetup.from_state(SimulationParameters(), geometry)
