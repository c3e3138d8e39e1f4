"""
Superposition Canvas
====================
A single spin in the state α|↑⟩ + β|↓⟩, with a probability bar chart beside it.

Unmeasured, the particle is drawn as two pulsing probability clouds whose
size and opacity follow |α|² and |β|². After a measurement only the observed
state remains, with a short white flash and an arrow showing the spin.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QWidget

from quantumsketches.model.colors import Palette, blend
from quantumsketches.model.geometry import SUPERPOSITION_LAYOUT, ViewportGeometry, fit_to_container
from quantumsketches.model.state import Spin, SuperpositionState
from quantumsketches.utils import remap
from quantumsketches.view.widgets.sketch_canvas import SketchCanvas, qcolor

logger = logging.getLogger(__name__)

CLOUD_OFFSET = 60
CLOUD_SIZE = 120
FLUCTUATION_COUNT = 20
BAR_WIDTH = 80


class SuperpositionCanvas(SketchCanvas):
    def __init__(self, state: SuperpositionState, palette: Palette, parent: Optional[QWidget] = None) -> None:
        super().__init__(palette, parent)
        self.state = state

    def compute_geometry(self, viewport_width: int, viewport_height: int, container_width: int) -> ViewportGeometry:
        return fit_to_container(container_width, SUPERPOSITION_LAYOUT)

    def advance(self, frames: float) -> None:
        self.state.advance(frames)

    def draw(self, painter: QPainter) -> None:
        cx = self.scene_geometry.center_x
        cy = self.scene_geometry.sim_height / 2
        if self.state.measured:
            self._draw_collapsed(painter, cx, cy)
        else:
            self._draw_superposition(painter, cx, cy)
        self._draw_state_labels(painter)
        self._draw_probability_graph(painter)
        self._draw_title(painter)

    # ------------------------------------------------------------------------------
    # Particle
    # ------------------------------------------------------------------------------

    def _draw_superposition(self, painter: QPainter, cx: float, cy: float) -> None:
        s, t = self.s, self.state.time
        up, down = self.state.probabilities

        # Clouds are 1.5x wider than tall
        for prob, color, offset, pulse_phase in (
            (up, self.colors.state_up, -CLOUD_OFFSET, 0.0),
            (down, self.colors.state_down, CLOUD_OFFSET, math.pi),
        ):
            pulse = math.sin(t * 2 + pulse_phase) * 0.15 + 1
            size = s(CLOUD_SIZE) * prob * pulse
            self.glow(painter, cx, cy + s(offset), size * 1.5, s(12), color, 180 * prob, aspect=2 / 3)

        core = blend(self.colors.state_up, self.colors.state_down, (math.sin(t * 3) + 1) / 2)
        self.glow(painter, cx, cy, s(40), s(5), core, 255, 100)

        for i in range(FLUCTUATION_COUNT):
            angle = t * 0.5 + i * 2 * math.pi / FLUCTUATION_COUNT
            radius = s(80) + math.sin(t * 2 + i) * s(20)
            color = self.colors.state_up if i % 2 == 0 else self.colors.state_down
            self.fill_ellipse(
                painter, cx + math.cos(angle) * radius, cy + math.sin(angle) * radius * 0.6,
                s(6), s(6), qcolor(color, 100),
            )

        self.draw_text(painter, "|ψ⟩ = α|↑⟩ + β|↓⟩", cx, cy + s(160), s(24), self.colors.text, valign="center")

    def _draw_collapsed(self, painter: QPainter, cx: float, cy: float) -> None:
        s = self.s
        particle = self.state.particle
        if particle.decay > 0.5:
            flash = remap(particle.decay, 0.5, 1.0, 0, 200)
            self.fill_ellipse(painter, cx, cy, s(300), s(300), qcolor((255, 255, 255), flash))

        color = self.colors.state_up if particle.spin is Spin.UP else self.colors.state_down
        size = s(100) * (math.sin(self.state.time * 3) * 0.1 + 1)
        self.glow(painter, cx, cy, size, s(6), color, 255, 50)
        self.fill_ellipse(painter, cx, cy, s(20), s(20), qcolor((255, 255, 240)))

        painter.setPen(self.line_pen(color, 255, s(4)))
        painter.setBrush(Qt.NoBrush)
        up = particle.spin is Spin.UP
        self.arrow(painter, cx, cy - s(60) if up else cy + s(60), s(50), s(15), s(20), up)

        text = self.colors.text
        self.draw_text(painter, particle.spin.ket, cx, cy + s(160), s(28), text, valign="center")
        self.draw_text(painter, "Wavefunction collapsed!", cx, cy + s(190), s(14), text, 180, valign="center")

    # ------------------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------------------

    def _draw_state_labels(self, painter: QPainter) -> None:
        s = self.s
        self.draw_text(painter, "Spin Up |↑⟩", s(100), s(60), s(14), self.colors.state_up, valign="center")
        self.draw_text(painter, "Spin Down |↓⟩", s(100), s(85), s(14), self.colors.state_down, valign="center")

    def _draw_probability_graph(self, painter: QPainter) -> None:
        s, g = self.s, self.scene_geometry
        left = g.graph_x
        right = g.canvas_width - s(40)
        top = s(80)
        bottom = g.canvas_height - s(80)
        if right <= left or bottom <= top:
            return
        mid = (left + right) / 2
        text = self.colors.text

        self.panel_background(
            painter, QRectF(left - s(10), top - s(30), right - left + s(20), bottom - top + s(60)), text, 50,
        )
        self.draw_text(painter, "Probability Distribution", mid, top - s(10), s(12), text)

        bar_width = s(BAR_WIDTH)
        max_height = max(bottom - top - s(60), 0)
        if self.state.measured:
            spin = self.state.particle.spin
            fractions = (1.0 if spin is Spin.UP else 0.0, 1.0 if spin is Spin.DOWN else 0.0)
        else:
            fractions = self.state.probabilities

        bars = (
            (fractions[0], mid - bar_width - s(20), self.colors.state_up, "|↑⟩"),
            (fractions[1], mid + s(20), self.colors.state_down, "|↓⟩"),
        )
        for fraction, x, color, label in bars:
            height = max_height * fraction
            painter.setPen(self.line_pen(text, 50))
            painter.setBrush(qcolor(color))
            painter.drawRoundedRect(QRectF(x, bottom - s(30) - height, bar_width, height), s(4), s(4))
            label_x = x + bar_width / 2
            self.draw_text(painter, label, label_x, bottom - s(10), s(11), text)
            self.draw_text(painter, f"{round(fraction * 100)}%", label_x, bottom - s(40) - height, s(12), text)

        status = "State: Measured" if self.state.measured else "State: Superposition"
        self.draw_text(painter, status, mid, top + s(20), s(11), text, 180)

    def _draw_title(self, painter: QPainter) -> None:
        s, text = self.s, self.colors.text
        self.draw_text(painter, "Quantum Superposition", s(25), s(28), s(12), text, align="left")
        self.draw_text(
            painter, "A particle exists in multiple states until measured",
            s(25), s(46), s(10), text, 180, align="left",
        )
