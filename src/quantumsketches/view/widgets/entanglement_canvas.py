"""
Entanglement Canvas
===================
Two spins joined by a wavy entanglement link, with a correlation chart below.

Why is this file needed?
------------------------
1. Visual state machine: Not generated (dashed placeholders), entangled
   (pulsing clouds, flowing link particles) and collapsed (solid particles
   with spin arrows, anti-correlated bars).
2. Link animation: The particles flowing along the link are purely visual,
   so they live here as numpy arrays instead of in the model.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QPainter, QPainterPath
from PySide6.QtWidgets import QWidget

from quantumsketches.model.colors import Palette, RGB
from quantumsketches.model.geometry import ENTANGLEMENT_LAYOUT, ViewportGeometry, fit_to_container
from quantumsketches.model.state import EntangledPair, ParticleState, Spin
from quantumsketches.utils import remap
from quantumsketches.view.widgets.sketch_canvas import SketchCanvas, qcolor

logger = logging.getLogger(__name__)

LINK_PARTICLE_COUNT = 30
LINK_SAMPLES = 100
LINK_AMPLITUDE = 20

WHITE: RGB = (255, 255, 255)


class EntanglementCanvas(SketchCanvas):
    def __init__(
        self,
        pair: EntangledPair,
        palette: Palette,
        parent: Optional[QWidget] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        super().__init__(palette, parent)
        self.pair = pair

        rng = rng if rng is not None else np.random.default_rng()
        self.link_t = rng.uniform(0.0, 1.0, LINK_PARTICLE_COUNT)
        self.link_offset = rng.uniform(-1.0, 1.0, LINK_PARTICLE_COUNT)
        self.link_speed = rng.uniform(0.002, 0.008, LINK_PARTICLE_COUNT)
        self.link_size = rng.uniform(2.0, 5.0, LINK_PARTICLE_COUNT)

    def compute_geometry(self, viewport_width: int, viewport_height: int, container_width: int) -> ViewportGeometry:
        return fit_to_container(container_width, ENTANGLEMENT_LAYOUT)

    def advance(self, frames: float) -> None:
        self.pair.advance(frames)
        if self.pair.generated and not self.pair.collapsed:
            self.link_t = self.link_t + self.link_speed * frames
            self.link_t[self.link_t > 1.0] = 0.0

    def particle_positions(self) -> tuple[QPointF, QPointF]:
        """Centres of A and B; they follow the distance slider immediately."""
        g = self.scene_geometry
        half = self.s(self.pair.distance / 2)
        y = g.graph_y / 2
        return QPointF(g.canvas_width / 2 - half, y), QPointF(g.canvas_width / 2 + half, y)

    def draw(self, painter: QPainter) -> None:
        pos_a, pos_b = self.particle_positions()
        if self.pair.generated:
            self._draw_link(painter, pos_a, pos_b)
            self._draw_particle(painter, pos_a, "A", self.pair.a, self.colors.particle_a)
            self._draw_particle(painter, pos_b, "B", self.pair.b, self.colors.particle_b)
        else:
            self._draw_placeholder(painter, pos_a, "A")
            self._draw_placeholder(painter, pos_b, "B")
        self._draw_state_banner(painter)
        self._draw_correlation_graph(painter)
        self.draw_text(painter, "Quantum Entanglement", self.s(25), self.s(28), self.s(12), self.colors.text, align="left")

    # ------------------------------------------------------------------------------
    # Link
    # ------------------------------------------------------------------------------

    def _draw_link(self, painter: QPainter, pos_a: QPointF, pos_b: QPointF) -> None:
        color = self.colors.entanglement
        collapsed = self.pair.collapsed
        t = self.pair.time
        amplitude = self.s(LINK_AMPLITUDE) * (1 - self.pair.entanglement_decay)

        u = np.linspace(0.0, 1.0, LINK_SAMPLES + 1)
        xs = pos_a.x() + (pos_b.x() - pos_a.x()) * u
        ys = pos_a.y() + np.sin(t * 2 + u * 2 * np.pi * 3) * amplitude * np.sin(u * np.pi)

        path = QPainterPath(QPointF(xs[0], ys[0]))
        for x, y in zip(xs[1:], ys[1:]):
            path.lineTo(float(x), float(y))
        painter.setPen(self.line_pen(color, 50 if collapsed else 150, self.s(2)))
        painter.setBrush(Qt.NoBrush)
        painter.drawPath(path)

        if collapsed:
            return
        lt = self.link_t
        px = pos_a.x() + (pos_b.x() - pos_a.x()) * lt
        py = pos_a.y() + np.sin(t * 2 + lt * 2 * np.pi * 3) * amplitude * np.sin(lt * np.pi) + self.link_offset * self.s(10)
        alpha = np.sin(lt * np.pi) * 200
        for x, y, a, size in zip(px, py, alpha, self.link_size):
            self.fill_ellipse(painter, float(x), float(y), self.s(size), self.s(size), qcolor(color, a))

    # ------------------------------------------------------------------------------
    # Particles
    # ------------------------------------------------------------------------------

    def _draw_placeholder(self, painter: QPainter, pos: QPointF, label: str) -> None:
        s, text = self.s, self.colors.text
        x, y = pos.x(), pos.y()
        radius = s(40)
        painter.setPen(self.line_pen(text, 50, s(2)))
        painter.setBrush(Qt.NoBrush)
        painter.drawEllipse(pos, radius, radius)
        for i in range(12):
            angle = i * 2 * math.pi / 12
            end = angle + 2 * math.pi / 24
            painter.drawLine(
                QPointF(x + math.cos(angle) * radius, y + math.sin(angle) * radius),
                QPointF(x + math.cos(end) * radius, y + math.sin(end) * radius),
            )
        self.draw_text(painter, label, x, y, s(24), text, 100, valign="center")
        self.draw_text(painter, "Not generated", x, y + s(60), s(12), text, 100, valign="center")

    def _draw_particle(self, painter: QPainter, pos: QPointF, label: str, particle: ParticleState, color: RGB) -> None:
        s, t = self.s, self.pair.time
        x, y = pos.x(), pos.y()

        if not particle.measured:
            phase = 0.0 if label == "A" else math.pi
            pulse = math.sin(t * 2 + phase) * 0.15 + 1
            self.glow(painter, x, y, s(100) * pulse, s(8), color, 150)

            for i in range(8):
                angle = t + i * 2 * math.pi / 8 + (0.0 if label == "A" else math.pi / 8)
                radius = s(50) + math.sin(t * 3 + i) * s(15)
                self.fill_ellipse(painter, x + math.cos(angle) * radius, y + math.sin(angle) * radius, s(6), s(6), qcolor(color, 100))

            self.fill_ellipse(painter, x, y, s(20), s(20), qcolor(WHITE, 200))

            up_alpha = (math.sin(t * 2) + 1) / 2 * 150 + 50
            down_alpha = (math.sin(t * 2 + math.pi) + 1) / 2 * 150 + 50
            painter.setPen(self.line_pen(color, up_alpha, s(2)))
            self.arrow(painter, x, y - s(30), s(20), s(8), s(8), up=True)
            painter.setPen(self.line_pen(color, down_alpha, s(2)))
            self.arrow(painter, x, y + s(30), s(20), s(8), s(8), up=False)
            state_text = "State: |↑⟩ + |↓⟩"
        else:
            if particle.decay > 0.5:
                flash = remap(particle.decay, 0.5, 1.0, 0, 255)
                self.fill_ellipse(painter, x, y, s(150), s(150), qcolor(WHITE, flash))

            size = s(80) * (math.sin(t * 3) * 0.1 + 1)
            self.glow(painter, x, y, size, s(6), color, 255, 50)
            self.fill_ellipse(painter, x, y, s(18), s(18), qcolor((255, 255, 240)))

            up = particle.spin is Spin.UP
            painter.setPen(self.line_pen(WHITE, 220, s(3)))
            self.arrow(painter, x, y - s(30) if up else y + s(30), s(35), s(10), s(12), up)
            state_text = "Spin: ↑ (Up)" if up else "Spin: ↓ (Down)"

        self.draw_text(painter, f"Particle {label}", x, y + s(85), s(14), color, valign="center", bold=True)
        self.draw_text(painter, state_text, x, y + s(102), s(12), self.colors.text, 180, valign="center")

    # ------------------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------------------

    def _draw_state_banner(self, painter: QPainter) -> None:
        s, text, link = self.s, self.colors.text, self.colors.entanglement
        x, y = self.scene_geometry.canvas_width / 2, s(45)

        if not self.pair.generated:
            self.draw_text(painter, 'Click "Generate Entangled Pair" to begin', x, y, s(14), text, 100, valign="center")
            return
        if not (self.pair.a.measured or self.pair.b.measured):
            self.draw_text(painter, "Entanglement State: |↑↓⟩ - |↓↑⟩", x, y, s(14), link, valign="center")
            self.draw_text(painter, "(Anti-correlated superposition)", x, y + s(18), s(11), text, 150, valign="center")
            return
        label = "|↑↓⟩" if self.pair.a.spin is Spin.UP else "|↓↑⟩"
        self.draw_text(painter, f"Collapsed State: {label}", x, y, s(14), link, valign="center")
        self.draw_text(
            painter, "Wavefunction collapsed - spins are anti-correlated!",
            x, y + s(18), s(11), text, 150, valign="center",
        )

    def _draw_correlation_graph(self, painter: QPainter) -> None:
        s, g, text = self.s, self.scene_geometry, self.colors.text
        left = s(20)
        right = g.canvas_width - s(20)
        top = g.graph_y + s(20)
        bottom = g.canvas_height - s(40)
        if bottom <= top:
            return
        mid = g.canvas_width / 2

        self.panel_background(
            painter, QRectF(left - s(10), top - s(30), right - left + s(20), bottom - top + s(60)), text, 50,
        )
        self.draw_text(painter, "Measurement Correlation", mid, top - s(10), s(12), text)

        bar_width = s(50)
        bar_gap = s(60)
        max_height = max(bottom - top - s(70), 0)

        for label, particle, color, center in (
            ("A", self.pair.a, self.colors.particle_a, mid - bar_gap - bar_width),
            ("B", self.pair.b, self.colors.particle_b, mid + bar_gap + bar_width),
        ):
            self.draw_text(painter, f"Particle {label}", center, top + s(15), s(11), color)
            if particle.measured:
                up_frac = 1.0 if particle.spin is Spin.UP else 0.0
            else:
                up_frac = 0.5
            painter.setPen(Qt.NoPen)
            for fraction, x, alpha in (
                (up_frac, center - bar_width / 2 - s(15), 200),
                (1.0 - up_frac if particle.measured else 0.5, center + s(2), 120),
            ):
                height = max_height * fraction
                painter.setBrush(qcolor(color, alpha))
                painter.drawRoundedRect(QRectF(x, bottom - s(30) - height, bar_width / 2 - s(2), height), s(3), s(3))
            self.draw_text(painter, "↑", center - bar_width / 4 - s(8), bottom - s(15), s(9), text)
            self.draw_text(painter, "↓", center + bar_width / 4 + s(2), bottom - s(15), s(9), text)

        if not self.pair.generated:
            lines, rgb, alpha = ("Generate pair", "to see correlation"), text, 100
        elif self.pair.collapsed:
            lines, rgb, alpha = ("Correlation: 100%", "Always opposite!"), self.colors.entanglement, 150
        else:
            lines, rgb, alpha = ("Correlation: Pending", "Measure to see"), self.colors.entanglement, 150
        self.draw_text(painter, lines[0], mid, top + s(40), s(10), rgb, alpha, valign="center")
        self.draw_text(painter, lines[1], mid, top + s(55), s(10), rgb, alpha, valign="center")
