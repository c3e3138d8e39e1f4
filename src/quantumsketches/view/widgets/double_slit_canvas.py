"""
Double-Slit Canvas
==================
Renders the double-slit experiment: source, wavefronts, barrier, detection
screen and the live intensity graph below the scene.

Why is this file needed?
------------------------
1. Rendering only: Every intensity value comes from `model.physics`; this
   widget converts the numbers into shapes and colours.
2. Two regimes: Unobserved light is drawn as waves (wavefronts, wavelets and
   an interference field). With the observer on, discrete particles pass
   through one slit each and the screen shows two plain bands.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QPainter, QPainterPath
from PySide6.QtWidgets import QWidget

from quantumsketches.model.colors import Palette, RGB, shade, wavelength_to_color
from quantumsketches.model.geometry import DOUBLE_SLIT_LAYOUT, ViewportGeometry, calculate_dimensions
from quantumsketches.model.physics import (
    PARTICLE_COUNT, SlitSetup, intensity_profile, particle_position, screen_intensity, wave_field,
)
from quantumsketches.model.state import DoubleSlitState
from quantumsketches.utils import clamp, remap
from quantumsketches.view.widgets.sketch_canvas import SketchCanvas, qcolor, rgba_image

logger = logging.getLogger(__name__)

# Base-layout constants (px at scale 1.0)
EDGE_MARGIN = 40
WALL_THICKNESS = 20
SCREEN_THICKNESS = 15
DEPTH_3D = 25
FIELD_RESOLUTION = 4
GRAPH_MARGIN = 40

WHITE_HOT: RGB = (255, 255, 240)


class DoubleSlitCanvas(SketchCanvas):
    def __init__(self, state: DoubleSlitState, palette: Palette, parent: Optional[QWidget] = None) -> None:
        super().__init__(palette, parent)
        self.state = state

    def compute_geometry(self, viewport_width: int, viewport_height: int, container_width: int) -> ViewportGeometry:
        return calculate_dimensions(viewport_width, viewport_height, DOUBLE_SLIT_LAYOUT)

    def advance(self, frames: float) -> None:
        self.state.advance(frames)

    def slit_setup(self) -> SlitSetup:
        return SlitSetup.from_state(self.state.params, self.scene_geometry)

    # ------------------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------------------

    def draw(self, painter: QPainter) -> None:
        setup = self.slit_setup()
        wave_color = wavelength_to_color(self.state.params.wavelength)

        self._draw_source(painter, wave_color)
        if self.state.observer_active:
            self._draw_particles(painter, setup, wave_color)
            self._draw_observer(painter, setup)
        else:
            self._draw_incoming_waves(painter, setup, wave_color)
            self._draw_wavelets(painter, setup, wave_color)
            self._draw_interference_field(painter, setup, wave_color)
        self._draw_observer_flash(painter, setup)

        self._draw_barrier(painter, setup)
        self._draw_screen(painter, setup, wave_color)
        self._draw_graph(painter, setup, wave_color)
        self._draw_labels(painter, wave_color)

    # ------------------------------------------------------------------------------
    # Scene
    # ------------------------------------------------------------------------------

    def _draw_source(self, painter: QPainter, wave_color: RGB) -> None:
        x = self.scene_geometry.center_x
        y = self.scene_geometry.source_y
        self.glow(painter, x, y, self.s(35), self.s(5), wave_color, 180)
        self.fill_ellipse(painter, x, y, self.s(12), self.s(12), qcolor(WHITE_HOT))

    def _draw_incoming_waves(self, painter: QPainter, setup: SlitSetup, wave_color: RGB) -> None:
        """Plane wavefronts travelling from the source down to the barrier."""
        wl = setup.sim_wavelength
        t = self.state.params.time
        left = self.s(80)
        right = self.scene_geometry.sim_width - self.s(80)
        barrier_y = setup.barrier_y

        y = self.s(80)
        while y < barrier_y - self.s(20):
            wave_y = y - (y - t * self.s(3)) % wl
            if self.s(60) < wave_y < barrier_y - self.s(25):
                alpha = clamp(remap(wave_y, barrier_y - self.s(80), barrier_y - self.s(25), 60, 10), 10, 60)
                painter.setPen(self.line_pen(wave_color, alpha, self.s(2)))
                painter.drawLine(QPointF(left, wave_y), QPointF(right, wave_y))
            y += wl

    def _draw_wavelets(self, painter: QPainter, setup: SlitSetup, wave_color: RGB) -> None:
        """Expanding half-circles centred on each slit exit."""
        max_radius = setup.screen_distance + self.s(50)
        if max_radius <= 0:
            return
        t = self.state.params.time
        angles = np.arange(0.0, np.pi + 1e-9, 0.03)
        cos_a, sin_a = np.cos(angles), np.sin(angles)
        lower = setup.screen_y - self.s(10)
        left = self.s(45)
        right = self.scene_geometry.sim_width - self.s(45)

        painter.setBrush(Qt.NoBrush)
        r = 0.0
        while r < max_radius:
            radius = (r + t * self.s(3)) % max_radius
            if radius > self.s(10):
                alpha = clamp(remap(radius, 0, max_radius, 100, 0), 0, 100)
                painter.setPen(self.line_pen(wave_color, alpha, self.s(1.5)))
                for slit_x in (setup.slit1_x, setup.slit2_x):
                    xs = slit_x + cos_a * radius
                    ys = setup.slit_exit_y + sin_a * radius
                    mask = (ys > setup.slit_exit_y) & (ys < lower) & (xs > left) & (xs < right)
                    for run in self.polyline_runs(xs, ys, mask):
                        painter.drawPolyline(run)
            r += setup.sim_wavelength

    def _draw_interference_field(self, painter: QPainter, setup: SlitSetup, wave_color: RGB) -> None:
        """Animated near-field superposition, evaluated on a coarse grid and scaled up."""
        step = self.s(FIELD_RESOLUTION)
        top = setup.barrier_y + self.s(30)
        bottom = setup.screen_y - self.s(15)
        left = self.s(50)
        right = self.scene_geometry.sim_width - self.s(50)
        if step <= 0 or bottom <= top or right <= left:
            return

        xs = np.arange(left, right, step)
        ys = np.arange(top, bottom, step)
        if xs.size == 0 or ys.size == 0:
            return

        intensity = wave_field(setup, xs, ys, self.state.params.time)
        fade = np.interp(ys, [top, bottom], [0.2, 0.8])[:, np.newaxis]
        alpha = 40.0 * intensity ** 2 * fade
        alpha = np.where(alpha > 2.0, alpha, 0.0)

        rgba = np.empty(intensity.shape + (4,), dtype=np.uint8)
        rgba[..., :3] = wave_color
        rgba[..., 3] = np.clip(alpha, 0, 255).astype(np.uint8)

        target = QRectF(left - step / 2, top - step / 2, xs.size * step, ys.size * step)
        painter.save()
        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.drawImage(target, rgba_image(rgba))
        painter.restore()

    def _draw_particles(self, painter: QPainter, setup: SlitSetup, wave_color: RGB) -> None:
        t = self.state.params.time
        for index in range(PARTICLE_COUNT):
            x, y = particle_position(setup, index, t)
            self.glow(painter, x, y, self.s(12), self.s(3), wave_color, 200)
            self.fill_ellipse(painter, x, y, self.s(4), self.s(4), qcolor(WHITE_HOT))

    def _draw_observer(self, painter: QPainter, setup: SlitSetup) -> None:
        """Eye icon above the barrier with dashed sight lines to both slits."""
        observer = self.colors.observer
        x = self.scene_geometry.center_x
        y = setup.barrier_y - self.s(50)
        eye = self.s(40)

        self.glow(painter, x, y, eye * 1.5, self.s(5), observer, 80, aspect=0.6)

        painter.setPen(self.line_pen(observer, 255, self.s(2)))
        painter.setBrush(qcolor((255, 255, 255)))
        painter.drawEllipse(QPointF(x, y), eye / 2, eye * 0.3)
        self.fill_ellipse(painter, x, y, eye * 0.4, eye * 0.4, qcolor((40, 40, 50)))
        self.fill_ellipse(painter, x - self.s(5), y - self.s(3), self.s(6), self.s(6), qcolor((255, 255, 255)))

        pen = self.line_pen(observer, 100, self.s(1), Qt.CustomDashLine)
        pen.setCapStyle(Qt.FlatCap)
        pen.setDashPattern([5.0, 5.0])
        painter.setPen(pen)
        eye_bottom = QPointF(x, y + eye * 0.3)
        painter.drawLine(eye_bottom, QPointF(setup.slit1_x, setup.barrier_y))
        painter.drawLine(eye_bottom, QPointF(setup.slit2_x, setup.barrier_y))

        self.draw_text(painter, "Observer", x, y - eye * 0.5, self.s(10), self.colors.text)

    def _draw_observer_flash(self, painter: QPainter, setup: SlitSetup) -> None:
        """Brief highlight over the slits right after the observer is toggled."""
        decay = self.state.observer_decay
        if decay <= 0:
            return
        size = self.s(60) * (1.5 - 0.5 * decay)
        for slit_x in (setup.slit1_x, setup.slit2_x):
            self.glow(painter, slit_x, setup.barrier_y, size, self.s(6), self.colors.observer, 120 * decay)

    def _cuboid(self, painter: QPainter, x: float, y: float, w: float, h: float, d: float, base: RGB) -> None:
        """Front face plus slanted top and right faces of a pseudo-3D block."""
        if w <= 0:
            return
        top, side = shade(base, 30), shade(base, -15)
        half = d * 0.5

        painter.setPen(self.line_pen(shade(top, -20)))
        painter.setBrush(qcolor(top))
        painter.drawPolygon(self.polygon([(x, y), (x + w, y), (x + w + half, y - half), (x + half, y - half)]))

        painter.setPen(self.line_pen(shade(base, -30)))
        painter.setBrush(qcolor(base))
        painter.drawRect(QRectF(x, y, w, h))

        painter.setPen(self.line_pen(shade(side, -20)))
        painter.setBrush(qcolor(side))
        painter.drawPolygon(self.polygon([(x + w, y), (x + w + half, y - half), (x + w + half, y + h - half), (x + w, y + h)]))

    def _draw_barrier(self, painter: QPainter, setup: SlitSetup) -> None:
        left = self.s(EDGE_MARGIN)
        right = self.scene_geometry.sim_width - self.s(EDGE_MARGIN)
        half_slit = setup.slit_width / 2
        y, h, d = setup.barrier_y, self.s(WALL_THICKNESS), self.s(DEPTH_3D)
        base = self.colors.barrier

        self._cuboid(painter, left, y, setup.slit1_x - half_slit - left, h, d, base)
        self._cuboid(painter, setup.slit1_x + half_slit, y, setup.slit2_x - setup.slit1_x - setup.slit_width, h, d, base)
        self._cuboid(painter, setup.slit2_x + half_slit, y, right - setup.slit2_x - half_slit, h, d, base)

    def _draw_screen(self, painter: QPainter, setup: SlitSetup, wave_color: RGB) -> None:
        """Detection screen whose front face is tinted by the screen intensity."""
        left = self.s(EDGE_MARGIN)
        right = self.scene_geometry.sim_width - self.s(EDGE_MARGIN)
        width = right - left
        thickness = self.s(SCREEN_THICKNESS)
        half = self.s(DEPTH_3D) * 0.5
        y = setup.screen_y
        front = self.colors.screen
        if width <= 0:
            return

        painter.setPen(self.line_pen(shade(front, -20)))
        painter.setBrush(qcolor(front))
        painter.drawRect(QRectF(left, y, width, thickness))

        columns = max(int(width), 1)
        xs = left + np.arange(columns, dtype=np.float64)
        intensity = np.asarray(screen_intensity(setup, xs, observed=self.state.observer_active))
        lit = np.asarray(wave_color, dtype=np.float64) + 100.0
        base = np.asarray(front, dtype=np.float64)
        strip = base + (lit - base) * intensity[:, np.newaxis]

        rgba = np.empty((1, columns, 4), dtype=np.uint8)
        rgba[0, :, :3] = np.clip(np.rint(strip), 0, 255).astype(np.uint8)
        rgba[0, :, 3] = 255
        painter.drawImage(QRectF(left, y, width, thickness), rgba_image(rgba))

        top, side = shade(front, 25), shade(front, -10)
        painter.setPen(self.line_pen(shade(top, -20)))
        painter.setBrush(qcolor(top))
        painter.drawPolygon(self.polygon([(left, y), (right, y), (right + half, y - half), (left + half, y - half)]))
        painter.setPen(self.line_pen(shade(side, -20)))
        painter.setBrush(qcolor(side))
        painter.drawPolygon(self.polygon([(right, y), (right + half, y - half), (right + half, y + thickness - half), (right, y + thickness)]))

    # ------------------------------------------------------------------------------
    # Graph & labels
    # ------------------------------------------------------------------------------

    def _draw_graph(self, painter: QPainter, setup: SlitSetup, wave_color: RGB) -> None:
        g = self.scene_geometry
        left = g.graph_x + self.s(GRAPH_MARGIN)
        right = g.canvas_width - self.s(GRAPH_MARGIN)
        top = g.graph_y + self.s(GRAPH_MARGIN)
        bottom = g.canvas_height - self.s(GRAPH_MARGIN)
        if right - left < 2 or bottom - top < self.s(20):
            return

        text = self.colors.text
        self.panel_background(
            painter,
            QRectF(left - self.s(10), top - self.s(20), right - left + self.s(20), bottom - top + self.s(30)),
            self.colors.barrier, 100,
        )

        painter.setPen(self.line_pen(text, 150))
        painter.drawLine(QPointF(left, bottom), QPointF(right, bottom))
        painter.drawLine(QPointF(left, bottom), QPointF(left, top))

        self.draw_text(painter, "Position on Screen", (left + right) / 2, bottom + self.s(20), self.s(10), text)
        painter.save()
        painter.translate(left - self.s(20), (top + bottom) / 2)
        painter.rotate(-90)
        self.draw_text(painter, "Intensity", 0, 0, self.s(10), text)
        painter.restore()

        samples = max(int((right - left) / 2) + 1, 2)
        _, intensity = intensity_profile(setup, samples=samples, observed=self.state.observer_active)
        px = np.linspace(left, right, samples)
        py = bottom - self.s(2) + (top + self.s(20) - (bottom - self.s(2))) * intensity

        path = QPainterPath(QPointF(px[0], py[0]))
        for x, y in zip(px[1:], py[1:]):
            path.lineTo(float(x), float(y))
        painter.setPen(self.line_pen(wave_color, 255, self.s(2.5)))
        painter.setBrush(Qt.NoBrush)
        painter.drawPath(path)

        title = "Particle Pattern (Observed)" if self.state.observer_active else "Interference Pattern"
        self.draw_text(painter, title, (left + right) / 2, top - self.s(5), self.s(11), text)

    def _draw_labels(self, painter: QPainter, wave_color: RGB) -> None:
        params = self.state.params
        text = self.colors.text
        sim_width = self.scene_geometry.sim_width

        self.draw_text(painter, f"λ = {params.wavelength:.0f} nm", self.s(25), self.s(28), self.s(12), text, align="left")
        painter.setPen(self.line_pen(text))
        painter.setBrush(qcolor(wave_color))
        painter.drawRoundedRect(QRectF(self.s(110), self.s(18), self.s(14), self.s(14)), self.s(2), self.s(2))
        self.draw_text(painter, f"d = {params.slit_separation:.0f} μm", self.s(25), self.s(46), self.s(12), text, align="left")

        self.draw_text(painter, "Δ = d·sin(θ) = nλ", sim_width - self.s(25), self.s(28), self.s(12), text, align="right")
        self.draw_text(painter, "(constructive interference)", sim_width - self.s(25), self.s(46), self.s(10), text, align="right")

        center = self.scene_geometry.center_x
        self.label_with_box(painter, "Source", center, self.s(28))
        self.label_with_box(painter, "Double Slit", center, self.scene_geometry.barrier_y + self.s(40))
        self.label_with_box(painter, "Screen", center, self.scene_geometry.screen_y + self.s(30))
