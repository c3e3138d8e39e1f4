"""
Sketch Canvas (Base Widget)
===========================
Common drawing surface for the three sketches.

Why is this file needed?
------------------------
1. Frame contract: Every sketch clears to the palette background, advances
   its state once per frame and paints the scene in paintEvent.
2. Scaling: The canvas holds the current ViewportGeometry and resizes itself
   to it; subclasses express every magnitude through `s()`.
3. Drawing helpers: p5-style glows, baseline-aligned text and boxed labels,
   with every colour channel and alpha clamped before reaching Qt.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np
import numpy.typing as npt
from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QColor, QFont, QFontMetricsF, QImage, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QWidget

from quantumsketches.model.colors import Palette, RGB
from quantumsketches.model.geometry import ViewportGeometry
from quantumsketches.utils import clamp, remap

logger = logging.getLogger(__name__)


def qcolor(rgb: RGB, alpha: float = 255) -> QColor:
    """Build a QColor, clamping every channel (and alpha) into [0, 255]."""
    r, g, b = (int(clamp(round(c), 0, 255)) for c in rgb)
    return QColor(r, g, b, int(clamp(round(alpha), 0, 255)))


def rgba_image(rgba: npt.NDArray[np.uint8]) -> QImage:
    """Wrap an (h, w, 4) uint8 array as a QImage that owns its pixels."""
    rgba = np.ascontiguousarray(rgba, dtype=np.uint8)
    height, width = rgba.shape[:2]
    image = QImage(rgba.tobytes(), width, height, 4 * width, QImage.Format.Format_RGBA8888)
    return image.copy()


class SketchCanvas(QWidget):
    """Base class; subclasses implement compute_geometry, advance and draw."""

    def __init__(self, palette: Palette, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.colors: Palette = palette
        self.scene_geometry: ViewportGeometry = self.compute_geometry(1100, 800, 700)
        self.setAttribute(Qt.WA_OpaquePaintEvent)
        self.setFixedSize(self.scene_geometry.canvas_width, self.scene_geometry.canvas_height)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def compute_geometry(self, viewport_width: int, viewport_height: int, container_width: int) -> ViewportGeometry:
        raise NotImplementedError

    def advance(self, frames: float) -> None:
        """Advance the sketch state by the given number of 60 Hz frames."""
        raise NotImplementedError

    def draw(self, painter: QPainter) -> None:
        raise NotImplementedError

    def apply_viewport(self, viewport_width: int, viewport_height: int, container_width: int) -> ViewportGeometry:
        """Recompute geometry for a new window/container size and resize."""
        geometry = self.compute_geometry(viewport_width, viewport_height, container_width)
        if geometry != self.scene_geometry:
            self.scene_geometry = geometry
            self.setFixedSize(max(geometry.canvas_width, 1), max(geometry.canvas_height, 1))
            logger.debug(
                f"{type(self).__name__} resized to {geometry.canvas_width}x{geometry.canvas_height} "
                f"(scale {geometry.scale_factor:.3f})"
            )
            self.update()
        return geometry

    def s(self, value: float) -> float:
        return self.scene_geometry.scaled(value)

    def paintEvent(self, event, /) -> None:
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing)
            painter.fillRect(self.rect(), qcolor(self.colors.background))
            self.draw(painter)
        finally:
            painter.end()

    # ------------------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------------------

    @staticmethod
    def fill_ellipse(painter: QPainter, x: float, y: float, w: float, h: float, color: QColor) -> None:
        """Filled ellipse of diameter (w, h) centred on (x, y)."""
        painter.setPen(Qt.NoPen)
        painter.setBrush(color)
        painter.drawEllipse(QPointF(x, y), w / 2, h / 2)

    def glow(
        self,
        painter: QPainter,
        x: float,
        y: float,
        size: float,
        step: float,
        rgb: RGB,
        inner_alpha: float,
        outer_alpha: float = 0.0,
        aspect: float = 1.0,
    ) -> None:
        """Concentric ellipses from diameter `size` down to 0, alpha fading outwards."""
        if size <= 0 or step <= 0:
            return
        r = size
        while r > 0:
            alpha = remap(r, 0, size, inner_alpha, outer_alpha)
            self.fill_ellipse(painter, x, y, r, r * aspect, qcolor(rgb, alpha))
            r -= step

    @staticmethod
    def line_pen(rgb: RGB, alpha: float = 255, width: float = 1.0, style: Qt.PenStyle = Qt.SolidLine) -> QPen:
        pen = QPen(qcolor(rgb, alpha))
        pen.setWidthF(max(width, 0.0))
        pen.setStyle(style)
        pen.setCapStyle(Qt.RoundCap)
        return pen

    def pixel_font(self, size: float, bold: bool = False) -> QFont:
        f = QFont(self.font())
        f.setPixelSize(max(1, round(size)))
        f.setBold(bold)
        return f

    def draw_text(
        self,
        painter: QPainter,
        text: str,
        x: float,
        y: float,
        size: float,
        rgb: RGB,
        alpha: float = 255,
        align: str = "center",
        valign: str = "baseline",
        bold: bool = False,
    ) -> None:
        """
        Draw text anchored at (x, y).

        Args:
            align: "left", "center" or "right" horizontal anchor.
            valign: "baseline" (y is the baseline) or "center".
        """
        font = self.pixel_font(size, bold)
        metrics = QFontMetricsF(font)
        width = metrics.horizontalAdvance(text)
        if align == "center":
            x -= width / 2
        elif align == "right":
            x -= width
        if valign == "center":
            y += (metrics.ascent() - metrics.descent()) / 2

        painter.setFont(font)
        painter.setPen(qcolor(rgb, alpha))
        painter.drawText(QPointF(x, y), text)

    def label_with_box(self, painter: QPainter, text: str, x: float, y: float) -> None:
        """Boxed component label centred on (x, y), kept inside the sim area."""
        size = self.s(11)
        padding = self.s(5)
        metrics = QFontMetricsF(self.pixel_font(size))
        box_w = metrics.horizontalAdvance(text) + padding * 2
        box_h = size + padding * 2

        box_x = clamp(x, box_w / 2 + self.s(15), self.scene_geometry.sim_width - box_w / 2 - self.s(15))

        painter.setPen(self.line_pen(self.colors.label_border))
        painter.setBrush(qcolor(self.colors.label_background))
        radius = self.s(4)
        painter.drawRoundedRect(QRectF(box_x - box_w / 2, y - box_h / 2, box_w, box_h), radius, radius)
        self.draw_text(painter, text, box_x, y + 1, size, self.colors.text, valign="center")

    def panel_background(self, painter: QPainter, rect: QRectF, border: RGB, border_alpha: float) -> None:
        """Rounded background of a graph area, slightly darker than the canvas."""
        painter.setPen(self.line_pen(border, border_alpha))
        painter.setBrush(qcolor(tuple(c - 5 for c in self.colors.background)))  # type: ignore[arg-type]
        radius = self.s(8)
        painter.drawRoundedRect(rect, radius, radius)

    @staticmethod
    def polygon(points: Iterable[tuple[float, float]]) -> QPolygonF:
        return QPolygonF([QPointF(px, py) for px, py in points])

    @staticmethod
    def polyline_runs(xs: npt.NDArray[np.float64], ys: npt.NDArray[np.float64], mask: npt.NDArray[np.bool_]) -> list[QPolygonF]:
        """Split a sampled curve into the contiguous runs where mask is True."""
        runs: list[QPolygonF] = []
        indices = np.flatnonzero(mask)
        if indices.size == 0:
            return runs
        breaks = np.flatnonzero(np.diff(indices) > 1) + 1
        for run in np.split(indices, breaks):
            if run.size >= 2:
                runs.append(QPolygonF([QPointF(float(xs[i]), float(ys[i])) for i in run]))
        return runs

    def arrow(self, painter: QPainter, x: float, y_start: float, length: float, head: float, head_drop: float, up: bool) -> None:
        """Vertical arrow starting at y_start, pointing up or down."""
        tip = y_start - length if up else y_start + length
        back = tip + head_drop if up else tip - head_drop
        painter.drawLine(QPointF(x, y_start), QPointF(x, tip))
        painter.drawLine(QPointF(x - head, back), QPointF(x, tip))
        painter.drawLine(QPointF(x + head, back), QPointF(x, tip))
