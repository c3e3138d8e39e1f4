"""
Dimension Calculator
====================
Derives the pixel geometry of a sketch canvas from the available viewport.

Why is this file needed?
------------------------
1. Responsiveness: Every drawing magnitude in the sketches is a base-layout
   constant multiplied by a single scale factor. This module owns that factor.
2. Purity: The geometry is a stateless transform of (viewport size, base
   layout). Calling it twice with the same input yields an equal record, so
   the views can recompute it freely on every resize.

Classes:
    LayoutMode: Side-by-side (wide window) or stacked (narrow window).
    GraphPlacement: Where the graph area sits relative to the scene.
    BaseLayout: Fixed layout constants at scale 1.0.
    ViewportGeometry: The resulting immutable geometry record.

Functions:
    calculate_dimensions: Window-driven geometry (double slit).
    fit_to_container: Container-width-driven geometry (entanglement, superposition).
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

# Windows wider than this place the controls next to the canvas
SIDE_BY_SIDE_THRESHOLD: int = 900

# Side-by-side chrome around the canvas (px)
CONTROLS_FRACTION: float = 0.20
CONTROLS_MIN_WIDTH: int = 260
PADDING_LEFT_FRACTION: float = 0.10
PADDING_RIGHT: int = 20
CONTROLS_GAP: int = 24
HEADER_HEIGHT: int = 180

# Stacked layout
STACKED_WIDTH_FRACTION: float = 0.90
STACKED_TARGET_HEIGHT: int = 500

# Lower bound that keeps the scale factor strictly positive
MIN_SCALE_FACTOR: float = 0.05


class LayoutMode(Enum):
    SIDE_BY_SIDE = "side_by_side"
    STACKED = "stacked"


class GraphPlacement(Enum):
    BELOW = "below"
    BESIDE = "beside"


@dataclass(frozen=True)
class BaseLayout:
    """Layout constants of one sketch at scale 1.0 (all values in px)."""
    base_width: int
    base_height: int
    base_sim_width: int
    base_graph_height: int
    reference_width: int
    graph_gap: int = 20
    footer: int = 0
    max_width: Optional[int] = None
    graph_placement: GraphPlacement = GraphPlacement.BELOW
    source_y: int = 50
    barrier_y: int = 180
    screen_y: int = 480


DOUBLE_SLIT_LAYOUT = BaseLayout(
    base_width=1100,
    base_height=550,
    base_sim_width=700,
    base_graph_height=250,
    reference_width=700,
)

ENTANGLEMENT_LAYOUT = BaseLayout(
    base_width=1100,
    base_height=550,
    base_sim_width=700,
    base_graph_height=200,
    reference_width=700,
    footer=60,
    max_width=960,
)

SUPERPOSITION_LAYOUT = BaseLayout(
    base_width=1100,
    base_height=550,
    base_sim_width=700,
    base_graph_height=550,
    reference_width=1100,
    graph_gap=30,
    max_width=1100,
    graph_placement=GraphPlacement.BESIDE,
)


@dataclass(frozen=True)
class ViewportGeometry:
    canvas_width: int
    canvas_height: int
    sim_width: int
    sim_height: int
    graph_x: int
    graph_y: int
    graph_width: int
    graph_height: int
    scale_factor: float
    layout_mode: LayoutMode
    source_y: int
    barrier_y: int
    screen_y: int

    @property
    def center_x(self) -> float:
        """Horizontal centre of the simulation area."""
        return self.sim_width / 2

    def scaled(self, value: float) -> float:
        """Convert a base-layout magnitude into on-screen pixels."""
        return value * self.scale_factor


def _positive_scale(scale: float) -> float:
    if not math.isfinite(scale):
        return MIN_SCALE_FACTOR
    return max(scale, MIN_SCALE_FACTOR)


def _scene_positions(layout: BaseLayout, scale: float) -> tuple[int, int, int]:
    return (
        math.floor(layout.source_y * scale),
        math.floor(layout.barrier_y * scale),
        math.floor(layout.screen_y * scale),
    )


def calculate_dimensions(
    viewport_width: float,
    viewport_height: float,
    layout: BaseLayout = DOUBLE_SLIT_LAYOUT,
) -> ViewportGeometry:
    """
    Compute the canvas geometry for a window of the given size.

    Wide windows (> SIDE_BY_SIDE_THRESHOLD) reserve room for the control panel
    beside the canvas; narrow windows stack the controls and use a fixed target
    height. The scale factor is derived from the available width first. When
    the scene plus the full-size graph would not fit the available height,
    the scale is recomputed from the height instead (contain fit).

    Args:
        viewport_width: Available window width in px.
        viewport_height: Available window height in px.
        layout: Base constants of the sketch.

    Returns:
        The geometry record. Degenerate viewports produce a small but valid
        geometry rather than an error.
    """
    if viewport_width > SIDE_BY_SIDE_THRESHOLD:
        mode = LayoutMode.SIDE_BY_SIDE
        controls_width = max(viewport_width * CONTROLS_FRACTION, CONTROLS_MIN_WIDTH)
        padding_left = viewport_width * PADDING_LEFT_FRACTION
        target_width = math.floor(
            viewport_width - padding_left - PADDING_RIGHT - controls_width - CONTROLS_GAP
        )
        target_height = math.floor(viewport_height - HEADER_HEIGHT)
    else:
        mode = LayoutMode.STACKED
        target_width = math.floor(viewport_width * STACKED_WIDTH_FRACTION)
        target_height = STACKED_TARGET_HEIGHT

    target_width = max(target_width, 0)
    target_height = max(target_height, 0)
    gap = layout.graph_gap

    scale = _positive_scale(target_width / layout.reference_width)
    sim_width = max(target_width, math.floor(layout.base_sim_width * scale))
    sim_height = math.floor(layout.base_height * scale)
    full_graph_height = math.floor(layout.base_graph_height * scale)

    if sim_height + full_graph_height + gap > target_height:
        # Contain fit: the height is the binding constraint
        total_base_height = layout.base_height + layout.base_graph_height + gap
        scale = _positive_scale(target_height / total_base_height)
        sim_width = math.floor(layout.base_sim_width * scale)
        sim_height = math.floor(layout.base_height * scale)
        graph_height = target_height - sim_height - gap
    else:
        graph_height = full_graph_height

    graph_height = max(graph_height, 0)
    source_y, barrier_y, screen_y = _scene_positions(layout, scale)

    geometry = ViewportGeometry(
        canvas_width=sim_width,
        canvas_height=sim_height + graph_height + gap,
        sim_width=sim_width,
        sim_height=sim_height,
        graph_x=0,
        graph_y=sim_height + gap,
        graph_width=sim_width,
        graph_height=graph_height,
        scale_factor=scale,
        layout_mode=mode,
        source_y=source_y,
        barrier_y=barrier_y,
        screen_y=screen_y,
    )
    logger.debug(f"Geometry for viewport {viewport_width}x{viewport_height}: {geometry}")
    return geometry


def fit_to_container(container_width: float, layout: BaseLayout) -> ViewportGeometry:
    """
    Compute the canvas geometry from the width of the hosting container.

    The width is capped at ``layout.max_width``. The graph either sits below
    the scene (entanglement) or beside it (superposition).
    """
    target_width = max(container_width, 0)
    if layout.max_width is not None:
        target_width = min(target_width, layout.max_width)

    scale = _positive_scale(target_width / layout.reference_width)
    source_y, barrier_y, screen_y = _scene_positions(layout, scale)

    if layout.graph_placement is GraphPlacement.BESIDE:
        canvas_width = max(math.floor(target_width), math.floor(layout.base_width * scale))
        canvas_height = math.floor(layout.base_height * scale)
        sim_width = math.floor(layout.base_sim_width * scale)
        graph_x = sim_width + math.floor(layout.graph_gap * scale)
        return ViewportGeometry(
            canvas_width=canvas_width,
            canvas_height=canvas_height,
            sim_width=sim_width,
            sim_height=canvas_height,
            graph_x=graph_x,
            graph_y=0,
            graph_width=max(canvas_width - graph_x, 0),
            graph_height=canvas_height,
            scale_factor=scale,
            layout_mode=LayoutMode.SIDE_BY_SIDE,
            source_y=source_y,
            barrier_y=barrier_y,
            screen_y=screen_y,
        )

    sim_width = max(math.floor(target_width), math.floor(layout.base_sim_width * scale))
    sim_height = math.floor(layout.base_height * scale)
    graph_height = math.floor(layout.base_graph_height * scale)
    return ViewportGeometry(
        canvas_width=sim_width,
        canvas_height=sim_height + graph_height + math.floor(layout.footer * scale),
        sim_width=sim_width,
        sim_height=sim_height,
        graph_x=0,
        graph_y=sim_height + layout.graph_gap,
        graph_width=sim_width,
        graph_height=graph_height,
        scale_factor=scale,
        layout_mode=LayoutMode.STACKED,
        source_y=source_y,
        barrier_y=barrier_y,
        screen_y=screen_y,
    )
