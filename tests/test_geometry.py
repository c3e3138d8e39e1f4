"""Tests for the dimension calculator."""

import math

import pytest

from quantumsketches.model.geometry import (
    DOUBLE_SLIT_LAYOUT, ENTANGLEMENT_LAYOUT, SUPERPOSITION_LAYOUT, HEADER_HEIGHT, STACKED_TARGET_HEIGHT,
    LayoutMode, calculate_dimensions, fit_to_container,
)


class TestCalculateDimensions:
    @pytest.mark.parametrize("size", [(1400, 900), (800, 600), (1920, 2000), (300, 200)])
    def test_idempotent(self, size):
        assert calculate_dimensions(*size) == calculate_dimensions(*size)

    def test_layout_mode_follows_width(self):
        assert calculate_dimensions(1400, 900).layout_mode is LayoutMode.SIDE_BY_SIDE
        assert calculate_dimensions(901, 900).layout_mode is LayoutMode.SIDE_BY_SIDE
        assert calculate_dimensions(900, 900).layout_mode is LayoutMode.STACKED
        assert calculate_dimensions(600, 900).layout_mode is LayoutMode.STACKED

    def test_width_driven_when_height_is_ample(self):
        g = calculate_dimensions(1400, 3000)
        target_width = math.floor(1400 - 140 - 20 - 280 - 24)
        assert g.scale_factor == pytest.approx(target_width / DOUBLE_SLIT_LAYOUT.reference_width)
        assert g.sim_width == target_width
        assert g.graph_height == math.floor(250 * g.scale_factor)
        assert g.canvas_height == g.sim_height + g.graph_height + DOUBLE_SLIT_LAYOUT.graph_gap

    def test_contain_fit_when_height_is_short(self):
        g = calculate_dimensions(1400, 500)
        target_height = 500 - HEADER_HEIGHT
        assert g.canvas_height <= target_height
        assert g.scale_factor == pytest.approx(target_height / (550 + 250 + 20))
        assert g.sim_width == math.floor(700 * g.scale_factor)

    def test_stacked_layout_fits_fixed_height(self):
        g = calculate_dimensions(800, 400)
        assert g.canvas_height <= STACKED_TARGET_HEIGHT

    @pytest.mark.parametrize("size", [(0, 0), (1, 1), (901, 0), (-50, -50)])
    def test_degenerate_viewports_stay_valid(self, size):
        g = calculate_dimensions(*size)
        assert g.scale_factor > 0
        assert g.graph_height >= 0
        assert g.canvas_width >= 0 and g.canvas_height >= 0

    def test_scene_positions_scale(self):
        g = calculate_dimensions(1400, 3000)
        s = g.scale_factor
        assert g.source_y == math.floor(50 * s)
        assert g.barrier_y == math.floor(180 * s)
        assert g.screen_y == math.floor(480 * s)
        assert g.center_x == g.sim_width / 2
        assert g.scaled(10) == pytest.approx(10 * s)


class TestFitToContainer:
    def test_superposition_graph_beside_scene(self):
        g = fit_to_container(1100, SUPERPOSITION_LAYOUT)
        assert g.scale_factor == pytest.approx(1.0)
        assert (g.canvas_width, g.canvas_height) == (1100, 550)
        assert g.sim_width == 700
        assert g.graph_x == 730
        assert g.graph_width == 370

    def test_superposition_width_is_capped(self):
        assert fit_to_container(3000, SUPERPOSITION_LAYOUT) == fit_to_container(1100, SUPERPOSITION_LAYOUT)

    def test_entanglement_graph_below_scene(self):
        g = fit_to_container(700, ENTANGLEMENT_LAYOUT)
        assert g.scale_factor == pytest.approx(1.0)
        assert g.canvas_height == 550 + 200 + 60
        assert g.graph_y == 570
        assert g.layout_mode is LayoutMode.STACKED

    def test_entanglement_width_is_capped(self):
        g = fit_to_container(2000, ENTANGLEMENT_LAYOUT)
        assert g.canvas_width == 960
        assert g.scale_factor == pytest.approx(960 / 700)

    def test_zero_container_keeps_positive_scale(self):
        assert fit_to_container(0, ENTANGLEMENT_LAYOUT).scale_factor > 0
        assert fit_to_container(0, SUPERPOSITION_LAYOUT).scale_factor > 0
