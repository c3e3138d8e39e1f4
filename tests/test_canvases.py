"""Offscreen smoke tests for the canvases, panels and the main window."""

import csv

import numpy as np
import pytest

from quantumsketches.model.colors import DARK_PALETTE, LIGHT_PALETTE
from quantumsketches.model.state import DoubleSlitState, EntangledPair, SuperpositionState


def render(canvas):
    image = canvas.grab().toImage()
    assert not image.isNull()
    assert image.width() == canvas.scene_geometry.canvas_width
    assert image.height() == canvas.scene_geometry.canvas_height
    return image


@pytest.mark.parametrize("palette", [LIGHT_PALETTE, DARK_PALETTE])
def test_double_slit_canvas_both_regimes(qapp, palette):
    from quantumsketches.view.widgets.double_slit_canvas import DoubleSlitCanvas

    state = DoubleSlitState()
    canvas = DoubleSlitCanvas(state, palette)
    canvas.apply_viewport(1400, 900, 1000)
    canvas.advance(3)
    render(canvas)

    state.toggle_observer()
    canvas.advance(1)
    render(canvas)


@pytest.mark.parametrize("size", [(300, 200), (800, 600), (1920, 1080)])
def test_double_slit_canvas_resizes(qapp, size):
    from quantumsketches.view.widgets.double_slit_canvas import DoubleSlitCanvas

    state = DoubleSlitState()
    state.params.set_slit_separation(0)
    state.params.set_slit_width(0)
    canvas = DoubleSlitCanvas(state, LIGHT_PALETTE)
    geometry = canvas.apply_viewport(*size, container_width=size[0])
    assert canvas.width() == max(geometry.canvas_width, 1)
    render(canvas)


def test_superposition_canvas(qapp):
    from quantumsketches.view.widgets.superposition_canvas import SuperpositionCanvas

    state = SuperpositionState(prob_up=0.3, rng=np.random.default_rng(3))
    canvas = SuperpositionCanvas(state, LIGHT_PALETTE)
    canvas.apply_viewport(1400, 900, 900)
    render(canvas)

    state.measure()
    canvas.advance(1)
    render(canvas)


def test_entanglement_canvas_states(qapp):
    from quantumsketches.view.widgets.entanglement_canvas import EntanglementCanvas

    pair = EntangledPair(rng=np.random.default_rng(5))
    canvas = EntanglementCanvas(pair, DARK_PALETTE, rng=np.random.default_rng(5))
    canvas.apply_viewport(1400, 900, 800)
    render(canvas)

    pair.generate()
    before = canvas.link_t.copy()
    canvas.advance(2)
    assert np.all((canvas.link_t >= 0.0) & (canvas.link_t <= 1.0))
    assert not np.array_equal(before, canvas.link_t)
    render(canvas)

    pair.measure("A")
    frozen = canvas.link_t.copy()
    canvas.advance(2)
    np.testing.assert_array_equal(frozen, canvas.link_t)
    render(canvas)


def test_entanglement_panel_button_states(qapp):
    from quantumsketches.view.tabs.tab_entanglement import EntanglementControlPanel

    pair = EntangledPair()
    panel = EntanglementControlPanel(pair)
    assert not panel.btn_measure_a.isEnabled()

    panel.btn_generate.click()
    assert panel.btn_measure_a.isEnabled() and panel.btn_measure_b.isEnabled()

    panel.btn_measure_b.click()
    assert pair.collapsed
    assert not panel.btn_measure_a.isEnabled() and not panel.btn_measure_b.isEnabled()


def test_double_slit_panel_updates_state(qapp):
    from quantumsketches.view.tabs.tab_double_slit import DoubleSlitControlPanel

    state = DoubleSlitState()
    panel = DoubleSlitControlPanel(state)
    panel.sld_wavelength.slider.setValue(650)
    assert state.params.wavelength == 650
    assert panel.sld_wavelength.lbl_value.text() == "650 nm"

    panel.btn_observer.click()
    assert state.observer_active
    assert panel.btn_observer.text() == "👁 Observer ON"


def test_superposition_panel_resets_unmeasured_state(qapp):
    from quantumsketches.view.tabs.tab_superposition import SuperpositionControlPanel

    state = SuperpositionState()
    panel = SuperpositionControlPanel(state)
    panel.sld_probability.slider.setValue(80)
    assert state.prob_up == pytest.approx(0.8)

    panel.btn_measure.click()
    assert state.measured
    assert not panel.btn_measure.isEnabled()
    panel.btn_reset.click()
    assert not state.measured
    assert panel.btn_measure.isEnabled()


def test_profile_csv_export(qapp, tmp_path, geometry, default_setup):
    from quantumsketches.view.dialogs.intensity_profile_dialog import write_profile_csv

    path = tmp_path / "profile.csv"
    write_profile_csv(str(path), default_setup, observed=False, geometry=geometry, samples=50)
    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["position", "interference", "envelope", "intensity"]
    assert len(rows) == 51
    assert all(0.0 <= float(row[3]) <= 1.0 for row in rows[1:])
    assert float(rows[1][0]) < 0 < float(rows[-1][0])


def test_profile_dialog_builds(qapp, geometry):
    from quantumsketches.view.dialogs.intensity_profile_dialog import IntensityProfileDialog

    state = DoubleSlitState()
    dialog = IntensityProfileDialog(state, geometry)
    state.toggle_observer()
    dialog.refresh()
    assert not dialog.chk_envelope.isEnabled()
    dialog.close()


def test_main_window_smoke(qapp):
    from quantumsketches.app.application import VISIBLE_APP_NAME
    from quantumsketches.view.main_window import MainWindow

    window = MainWindow()
    assert window.windowTitle() == VISIBLE_APP_NAME
    window.resize(1200, 800)
    window.relayout()
    window.on_frame(1.0)
    window.tab_bar.setCurrentIndex(2)
    assert window.pages_stack.currentIndex() == 2
    window.on_frame(1.0)
    window.close()
    assert not window.clock.is_running()
