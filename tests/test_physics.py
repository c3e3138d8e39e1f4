"""Tests for the interference and diffraction evaluator."""

import numpy as np
import pytest

from quantumsketches.model.geometry import calculate_dimensions
from quantumsketches.model.physics import (
    SlitSetup, diffraction_envelope, intensity_profile, interference_term, observed_intensity,
    particle_position, path_difference, phase, profile_components, screen_intensity,
    simulation_wavelength, wave_field,
)
from quantumsketches.model.state import SimulationParameters


def make_setup(geometry, **params):
    return SlitSetup.from_state(SimulationParameters(**params), geometry)


class TestBuildingBlocks:
    def test_simulation_wavelength_range(self):
        assert simulation_wavelength(380, 1.0) == pytest.approx(20.0)
        assert simulation_wavelength(780, 1.0) == pytest.approx(50.0)
        assert simulation_wavelength(580, 2.0) == pytest.approx(70.0)

    def test_path_difference_zero_on_symmetry_axis(self):
        assert path_difference(100.0, 400.0, (60.0, 0.0), (140.0, 0.0)) == pytest.approx(0.0)

    def test_path_difference_is_vectorised(self):
        x = np.array([0.0, 50.0, 100.0])
        delta = path_difference(x, 0.0, (0.0, 0.0), (100.0, 0.0))
        np.testing.assert_allclose(delta, [-100.0, 0.0, 100.0])

    @pytest.mark.parametrize("n", [0, 1, 2, 5])
    def test_whole_wavelength_difference_is_bright(self, n):
        wavelength = 30.0
        assert interference_term(phase(n * wavelength, wavelength)) == pytest.approx(1.0)

    @pytest.mark.parametrize("n", [0, 1, 3])
    def test_half_wavelength_difference_is_dark(self, n):
        wavelength = 30.0
        assert interference_term(phase((n + 0.5) * wavelength, wavelength)) == pytest.approx(0.0, abs=1e-12)

    def test_envelope_on_axis_is_one(self):
        assert diffraction_envelope(0.0, 15.0, 30.0) == 1.0

    def test_envelope_zero_width_slit_is_one(self):
        theta = np.linspace(-1.0, 1.0, 11)
        np.testing.assert_array_equal(diffraction_envelope(theta, 0.0, 30.0), np.ones_like(theta))

    def test_envelope_first_minimum(self):
        # beta = pi when w sin(theta) = lambda
        theta = np.arcsin(30.0 / 60.0)
        assert diffraction_envelope(theta, 60.0, 30.0) == pytest.approx(0.0, abs=1e-12)

    def test_envelope_never_exceeds_one(self):
        theta = np.linspace(-1.5, 1.5, 301)
        values = diffraction_envelope(theta, 40.0, 20.0)
        assert np.all(values <= 1.0 + 1e-12)
        assert np.all(values >= 0.0)


class TestScreenIntensity:
    def test_central_maximum(self, default_setup):
        assert screen_intensity(default_setup, default_setup.center_x) == pytest.approx(1.0)

    def test_scalar_input_returns_float(self, default_setup):
        assert isinstance(screen_intensity(default_setup, default_setup.center_x), float)

    def test_symmetric_about_centre(self, default_setup):
        dx = np.linspace(1.0, 200.0, 50)
        left = screen_intensity(default_setup, default_setup.center_x - dx)
        right = screen_intensity(default_setup, default_setup.center_x + dx)
        np.testing.assert_allclose(left, right, atol=1e-9)

    def test_zero_separation_has_no_fringes(self, geometry):
        setup = make_setup(geometry, slit_separation=0, slit_width=0)
        x, intensity = intensity_profile(setup, samples=200)
        np.testing.assert_allclose(intensity, 1.0)

    def test_zero_separation_interference_is_flat_with_open_slits(self, geometry):
        setup = make_setup(geometry, slit_separation=0, slit_width=15)
        profile = profile_components(setup, samples=200)
        np.testing.assert_allclose(profile.interference, 1.0)
        assert profile.intensity.min() < 1.0

    def test_profile_has_dark_fringes(self, default_setup):
        _, intensity = intensity_profile(default_setup, samples=2000)
        assert intensity.max() == pytest.approx(1.0, abs=1e-3)
        assert intensity.min() < 0.05

    def test_profile_stays_in_unit_interval(self, geometry):
        for wavelength in (380, 550, 780):
            for width in (0, 15, 40):
                setup = make_setup(geometry, wavelength=wavelength, slit_width=width, slit_separation=200)
                _, intensity = intensity_profile(setup)
                assert np.all((intensity >= 0.0) & (intensity <= 1.0))

    def test_profile_components_product(self, default_setup):
        profile = profile_components(default_setup, samples=300)
        assert profile.x.shape == profile.intensity.shape == (300,)
        np.testing.assert_allclose(profile.intensity, np.clip(profile.interference * profile.envelope, 0, 1))
        _, intensity = intensity_profile(default_setup, samples=300)
        np.testing.assert_allclose(profile.intensity, intensity)

    def test_profile_spans_screen(self, default_setup):
        x, _ = intensity_profile(default_setup, samples=50)
        assert x[0] == pytest.approx(default_setup.screen_left)
        assert x[-1] == pytest.approx(default_setup.screen_right)


class TestObservedPattern:
    def test_bands_peak_behind_slits(self, default_setup):
        assert observed_intensity(default_setup, default_setup.slit1_x) == pytest.approx(1.0)
        assert observed_intensity(default_setup, default_setup.slit2_x) == pytest.approx(1.0)

    def test_no_interference_zeros(self, default_setup):
        x, intensity = intensity_profile(default_setup, samples=800, observed=True)
        between = (x > default_setup.slit1_x) & (x < default_setup.slit2_x)
        assert np.all(intensity > 0.0)
        assert intensity[between].min() > 0.5

    def test_observed_ignores_wavelength(self, geometry):
        a = make_setup(geometry, wavelength=400)
        b = make_setup(geometry, wavelength=700)
        x = np.linspace(a.screen_left, a.screen_right, 100)
        np.testing.assert_allclose(screen_intensity(a, x, observed=True), screen_intensity(b, x, observed=True))


class TestAnimation:
    def test_wave_field_shape_and_range(self, default_setup):
        xs = np.linspace(0, 500, 40)
        ys = np.linspace(200, 400, 25)
        field = wave_field(default_setup, xs, ys, t=1.3)
        assert field.shape == (25, 40)
        assert np.all((field >= 0.0) & (field <= 1.0))

    def test_particle_starts_at_source(self, default_setup):
        x, y = particle_position(default_setup, 0, 0.0)
        assert x == pytest.approx(default_setup.center_x)
        assert y == pytest.approx(default_setup.source_y + 20 * default_setup.scale)

    def test_particle_passes_through_a_slit(self, default_setup):
        # index 0 at t=1.2: progress 0.4 (inside the slit), seed 0.6 (second slit)
        x, _ = particle_position(default_setup, 0, 1.2)
        assert x == pytest.approx(default_setup.slit2_x)

    def test_particle_scale_with_geometry(self):
        small = make_setup(calculate_dimensions(1000, 3000))
        large = make_setup(calculate_dimensions(1900, 3000))
        _, y_small = particle_position(small, 3, 0.1)
        _, y_large = particle_position(large, 3, 0.1)
        assert y_large > y_small
