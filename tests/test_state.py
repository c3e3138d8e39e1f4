"""Tests for the simulation state and the spin measurement state machine."""

import numpy as np
import pytest

from quantumsketches.model.state import (
    DoubleSlitState, EntangledPair, ParticleState, SimulationParameters, Spin, SuperpositionState,
)


class TestSimulationParameters:
    def test_defaults(self):
        params = SimulationParameters()
        assert (params.wavelength, params.slit_separation, params.slit_width, params.wave_speed) == (550, 80, 15, 5)

    def test_setters_clamp(self):
        params = SimulationParameters()
        params.set_wavelength(1000)
        params.set_slit_separation(-5)
        params.set_slit_width(99)
        params.set_wave_speed(0)
        assert params.wavelength == 780
        assert params.slit_separation == 0
        assert params.slit_width == 40
        assert params.wave_speed == 1

    def test_constructor_clamps(self):
        assert SimulationParameters(wavelength=100).wavelength == 380

    def test_time_advances_with_speed(self):
        params = SimulationParameters(wave_speed=5)
        params.advance(2)
        assert params.time == pytest.approx(0.5)


class TestDoubleSlitState:
    def test_observer_toggle_starts_fade(self):
        state = DoubleSlitState()
        assert state.toggle_observer() is True
        assert state.observer_decay == 1.0
        state.advance(10)
        assert state.observer_decay == pytest.approx(0.7)
        state.advance(100)
        assert state.observer_decay == 0.0
        assert state.toggle_observer() is False


class TestSpin:
    def test_opposite(self):
        assert Spin.UP.opposite() is Spin.DOWN
        assert Spin.DOWN.opposite() is Spin.UP

    def test_labels(self):
        assert Spin.UP.ket == "|↑⟩"
        assert Spin.DOWN.arrow == "↓"

    def test_measurement_fade_floors_at_zero(self):
        particle = ParticleState()
        particle.collapse(Spin.UP)
        particle.advance(25)
        assert particle.decay == pytest.approx(0.5)
        particle.advance(1000)
        assert particle.decay == 0.0


class TestSuperposition:
    def test_certain_outcomes(self):
        for _ in range(20):
            up = SuperpositionState(prob_up=1.0)
            assert up.measure() is Spin.UP
            down = SuperpositionState(prob_up=0.0)
            assert down.measure() is Spin.DOWN

    def test_probabilities_sum_to_one(self):
        state = SuperpositionState()
        for p in (0.0, 0.13, 0.5, 0.99, 1.0, 1.7, -0.2):
            state.set_probability(p)
            assert sum(state.probabilities) == pytest.approx(1.0)
            assert 0.0 <= state.prob_up <= 1.0

    def test_outcome_frequency_follows_weight(self):
        state = SuperpositionState(prob_up=0.7, rng=np.random.default_rng(42))
        ups = 0
        trials = 4000
        for _ in range(trials):
            state.reset()
            ups += state.measure() is Spin.UP
        assert ups / trials == pytest.approx(0.7, abs=0.03)

    def test_second_measurement_is_noop(self):
        state = SuperpositionState(rng=np.random.default_rng(0))
        first = state.measure()
        assert first is not None
        assert state.measure() is None
        assert state.particle.spin is first

    def test_probability_change_keeps_measured_result(self):
        state = SuperpositionState(prob_up=1.0)
        state.measure()
        state.set_probability(0.0)
        assert state.measured
        assert state.particle.spin is Spin.UP

    def test_reset(self):
        state = SuperpositionState()
        state.measure()
        state.reset()
        assert not state.measured
        assert state.particle.decay == 0.0


class TestEntangledPair:
    def test_measure_before_generate_is_noop(self):
        pair = EntangledPair()
        assert pair.measure("A") is False
        assert not pair.a.measured and not pair.b.measured

    @pytest.mark.parametrize("label", ["A", "B"])
    def test_partners_are_always_opposite(self, label):
        pair = EntangledPair(rng=np.random.default_rng(7))
        outcomes = set()
        for _ in range(200):
            pair.generate()
            assert pair.measure(label) is True
            assert pair.a.measured and pair.b.measured
            assert pair.a.spin is pair.b.spin.opposite()
            outcomes.add(pair.a.spin)
        assert outcomes == {Spin.UP, Spin.DOWN}

    def test_outcome_uses_one_uniform_draw(self):
        expected = np.random.default_rng(11)
        pair = EntangledPair(rng=np.random.default_rng(11))
        for label in ["A", "B"] * 20:
            pair.generate()
            pair.measure(label)
            spin = Spin.UP if expected.random() < 0.5 else Spin.DOWN
            assert pair.particle(label).spin is spin
            assert pair.partner(label).spin is spin.opposite()

    def test_measurement_flashes(self):
        pair = EntangledPair()
        pair.generate()
        pair.measure("B")
        assert pair.b.decay == 1.0
        assert pair.a.decay == pytest.approx(0.8)

    def test_remeasure_is_noop(self):
        pair = EntangledPair()
        pair.generate()
        pair.measure("A")
        spins = (pair.a.spin, pair.b.spin)
        assert pair.measure("A") is False
        assert pair.measure("B") is False
        assert (pair.a.spin, pair.b.spin) == spins

    def test_can_measure(self):
        pair = EntangledPair()
        assert not pair.can_measure("A")
        pair.generate()
        assert pair.can_measure("A") and pair.can_measure("B")
        pair.measure("A")
        assert not pair.can_measure("A") and not pair.can_measure("B")
        assert pair.collapsed

    def test_generate_clears_previous_measurement(self):
        pair = EntangledPair()
        pair.generate()
        pair.measure("A")
        pair.generate()
        assert not pair.a.measured and not pair.b.measured
        assert pair.entanglement_decay == 1.0

    @pytest.mark.parametrize("label", ["C", "", "a"])
    def test_unknown_label_raises(self, label):
        pair = EntangledPair()
        pair.generate()
        with pytest.raises(ValueError):
            pair.measure(label)
        with pytest.raises(ValueError):
            pair.particle(label)

    def test_distance_is_clamped(self):
        pair = EntangledPair(distance=20)
        assert pair.distance == 100
        pair.set_distance(900)
        assert pair.distance == 500

    def test_link_fade(self):
        pair = EntangledPair()
        pair.generate()
        pair.advance(20)
        assert pair.entanglement_decay == pytest.approx(0.7)
        assert pair.time == pytest.approx(0.4)
