"""Tests for simulation.py: vector field, Euler step, start points, reference solver."""

import dataclasses

import numpy as np
import pytest

from simulation import (
    ANCHOR_RANGE, START_JITTER, LorenzParams, derivatives, euler_step,
    generate_start_points, integrate, is_finite_state, reference_solution,
)


class TestDerivatives:
    """Test the derivatives function for known states."""

    def test_origin_is_fixed_point(self):
        params = LorenzParams()
        assert derivatives((0.0, 0.0, 0.0), params) == (0.0, 0.0, 0.0)

    def test_known_state(self):
        params = LorenzParams(sigma=10.0, rho=28.0, beta=8.0 / 3.0)
        dx, dy, dz = derivatives((0.1, 0.0, 0.0), params)
        assert dx == pytest.approx(-1.0)
        assert dy == pytest.approx(2.8)
        assert dz == 0.0

    def test_uses_unmodified_input(self):
        """Every component must read the original x, y, z."""
        params = LorenzParams(sigma=2.0, rho=5.0, beta=3.0)
        x, y, z = 1.5, -2.0, 4.0
        dx, dy, dz = derivatives((x, y, z), params)
        assert dx == 2.0 * (y - x)
        assert dy == x * (5.0 - z) - y
        assert dz == x * y - 3.0 * z

    def test_nontrivial_fixed_points(self):
        """C+/- = (+/-sqrt(beta(rho-1)), same, rho-1) are equilibria."""
        params = LorenzParams()
        c = np.sqrt(params.beta * (params.rho - 1))
        for sign in (1, -1):
            d = derivatives((sign * c, sign * c, params.rho - 1), params)
            assert max(abs(v) for v in d) < 1e-9

    def test_returns_three_values(self):
        d = derivatives((1.0, 2.0, 3.0), LorenzParams())
        assert len(d) == 3


class TestEulerStep:
    """Test a single forward Euler step."""

    def test_worked_example(self):
        params = LorenzParams(sigma=10.0, rho=28.0, beta=8.0 / 3.0, dt=0.01)
        x, y, z = euler_step((0.1, 0.0, 0.0), params)
        assert x == pytest.approx(0.09)
        assert y == pytest.approx(0.028)
        assert z == 0.0

    def test_zero_dt_is_noop(self):
        params = LorenzParams(dt=0.0)
        state = (1.0, 2.0, 3.0)
        assert euler_step(state, params) == state

    def test_negative_dt_runs_backward(self):
        """A step forward then a step with -dt nearly returns to the start."""
        forward = LorenzParams(dt=1e-5)
        backward = LorenzParams(dt=-1e-5)
        start = (1.0, 2.0, 3.0)
        back = euler_step(euler_step(start, forward), backward)
        assert np.allclose(back, start, atol=1e-7)

    def test_params_are_frozen(self):
        params = LorenzParams()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.dt = 0.5


class TestIntegrate:
    """Test the batch Euler helper."""

    def test_shape_and_start(self):
        path = integrate(LorenzParams(), (1.0, 1.0, 1.0), 100)
        assert path.shape == (101, 3)
        assert tuple(path[0]) == (1.0, 1.0, 1.0)

    def test_matches_repeated_steps(self):
        params = LorenzParams()
        state = (1.0, 1.0, 1.0)
        path = integrate(params, state, 50)
        for _ in range(50):
            state = euler_step(state, params)
        assert tuple(path[-1]) == state

    def test_deterministic(self):
        """Repeated runs from the same start are bit-identical."""
        params = LorenzParams()
        a = integrate(params, (0.5, -0.3, 12.0), 2000)
        b = integrate(params, (0.5, -0.3, 12.0), 2000)
        assert np.array_equal(a, b)

    def test_zero_steps(self):
        path = integrate(LorenzParams(), (1.0, 2.0, 3.0), 0)
        assert path.shape == (1, 3)

    def test_negative_steps_rejected(self):
        with pytest.raises(ValueError):
            integrate(LorenzParams(), (1.0, 2.0, 3.0), -1)


class TestDivergence:
    """Nearby start points separate by many orders of magnitude."""

    def test_sensitive_dependence(self):
        params = LorenzParams(dt=0.01)
        a = integrate(params, (1.0, 1.0, 1.0), 5000)
        b = integrate(params, (1.0 + 1e-5, 1.0, 1.0), 5000)
        distance = np.linalg.norm(a - b, axis=1)
        assert distance[0] == pytest.approx(1e-5)
        assert distance[-1000:].max() > 1.0

    def test_trajectory_stays_bounded_at_default_params(self):
        path = integrate(LorenzParams(dt=0.01), (1.0, 1.0, 1.0), 5000)
        assert np.all(np.isfinite(path))
        assert np.abs(path).max() < 100.0


class TestReferenceSolution:
    """Cross-check Euler against the DOP853 reference."""

    def test_shapes(self):
        params = LorenzParams(dt=0.01)
        t, states = reference_solution(params, (1.0, 1.0, 1.0), t_end=1.0)
        assert t.shape == (101,)
        assert states.shape == (101, 3)
        assert np.allclose(states[0], (1.0, 1.0, 1.0))

    def test_euler_converges_first_order(self):
        """Halving dt should roughly halve the Euler error on a short horizon."""
        start = (1.0, 1.0, 1.0)
        errors = []
        for dt, n in [(0.002, 100), (0.001, 200)]:
            params = LorenzParams(dt=dt)
            path = integrate(params, start, n)
            _, ref = reference_solution(params, start, t_end=n * dt)
            errors.append(np.abs(path[-1] - ref[-1]).max())
        coarse, fine = errors
        assert fine < 0.5
        assert fine < 0.75 * coarse


class TestGenerateStartPoints:
    """Test the clustered start-point generator."""

    def test_count(self):
        assert len(generate_start_points(7)) == 7

    def test_clustered_within_jitter(self):
        pts = np.array(generate_start_points(50, np.random.default_rng(1)))
        spread = pts.max(axis=0) - pts.min(axis=0)
        assert np.all(spread < START_JITTER)

    def test_within_anchor_range(self):
        pts = np.array(generate_start_points(20, np.random.default_rng(2)))
        assert np.all(pts >= 0.0)
        assert np.all(pts < ANCHOR_RANGE + START_JITTER)

    def test_seeded_rng_reproducible(self):
        a = generate_start_points(3, np.random.default_rng(42))
        b = generate_start_points(3, np.random.default_rng(42))
        assert a == b

    def test_fresh_anchor_each_call(self):
        rng = np.random.default_rng(3)
        a = np.array(generate_start_points(1, rng))
        b = np.array(generate_start_points(1, rng))
        assert np.abs(a - b).max() > START_JITTER

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_rejected(self, n):
        with pytest.raises(ValueError):
            generate_start_points(n)


class TestIsFiniteState:

    def test_finite(self):
        assert is_finite_state((1.0, -2.0, 3.0))

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite(self, bad):
        assert not is_finite_state((1.0, bad, 3.0))
