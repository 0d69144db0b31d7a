"""Simulation engine: N independent Lorenz trajectories with trace history.

The engine is a plain object owned by its caller. A render loop calls
advance_frame() once per tick and reads each trajectory's position and
trace buffer; the engine never touches render state.
"""

from __future__ import annotations

import dataclasses
import logging

import numpy as np

from simulation import (
    LorenzParams, euler_step, generate_start_points, is_finite_state,
)
from trace_buffer import DEFAULT_CAPACITY, TraceBuffer

logger = logging.getLogger(__name__)

DEFAULT_NUM_TRACES = 3


# ---------------------------------------------------------------------------
# Trajectory
# ---------------------------------------------------------------------------

class Trajectory:
    """One live Lorenz state coupled to its trace buffer."""

    def __init__(self, start, capacity: int = DEFAULT_CAPACITY):
        self.buffer = TraceBuffer(capacity)
        self.state = tuple(float(v) for v in start)
        self.diverged = False

    @property
    def position(self) -> tuple[float, float, float]:
        return self.state

    def advance(self, params: LorenzParams, n_steps: int = 1):
        """Run n_steps Euler steps, appending every new state to the buffer."""
        state = self.state
        buffer = self.buffer
        for _ in range(n_steps):
            state = euler_step(state, params)
            buffer.append(state)
        self.state = state
        return state

    def reseed(self, start) -> None:
        """Clear the buffer in place and restart from a new point."""
        self.buffer.clear()
        self.state = tuple(float(v) for v in start)
        self.diverged = False


# ---------------------------------------------------------------------------
# SimulationEngine
# ---------------------------------------------------------------------------

def _validate_params(params: LorenzParams) -> None:
    steps = params.steps_per_frame
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
        raise ValueError(f"steps_per_frame must be an integer, got {steps!r}")
    if steps < 1:
        raise ValueError(f"steps_per_frame must be at least 1, got {steps}")


def _validate_trace_count(n) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"Trace count must be an integer, got {n!r}")
    if n <= 0:
        raise ValueError(f"Trace count must be positive, got {n}")
    return int(n)


class SimulationEngine:
    """Owns the trajectories, the shared parameters and the pause state.

    Parameters are a frozen LorenzParams replaced wholesale on every
    update, so the snapshot taken at the start of advance_frame() stays
    consistent for every trajectory and sub-step of that frame.
    """

    def __init__(
        self,
        params: LorenzParams | None = None,
        num_traces: int = DEFAULT_NUM_TRACES,
        capacity: int = DEFAULT_CAPACITY,
        rng: np.random.Generator | None = None,
        paused: bool = False,
    ):
        if params is None:
            params = LorenzParams()
        _validate_params(params)
        if capacity <= 0:
            raise ValueError(f"Trace buffer capacity must be positive, got {capacity}")

        self._params = params
        self._defaults = (params.sigma, params.rho, params.beta)
        self._capacity = capacity
        self._rng = rng if rng is not None else np.random.default_rng()
        self._paused = bool(paused)
        self._trajectories: list[Trajectory] = []
        self.frame_count = 0
        self.sim_time = 0.0

        self.set_trace_count(num_traces)

    # -- Read accessors --

    @property
    def params(self) -> LorenzParams:
        return self._params

    @property
    def trajectories(self) -> tuple[Trajectory, ...]:
        return tuple(self._trajectories)

    @property
    def num_traces(self) -> int:
        return len(self._trajectories)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def paused(self) -> bool:
        return self._paused

    def positions(self) -> np.ndarray:
        """Current positions as an (N, 3) array in trajectory order."""
        return np.array([t.position for t in self._trajectories], dtype=np.float64)

    # -- Frame loop --

    def advance_frame(self) -> int:
        """Advance every trajectory by one frame.

        Returns:
            Number of Euler steps taken per trajectory (0 while paused).
        """
        if self._paused:
            return 0

        params = self._params
        n_steps = params.steps_per_frame
        for index, trajectory in enumerate(self._trajectories):
            trajectory.advance(params, n_steps)
            if not trajectory.diverged and not is_finite_state(trajectory.state):
                trajectory.diverged = True
                logger.warning(
                    "Trajectory %d left the finite range (sigma=%g, rho=%g, "
                    "beta=%g, dt=%g)",
                    index, params.sigma, params.rho, params.beta, params.dt,
                )

        self.frame_count += 1
        self.sim_time += n_steps * params.dt
        return n_steps

    # -- Reconfiguration --

    def set_trace_count(self, n: int) -> None:
        """Replace all trajectories with n freshly seeded ones."""
        n = _validate_trace_count(n)
        starts = generate_start_points(n, self._rng)
        self._trajectories = [Trajectory(p, self._capacity) for p in starts]
        self._reset_clock()
        logger.info("Created %d trajectories (capacity %d)", n, self._capacity)

    def clear_traces(self) -> None:
        """Reseed every trajectory around a new anchor, reusing its buffer."""
        starts = generate_start_points(len(self._trajectories), self._rng)
        for trajectory, start in zip(self._trajectories, starts):
            trajectory.reseed(start)
        self._reset_clock()
        logger.info("Cleared %d traces", len(self._trajectories))

    def update_parameters(self, **patch) -> LorenzParams:
        """Merge the given fields into the parameters.

        Raises:
            TypeError: If a field name is not a LorenzParams field.
            ValueError: If steps_per_frame is not an integer >= 1.
        """
        params = dataclasses.replace(self._params, **patch)
        _validate_params(params)
        self._params = params
        logger.debug("Parameters updated: %s", patch)
        return params

    def reset_parameters(self) -> LorenzParams:
        """Restore sigma, rho and beta to their construction-time values."""
        sigma, rho, beta = self._defaults
        self._params = dataclasses.replace(
            self._params, sigma=sigma, rho=rho, beta=beta,
        )
        logger.info("Reset Lorenz parameters to sigma=%g rho=%g beta=%g",
                    sigma, rho, beta)
        return self._params

    # -- Pause --

    def set_paused(self, paused: bool) -> None:
        self._paused = bool(paused)

    def toggle_paused(self) -> bool:
        """Flip between running and paused; returns the new paused flag."""
        self._paused = not self._paused
        logger.info("Simulation %s", "paused" if self._paused else "running")
        return self._paused

    def _reset_clock(self) -> None:
        self.frame_count = 0
        self.sim_time = 0.0
