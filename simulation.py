"""Lorenz system physics.

Implements the Lorenz vector field, a single explicit Euler step, and
the start-point generator used to seed trajectories. A high-accuracy
SciPy reference solver is provided for measuring Euler drift; it is
never used in the per-frame path.
"""

import math
from dataclasses import dataclass

import numpy as np
from scipy.integrate import solve_ivp


DEFAULT_SIGMA = 10.0
DEFAULT_RHO = 28.0
DEFAULT_BETA = 8.0 / 3.0

# Start-point anchor range and per-point jitter
ANCHOR_RANGE = 20.0
START_JITTER = 0.02


@dataclass(frozen=True)
class LorenzParams:
    """Parameters of the Lorenz system and the frame stepping policy."""

    sigma: float = DEFAULT_SIGMA
    rho: float = DEFAULT_RHO
    beta: float = DEFAULT_BETA
    dt: float = 0.01
    steps_per_frame: int = 1


def derivatives(state, params):
    """Compute the three first-order ODEs for the Lorenz system.

    State vector: (x, y, z)
    Returns: (dx/dt, dy/dt, dz/dt)
    """
    x, y, z = state
    sigma, rho, beta = params.sigma, params.rho, params.beta

    dx = sigma * (y - x)
    dy = x * (rho - z) - y
    dz = x * y - beta * z

    return dx, dy, dz


def euler_step(state, params):
    """Advance a state by one forward Euler step of size params.dt."""
    x, y, z = state
    dx, dy, dz = derivatives(state, params)
    dt = params.dt
    return x + dx * dt, y + dy * dt, z + dz * dt


def integrate(params, start, n_steps):
    """Apply n_steps Euler steps from start.

    Returns:
        path: 2D array of shape (n_steps + 1, 3); row 0 is the start.
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")
    path = np.empty((n_steps + 1, 3), dtype=np.float64)
    state = tuple(float(v) for v in start)
    path[0] = state
    for i in range(1, n_steps + 1):
        state = euler_step(state, params)
        path[i] = state
    return path


def reference_solution(params, start, t_end, dt=None):
    """Solve the system with DOP853 at tight tolerance.

    Sampled at the same spacing as integrate() so the two can be
    compared row by row.

    Returns:
        t_array: 1D array of time values at uniform dt spacing
        state_array: 2D array of shape (len(t_array), 3)
    """
    if dt is None:
        dt = params.dt
    n = int(round(t_end / dt))
    t_eval = np.arange(n + 1) * dt

    sol = solve_ivp(
        fun=lambda t, y: derivatives(y, params),
        t_span=(0.0, t_eval[-1]),
        y0=[float(v) for v in start],
        method="DOP853",
        t_eval=t_eval,
        rtol=1e-12,
        atol=1e-12,
    )

    return sol.t, sol.y.T  # shape: (n + 1, 3)


def generate_start_points(n, rng=None):
    """Generate n start points clustered around one random anchor.

    The anchor has each coordinate in [0, ANCHOR_RANGE); every point adds
    independent jitter in [0, START_JITTER) per coordinate, so the
    trajectories start nearly identical and later diverge.
    """
    if n <= 0:
        raise ValueError(f"Number of start points must be positive, got {n}")
    if rng is None:
        rng = np.random.default_rng()

    anchor = rng.uniform(0.0, ANCHOR_RANGE, size=3)
    jitter = rng.uniform(0.0, START_JITTER, size=(n, 3))
    points = anchor + jitter
    return [tuple(float(v) for v in row) for row in points]


def is_finite_state(state):
    """True when all three coordinates are finite numbers."""
    return all(math.isfinite(v) for v in state)
