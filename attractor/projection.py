"""Orthographic 3D-to-screen projection for the attractor canvas.

Pure NumPy so it can be tested without a QApplication. The scene is
spun about the z axis (azimuth), then viewed from the -y side with the
camera raised by the elevation angle, z pointing up on screen.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

# Camera at (0, -100, 50) looking at the origin
DEFAULT_ELEVATION = float(np.arctan2(50.0, 100.0))


@dataclass(frozen=True)
class Camera:
    """Viewing parameters for project_points()."""

    azimuth: float = 0.0
    elevation: float = DEFAULT_ELEVATION
    scale: float = 8.0
    focus: tuple[float, float, float] = (0.0, 0.0, 25.0)


def view_matrix(azimuth: float, elevation: float) -> np.ndarray:
    """Return the (3, 3) matrix mapping world xyz to (right, up, depth).

    Depth grows away from the camera.
    """
    ca, sa = np.cos(azimuth), np.sin(azimuth)
    ce, se = np.cos(elevation), np.sin(elevation)

    spin = np.array([
        [ca, -sa, 0.0],
        [sa, ca, 0.0],
        [0.0, 0.0, 1.0],
    ])
    tilt = np.array([
        [1.0, 0.0, 0.0],
        [0.0, se, ce],
        [0.0, ce, -se],
    ])
    return tilt @ spin


def project_points(points, camera: Camera, width: float, height: float) -> np.ndarray:
    """Project (M, 3) world points onto (M, 2) pixel coordinates.

    The camera focus lands on the widget centre; pixel y grows downward.
    """
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
    rel = pts - np.asarray(camera.focus, dtype=np.float64)
    view = rel @ view_matrix(camera.azimuth, camera.elevation).T

    pixels = np.empty((len(pts), 2), dtype=np.float64)
    pixels[:, 0] = width / 2 + view[:, 0] * camera.scale
    pixels[:, 1] = height / 2 - view[:, 1] * camera.scale
    return pixels


def decimate(points: np.ndarray, max_points: int) -> np.ndarray:
    """Stride through points so at most max_points remain, keeping the last one."""
    n = len(points)
    if n <= max_points:
        return points
    stride = -(-n // max_points)
    # Reverse-stride from the end so the newest point is always drawn
    return points[::-1][::stride][::-1]
