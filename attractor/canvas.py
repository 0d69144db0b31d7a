"""Attractor canvas: QPainter rendering of the Lorenz traces.

Reads trace buffers and current positions from the engine's trajectories;
never mutates them.
"""

import dataclasses

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QPolygonF
from PyQt6.QtWidgets import QWidget

from attractor.projection import Camera, decimate, project_points

# Length of each drawn axis, in world units
AXIS_LENGTH = 200.0

# Per-trace cap on polyline vertices handed to QPainter
MAX_DRAW_POINTS = 5000


class AttractorCanvas(QWidget):
    """Custom widget that draws the trajectories using QPainter."""

    MARKER_RADIUS = 4.0

    def __init__(self, parent=None):
        super().__init__(parent)
        self.trajectories = ()
        self.trace_length = 1000
        self.camera = Camera()
        self.show_axes = False
        self.setMinimumSize(400, 400)

    def set_trajectories(self, trajectories, trace_length):
        """Point the canvas at the trajectories to draw on the next paint."""
        self.trajectories = trajectories
        self.trace_length = int(trace_length)
        self.update()

    def rotate(self, delta):
        self.camera = dataclasses.replace(
            self.camera, azimuth=self.camera.azimuth + delta,
        )

    def _project(self, points):
        return project_points(points, self.camera, self.width(), self.height())

    def _draw_axes(self, painter):
        """Draw the x (red), y (green) and z (blue) axes from the world origin."""
        origin = (0.0, 0.0, 0.0)
        axes = [
            ((AXIS_LENGTH, 0.0, 0.0), QColor(220, 60, 60)),
            ((0.0, AXIS_LENGTH, 0.0), QColor(60, 170, 60)),
            ((0.0, 0.0, AXIS_LENGTH), QColor(60, 90, 220)),
        ]
        for tip, color in axes:
            (x0, y0), (x1, y1) = self._project([origin, tip])
            pen = QPen(color)
            pen.setWidthF(1.5)
            painter.setPen(pen)
            painter.drawLine(QPointF(x0, y0), QPointF(x1, y1))

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.fillRect(self.rect(), QColor(255, 255, 255))

        if self.show_axes:
            self._draw_axes(painter)

        # Traces
        line_pen = QPen(QColor(0, 0, 0))
        line_pen.setWidthF(1.0)
        painter.setPen(line_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        for trajectory in self.trajectories:
            pts = trajectory.buffer.window_points(self.trace_length)
            if len(pts) < 2:
                continue
            pixels = self._project(decimate(pts, MAX_DRAW_POINTS))
            painter.drawPolyline(QPolygonF([QPointF(x, y) for x, y in pixels]))

        # Current position markers
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(34, 34, 34)))
        for trajectory in self.trajectories:
            (px, py), = self._project([trajectory.position])
            painter.drawEllipse(QPointF(px, py), self.MARKER_RADIUS, self.MARKER_RADIUS)

        painter.end()
