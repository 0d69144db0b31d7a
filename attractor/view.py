"""Attractor view: orchestrates the engine, canvas, and controls.

A QTimer drives one engine frame per tick on the GUI thread, then hands
the trajectories to the canvas for painting.
"""

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QSplitter, QLabel

from engine import SimulationEngine
from attractor.canvas import AttractorCanvas
from attractor.controls import AttractorControls


class AttractorView(QWidget):
    """Complete attractor mode: canvas + controls + engine wiring."""

    FPS = 60

    def __init__(self, engine=None, parent=None):
        super().__init__(parent)

        self.engine = engine if engine is not None else SimulationEngine()

        self.canvas = AttractorCanvas()
        self.controls = AttractorControls(
            self.engine.params, self.engine.num_traces,
        )

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.controls)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 1)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(splitter)

        # Status bar labels (AppWindow will place these in a real status bar)
        self.frame_label = QLabel()
        self.time_label = QLabel()
        self.position_label = QLabel()

        # Timer
        self.timer = QTimer()
        self.timer.setInterval(int(1000 / self.FPS))
        self.timer.timeout.connect(self._on_timer)

        # Wire signals
        self.controls._on_param_changed = self._on_param_changed
        self.controls._on_trace_count_changed = self._on_trace_count_changed
        self.controls.play_btn.clicked.connect(self._toggle_play)
        self.controls.reset_params_btn.clicked.connect(self._reset_params)
        self.controls.clear_btn.clicked.connect(self._clear_traces)
        self.controls.axes_checkbox.toggled.connect(self._on_axes_toggled)

        self.controls.set_running(not self.engine.paused)
        self._update_display()

    # -- Frame loop --

    def start(self):
        self.timer.start()

    def stop(self):
        self.timer.stop()

    def _on_timer(self):
        self.engine.advance_frame()
        self.canvas.rotate(self.controls.get_rotation_speed())
        self._update_display()

    def _update_display(self):
        engine = self.engine
        self.canvas.set_trajectories(
            engine.trajectories, self.controls.get_trace_length(),
        )

        x, y, z = engine.trajectories[0].position
        self.frame_label.setText(f"  frame {engine.frame_count}  ")
        self.time_label.setText(f"  t = {engine.sim_time:.3f}  ")
        self.position_label.setText(f"  ({x:.2f}, {y:.2f}, {z:.2f})  ")

    # -- Playback --

    def _toggle_play(self):
        paused = self.engine.toggle_paused()
        self.controls.set_running(not paused)

    # -- Trace management --

    def _clear_traces(self):
        self.engine.clear_traces()
        self._update_display()

    def _on_trace_count_changed(self, n):
        self.engine.set_trace_count(n)
        self.controls.trace_count_label.setText(f"Trajectories: {n}")
        self._update_display()

    # -- Axes toggle --

    def _on_axes_toggled(self, checked):
        self.canvas.show_axes = checked
        self.canvas.update()

    # -- Parameter changes --

    def _on_param_changed(self, field, value):
        self.engine.update_parameters(**{field: value})

    def _reset_params(self):
        params = self.engine.reset_parameters()
        self.controls.set_params(params)
