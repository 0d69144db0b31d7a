"""Attractor control panel: sliders for parameters, traces and playback.

Uses LorenzParamsWidget from ui_common for the system parameters.
"""

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QHBoxLayout, QGroupBox,
    QLabel, QPushButton, QCheckBox,
)

from simulation import LorenzParams
from ui_common import (
    MAX_TRACES, LorenzParamsWidget, add_slider_row, log_slider_value, make_log_slider,
    make_slider, slider_value,
)


class AttractorControls(QWidget):
    """Sliders for Lorenz parameters, trace settings, view and playback."""

    def __init__(self, params=None, num_traces=3, parent=None):
        super().__init__(parent)
        if params is None:
            params = LorenzParams()
        self._building = True
        self._init_ui(params, num_traces)
        self._building = False

    # -- UI construction --

    def _init_ui(self, params, num_traces):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- System Parameters ---
        sys_group = QGroupBox("Lorenz Parameters")
        sys_layout = QVBoxLayout()
        sys_group.setLayout(sys_layout)

        self.lorenz_params = LorenzParamsWidget(params)
        for field, sl in self.lorenz_params.sliders.items():
            sl.valueChanged.connect(
                lambda _val, f=field: self._param_slider_moved(f)
            )
        sys_layout.addWidget(self.lorenz_params)

        self.reset_params_btn = QPushButton("Reset Lorenz Parameters")
        sys_layout.addWidget(self.reset_params_btn)

        main_layout.addWidget(sys_group)

        # --- Traces ---
        trace_group = QGroupBox("Traces")
        trace_layout = QGridLayout()
        trace_group.setLayout(trace_layout)

        max_traces = max(MAX_TRACES, num_traces)
        self.num_traces_slider = make_slider(1, max_traces, num_traces, resolution=1)
        add_slider_row(trace_layout, 0, "Traces", self.num_traces_slider, fmt="{:.0f}")
        self.num_traces_slider.valueChanged.connect(
            lambda val: self._on_trace_count_changed(val) if not self._building else None
        )

        self.trace_length_slider = make_log_slider(100, 100_000, 1000)
        add_slider_row(trace_layout, 1, "Trace length", self.trace_length_slider,
                       fmt="{:.0f}", value_fn=log_slider_value)

        self.clear_btn = QPushButton("Clear Traces")
        trace_layout.addWidget(self.clear_btn, 2, 0, 1, 3)

        main_layout.addWidget(trace_group)

        # --- View ---
        view_group = QGroupBox("View")
        view_layout = QGridLayout()
        view_group.setLayout(view_layout)

        self.rotation_slider = make_slider(-0.05, 0.05, 0.001, resolution=1000)
        add_slider_row(view_layout, 0, "Rotation", self.rotation_slider, fmt="{:+.3f}")

        self.axes_checkbox = QCheckBox("Show axes")
        view_layout.addWidget(self.axes_checkbox, 1, 0, 1, 3)

        main_layout.addWidget(view_group)

        # --- Playback ---
        pb_group = QGroupBox("Playback")
        pb_layout = QHBoxLayout()
        pb_group.setLayout(pb_layout)

        self.play_btn = QPushButton("Stop")
        self.trace_count_label = QLabel(f"Trajectories: {num_traces}")
        self.trace_count_label.setStyleSheet("color: #aaa;")
        pb_layout.addWidget(self.play_btn)
        pb_layout.addWidget(self.trace_count_label)

        main_layout.addWidget(pb_group)
        main_layout.addStretch()

    # -- Public accessors --

    def get_params(self):
        return self.lorenz_params.get_params()

    def set_params(self, params):
        """Move the parameter sliders without triggering _on_param_changed."""
        self._building = True
        try:
            self.lorenz_params.set_params(params)
        finally:
            self._building = False

    def get_num_traces(self):
        return self.num_traces_slider.value()

    def get_trace_length(self):
        return round(log_slider_value(self.trace_length_slider))

    def get_rotation_speed(self):
        return slider_value(self.rotation_slider)

    def set_running(self, running):
        self.play_btn.setText("Stop" if running else "Start")

    # -- Callbacks (wired by AttractorView) --

    def _param_slider_moved(self, field):
        if not self._building:
            self._on_param_changed(field, self.lorenz_params.field_value(field))

    def _on_param_changed(self, field, value):
        """Called with the one Lorenz parameter a slider changed. Override in parent."""
        pass

    def _on_trace_count_changed(self, n):
        """Called when the trace count slider changes. Override in parent."""
        pass
