"""Shared UI widgets for the attractor controls.

Contains LorenzParamsWidget and reusable slider helpers.
"""

import math

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QGridLayout, QSlider, QLabel

from simulation import LorenzParams


# ---------------------------------------------------------------------------
# Slider helpers
# ---------------------------------------------------------------------------

def make_slider(minimum, maximum, value, resolution=100):
    """Create an integer QSlider that maps to float values.

    The slider range is [minimum*resolution, maximum*resolution].
    """
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setMinimum(round(minimum * resolution))
    slider.setMaximum(round(maximum * resolution))
    slider.setValue(round(value * resolution))
    slider.resolution = resolution
    return slider


def slider_value(slider):
    """Read the float value from a slider created by make_slider."""
    return slider.value() / slider.resolution


def set_slider_value(slider, value):
    """Move a make_slider slider to a float value."""
    slider.setValue(round(value * slider.resolution))


def make_log_slider(log_min, log_max, value, steps=1000):
    """Create a slider mapping positions 0..steps onto [log_min, log_max] logarithmically."""
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setMinimum(0)
    slider.setMaximum(steps)
    slider.log_min = log_min
    slider.log_max = log_max
    slider.log_steps = steps
    t = math.log(value / log_min) / math.log(log_max / log_min)
    slider.setValue(round(t * steps))
    return slider


def log_slider_value(slider):
    t = slider.value() / slider.log_steps
    return slider.log_min * (slider.log_max / slider.log_min) ** t


def add_slider_row(layout, row, label_text, slider, fmt="{:.2f}", value_fn=slider_value):
    """Add label | slider | value-readout to a grid layout row."""
    label = QLabel(label_text)
    value_label = QLabel()
    value_label.setMinimumWidth(60)
    value_label.setAlignment(
        Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
    )
    layout.addWidget(label, row, 0)
    layout.addWidget(slider, row, 1)
    layout.addWidget(value_label, row, 2)

    def _update(_val, vl=value_label, sl=slider):
        vl.setText(fmt.format(value_fn(sl)))

    slider.valueChanged.connect(_update)
    _update(slider.value())
    return value_label


# ---------------------------------------------------------------------------
# LorenzParamsWidget
# ---------------------------------------------------------------------------

# Slider ranges for the integer controls; the CLI enforces the same bounds
MAX_STEPS_PER_FRAME = 20
MAX_TRACES = 10


class LorenzParamsWidget(QWidget):
    """Grouped sliders for sigma, rho, beta, dt and steps per frame.

    Emits no signals itself; call get_params() to read current values.
    The parent can connect slider.valueChanged to detect changes and
    read the single changed field with field_value().
    """

    def __init__(self, params=None, parent=None):
        super().__init__(parent)
        if params is None:
            params = LorenzParams()
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        max_steps = max(MAX_STEPS_PER_FRAME, params.steps_per_frame)

        self.sigma_slider = make_slider(0.0, 50.0, params.sigma)
        self.rho_slider = make_slider(0.0, 50.0, params.rho)
        self.beta_slider = make_slider(0.0, 20.0, params.beta)
        self.dt_slider = make_slider(0.0001, 0.01, params.dt, resolution=10000)
        self.steps_slider = make_slider(1, max_steps, params.steps_per_frame, resolution=1)

        add_slider_row(layout, 0, "σ", self.sigma_slider)
        add_slider_row(layout, 1, "ρ", self.rho_slider)
        add_slider_row(layout, 2, "β", self.beta_slider)
        add_slider_row(layout, 3, "dt", self.dt_slider, fmt="{:.4f}")
        add_slider_row(layout, 4, "Steps/frame", self.steps_slider, fmt="{:.0f}")

    @property
    def sliders(self):
        """Mapping of LorenzParams field name to its slider."""
        return {
            "sigma": self.sigma_slider,
            "rho": self.rho_slider,
            "beta": self.beta_slider,
            "dt": self.dt_slider,
            "steps_per_frame": self.steps_slider,
        }

    def field_value(self, field):
        """Read one parameter from its slider."""
        if field == "steps_per_frame":
            return self.steps_slider.value()
        return slider_value(self.sliders[field])

    def get_params(self):
        """Return a LorenzParams from the current slider values."""
        return LorenzParams(**{field: self.field_value(field) for field in self.sliders})

    def set_params(self, params):
        """Set slider positions from a LorenzParams."""
        set_slider_value(self.sigma_slider, params.sigma)
        set_slider_value(self.rho_slider, params.rho)
        set_slider_value(self.beta_slider, params.beta)
        set_slider_value(self.dt_slider, params.dt)
        self.steps_slider.setValue(params.steps_per_frame)
