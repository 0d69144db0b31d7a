"""Tests for main.py argument parsing and engine construction."""

import numpy as np
import pytest

pytest.importorskip("PyQt6.QtWidgets")

from main import build_engine, build_parser  # noqa: E402
from trace_buffer import DEFAULT_CAPACITY  # noqa: E402
from ui_common import MAX_STEPS_PER_FRAME, MAX_TRACES  # noqa: E402


class TestArguments:

    def test_defaults(self):
        args = build_parser().parse_args([])
        engine = build_engine(args)
        assert engine.num_traces == 3
        assert engine.capacity == DEFAULT_CAPACITY
        assert engine.params.steps_per_frame == 1
        assert not engine.paused

    def test_options(self):
        args = build_parser().parse_args([
            "--traces", "7", "--steps-per-frame", "5", "--capacity", "500",
            "--paused",
        ])
        engine = build_engine(args)
        assert engine.num_traces == 7
        assert engine.capacity == 500
        assert engine.params.steps_per_frame == 5
        assert engine.paused

    def test_seed_reproducible(self):
        args = build_parser().parse_args(["--seed", "11", "--capacity", "10"])
        a = build_engine(args)
        b = build_engine(args)
        assert np.array_equal(a.positions(), b.positions())

    @pytest.mark.parametrize("value", ["0", "11", "20"])
    def test_trace_count_outside_slider_range_rejected(self, value):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--traces", value])

    @pytest.mark.parametrize("value", ["0", "21"])
    def test_steps_per_frame_outside_slider_range_rejected(self, value):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--steps-per-frame", value])

    def test_range_limits_accepted(self):
        args = build_parser().parse_args([
            "--traces", str(MAX_TRACES),
            "--steps-per-frame", str(MAX_STEPS_PER_FRAME),
            "--capacity", "10",
        ])
        engine = build_engine(args)
        assert engine.num_traces == MAX_TRACES
        assert engine.params.steps_per_frame == MAX_STEPS_PER_FRAME

    def test_invalid_log_level_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "LOUD"])
