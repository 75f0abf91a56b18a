# ExprCalc - Rendering Sink Tests
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""Tests for the recording and matplotlib rendering sinks."""

import logging
import math
import os
import subprocess
import sys

import matplotlib
import pytest

from exprcalc.environment import Environment
from exprcalc.expr import var
from exprcalc.plot import plot
from exprcalc.sink import MatplotlibSink, PlotSink, RecordingSink, RenderCall, finite_points


class TestRecordingSink:
    """Tests for the in-memory sink."""

    def test_is_plot_sink(self):
        assert isinstance(RecordingSink(), PlotSink)

    def test_records_call(self):
        sink = RecordingSink()
        sink.render("plot", "t", "output", [0, 1], [2, 3])
        assert sink.last == RenderCall("plot", "t", "output", (0.0, 1.0), (2.0, 3.0))
        assert sink.last.points == [(0.0, 2.0), (1.0, 3.0)]

    def test_last_without_calls(self):
        with pytest.raises(LookupError):
            RecordingSink().last

    def test_unbounded_by_default(self):
        sink = RecordingSink()
        for i in range(5):
            sink.render("plot", "x", "output", [i], [i])
        assert len(sink.calls) == 5

    def test_keeps_most_recent_calls(self):
        sink = RecordingSink(max_calls=2)
        for i in range(5):
            sink.render("plot", "x", "output", [i], [i])
        assert [call.xs for call in sink.calls] == [(3.0,), (4.0,)]
        assert sink.last.xs == (4.0,)

    def test_invalid_max_calls(self):
        with pytest.raises(ValueError):
            RecordingSink(max_calls=0)

    def test_environment_default_keeps_one_series(self):
        env = Environment()
        x = var('x')
        for _ in range(3):
            plot(env, x, x, 0, 100, 0.01)
        assert len(env.sink.calls) == 1
        assert len(env.sink.last.xs) == 10001


class TestMatplotlibSink:
    """Tests for the image-writing sink."""

    def test_is_plot_sink(self, tmp_path):
        assert isinstance(MatplotlibSink(tmp_path), PlotSink)

    def test_writes_image(self, tmp_path):
        sink = MatplotlibSink(tmp_path / "plots")
        sink.render("plot", "x", "output", [0.0, 0.5, 1.0], [0.0, 0.25, 1.0])
        image = tmp_path / "plots" / "output.png"
        assert image.exists()
        assert image.stat().st_size > 0

    def test_non_finite_points_skipped(self, tmp_path):
        sink = MatplotlibSink(tmp_path)
        sink.render("plot", "x", "poles", [-1.0, 0.0, 1.0], [-1.0, math.inf, math.nan])
        assert sink.path_for("poles").exists()

    def test_used_by_plot(self, tmp_path):
        env = Environment(sink=MatplotlibSink(tmp_path))
        x = var('x')
        plot(env, x * x, x, -2, 2, 0.25)
        assert (tmp_path / "output.png").exists()
        assert 'x' not in env

    def test_render_keeps_backend(self, tmp_path):
        before = matplotlib.get_backend()
        MatplotlibSink(tmp_path).render("plot", "x", "output", [0.0, 1.0], [1.0, 2.0])
        assert matplotlib.get_backend() == before

    def test_import_keeps_host_backend(self):
        script = (
            "import matplotlib; matplotlib.use('svg'); "
            "import exprcalc; print(matplotlib.get_backend())"
        )
        result = subprocess.run(
            [sys.executable, "-c", script],
            capture_output=True, text=True, check=True,
            env={**os.environ, "PYTHONPATH": os.pathsep.join(sys.path)},
        )
        assert result.stdout.strip() == "svg"


class TestFinitePoints:
    """Tests for removal of points that cannot be drawn."""

    def test_masks_infinite_and_nan(self):
        x, y = finite_points([-1.0, 0.0, 1.0, 2.0], [-1.0, math.inf, math.nan, 4.0])
        assert x.tolist() == [-1.0, 2.0]
        assert y.tolist() == [-1.0, 4.0]

    def test_masks_non_finite_x(self):
        x, y = finite_points([math.nan, 1.0], [0.0, 1.0])
        assert x.tolist() == [1.0]
        assert y.tolist() == [1.0]

    def test_all_finite_unchanged(self):
        x, y = finite_points([0, 1], [2, 3])
        assert x.tolist() == [0.0, 1.0]
        assert y.tolist() == [2.0, 3.0]

    def test_logs_dropped_count(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="exprcalc.sink"):
            finite_points([-1.0, 0.0, 1.0], [-1.0, math.inf, math.nan])
        assert "Dropping 2 non-finite point(s)" in caplog.text
