# ExprCalc - Plot Rendering Sinks
# Copyright (c) 2024 ExprCalc Contributors. All rights reserved.

"""
Rendering sinks that receive sampled point series from plot().

A sink is anything with a `render` method of the PlotSink shape. Two are
provided: RecordingSink keeps recent calls in memory, MatplotlibSink draws a
scatter plot into an image file.

MatplotlibSink builds a standalone `matplotlib.figure.Figure`, so importing
this module never touches pyplot or the host application's backend.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable
import logging

from matplotlib.figure import Figure
import numpy as np

logger = logging.getLogger(__name__)


@runtime_checkable
class PlotSink(Protocol):
    def render(
        self,
        series_label: str,
        independent_variable_name: str,
        output_id: str,
        xs: Sequence[float],
        ys: Sequence[float],
    ) -> None:
        """Draw the points (xs[i], ys[i]) under the given label and output."""
        ...


@dataclass(frozen=True)
class RenderCall:
    """One recorded render request."""
    series_label: str
    independent_variable_name: str
    output_id: str
    xs: Tuple[float, ...]
    ys: Tuple[float, ...]

    @property
    def points(self) -> List[Tuple[float, float]]:
        return list(zip(self.xs, self.ys))


@dataclass
class RecordingSink:
    """
    Sink that stores render requests instead of drawing them.

    Attributes:
        max_calls: How many of the most recent calls to keep; None keeps all.
    """
    max_calls: Optional[int] = None
    calls: List[RenderCall] = field(default_factory=list)

    def __post_init__(self):
        if self.max_calls is not None and self.max_calls < 1:
            raise ValueError(f"max_calls must be at least 1, got {self.max_calls}")

    def render(self, series_label, independent_variable_name, output_id, xs, ys) -> None:
        self.calls.append(RenderCall(
            series_label,
            independent_variable_name,
            output_id,
            tuple(float(x) for x in xs),
            tuple(float(y) for y in ys),
        ))
        if self.max_calls is not None:
            del self.calls[:-self.max_calls]

    @property
    def last(self) -> RenderCall:
        if not self.calls:
            raise LookupError("No plot has been rendered")
        return self.calls[-1]


def finite_points(xs: Sequence[float], ys: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """Return the x and y arrays with every non-finite point removed."""
    x = np.asarray(xs, dtype=np.float64)
    y = np.asarray(ys, dtype=np.float64)
    finite = np.isfinite(x) & np.isfinite(y)
    dropped = int((~finite).sum())
    if dropped:
        logger.debug("Dropping %d non-finite point(s)", dropped)
    return x[finite], y[finite]


class MatplotlibSink:
    """
    Sink that draws each series as a scatter plot image.

    Each render writes `<output_dir>/<output_id>.png`, replacing a previous
    image with the same id. Points whose x or y value is infinite or NaN are
    left out of the drawing.
    """

    def __init__(self, output_dir: Union[str, Path] = ".", dpi: int = 150):
        self.output_dir = Path(output_dir)
        self.dpi = dpi

    def path_for(self, output_id: str) -> Path:
        return self.output_dir / f"{output_id}.png"

    def render(self, series_label, independent_variable_name, output_id, xs, ys) -> None:
        x, y = finite_points(xs, ys)

        output = self.path_for(output_id)
        output.parent.mkdir(parents=True, exist_ok=True)

        fig = Figure(figsize=(8, 4.5))
        ax = fig.subplots()
        ax.scatter(x, y, s=12, label=series_label)
        ax.set_title(series_label)
        ax.set_xlabel(independent_variable_name)
        ax.set_ylabel(output_id)
        ax.grid(True, alpha=0.3)
        fig.tight_layout()
        fig.savefig(output, dpi=self.dpi)
        logger.debug("Wrote %d point(s) to %s", len(x), output)
