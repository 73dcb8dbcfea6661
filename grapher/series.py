from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Union

import numpy as np

from grapher.adapters import normalize_pairs, normalize_xy
from grapher.errors import PlotDataError
from grapher.raster.canvas import RGBA
from grapher.sampler import ScalarFunction, identity


@dataclass(frozen=True, eq=False)
class PointSet:
    """Discrete points to plot; x and y are equal-length float arrays."""

    x: np.ndarray
    y: np.ndarray
    labeled: bool | None = None
    color: RGBA | None = None
    diameter: int | None = None

    def __post_init__(self) -> None:
        x, y = normalize_xy(self.x, self.y)
        x = np.array(x, dtype=np.float64, copy=True)
        y = np.array(y, dtype=np.float64, copy=True)
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        if self.diameter is not None and self.diameter <= 0:
            raise PlotDataError("point diameter must be > 0")

    @classmethod
    def from_pairs(cls, pairs: Any, **kwargs: Any) -> "PointSet":
        x, y = normalize_pairs(pairs)
        return cls(x=x, y=y, **kwargs)

    @classmethod
    def from_frame(cls, data: Any, *, x: str, y: str, **kwargs: Any) -> "PointSet":
        xs, ys = normalize_xy(x, y, data=data)
        return cls(x=xs, y=ys, **kwargs)

    def __len__(self) -> int:
        return int(self.x.size)


@dataclass(frozen=True)
class FunctionPlot:
    """A function sampled over ``[range_low, range_high]``; the Window's x range when omitted."""

    func: ScalarFunction = field(default=identity)
    range_low: float | None = None
    range_high: float | None = None
    color: RGBA | None = None
    width: int | None = None

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise PlotDataError(f"function must be callable, got {type(self.func)!r}")
        for name in ("range_low", "range_high"):
            value = getattr(self, name)
            if value is not None and not math.isfinite(float(value)):
                raise PlotDataError(f"{name} must be finite")
        if self.width is not None and self.width <= 0:
            raise PlotDataError("curve width must be > 0")


PlotContent = Union[PointSet, FunctionPlot]
