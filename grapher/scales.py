from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
import logging
import math
from typing import Literal

import numpy as np

from grapher.window import PixelPoint, Point, Viewport, Window


LOGGER = logging.getLogger(__name__)

Axis = Literal["x", "y"]

# Fractional offsets this close to a whole period are float drift, not a real gap.
_PERIOD_SNAP_EPS = 1e-9


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps between logical Window coordinates and raster pixels (y grows downward)."""

    window: Window
    viewport: Viewport

    def pixels_per_unit(self, axis: Axis) -> float:
        lo, hi = self.window.axis_range(axis)
        return self.viewport.extent(axis) / (hi - lo)

    def units_per_pixel(self, axis: Axis) -> float:
        lo, hi = self.window.axis_range(axis)
        return (hi - lo) / self.viewport.extent(axis)

    def to_pixel(self, point: Point) -> PixelPoint:
        px = (point.x - self.window.xmin) * self.pixels_per_unit("x")
        py = self.viewport.height - (point.y - self.window.ymin) * self.pixels_per_unit("y")
        return PixelPoint(x=int(round(px)), y=int(round(py)))

    def to_logical(self, pixel: PixelPoint) -> Point:
        x = self.window.xmin + pixel.x * self.units_per_pixel("x")
        y = self.window.ymax - pixel.y * self.units_per_pixel("y")
        return Point(x=x, y=y)

    def map_to_pixels(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        # Unrounded so callers can reject non-finite results first.
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        with np.errstate(over="ignore", invalid="ignore"):
            px = (xs - self.window.xmin) * self.pixels_per_unit("x")
            py = self.viewport.height - (ys - self.window.ymin) * self.pixels_per_unit("y")
        return px, py


@dataclass(frozen=True)
class GridPositions:
    """Restartable sequence ``start, start + spacing, ...`` bounded by ``extent``."""

    start: int
    spacing: int
    extent: int

    def __iter__(self) -> Iterator[int]:
        if self.spacing <= 0:
            return
        pos = self.start
        while pos < self.extent:
            yield pos
            pos += self.spacing

    def __len__(self) -> int:
        if self.spacing <= 0 or self.start >= self.extent:
            return 0
        return (self.extent - 1 - self.start) // self.spacing + 1


@dataclass(frozen=True)
class AxisGrid:
    axis: Axis
    first_value: float
    units_per_line: float
    positions: GridPositions
    viewport: Viewport

    def lines(self) -> Iterator[tuple[int, float]]:
        """Yield ``(raster coordinate, logical value)`` for each line on this axis.

        x offsets are raster columns and cover ``[0, width)``. y offsets are
        counted up from the bottom edge and cover ``(0, height]``, which maps
        onto raster rows ``[0, height)``. Every yielded line lands on the raster.
        """
        for idx, offset in enumerate(self.positions):
            value = self.first_value + idx * self.units_per_line
            if self.axis == "x":
                yield offset, value
            elif offset > 0:
                yield self.viewport.height - offset, value

    def __len__(self) -> int:
        return sum(1 for _ in self.lines())


def grid_spacing_px(mapper: CoordinateMapper, axis: Axis, units_per_line: float) -> int:
    if not math.isfinite(units_per_line) or units_per_line <= 0:
        return 0
    return int(math.floor(units_per_line * mapper.pixels_per_unit(axis)))


def periods_left(axis_min: float, units_per_line: float) -> float:
    """Fraction of one grid period between ``axis_min`` and the first line at or above it."""
    frac = ((-axis_min) % units_per_line) / units_per_line
    if frac >= 1.0 - _PERIOD_SNAP_EPS or frac <= _PERIOD_SNAP_EPS:
        return 0.0
    return frac


def layout_axis(mapper: CoordinateMapper, axis: Axis, units_per_line: float) -> AxisGrid:
    extent = mapper.viewport.extent(axis)
    if axis == "y":
        # Row 0 sits at offset `height`.
        extent += 1
    axis_min, _ = mapper.window.axis_range(axis)
    spacing = grid_spacing_px(mapper, axis, units_per_line)
    if spacing <= 0:
        LOGGER.debug("degenerate %s grid spacing (units=%r, px=%d); no lines", axis, units_per_line, spacing)
        return AxisGrid(
            axis=axis,
            first_value=axis_min,
            units_per_line=units_per_line,
            positions=GridPositions(start=0, spacing=0, extent=extent),
            viewport=mapper.viewport,
        )
    frac = periods_left(axis_min, units_per_line)
    start = int(round(frac * spacing))
    return AxisGrid(
        axis=axis,
        first_value=axis_min + frac * units_per_line,
        units_per_line=units_per_line,
        positions=GridPositions(start=start, spacing=spacing, extent=extent),
        viewport=mapper.viewport,
    )


def format_tick(value: float, *, step: float | None = None) -> str:
    """Fixed-point tick label with as many decimals as ``step`` needs, trailing zeros dropped."""
    if not math.isfinite(value):
        return str(value)
    decimals = 6 if step is None else _decimals_from_step(step)
    if step is not None and abs(value) <= abs(step) * 1e-9:
        value = 0.0
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_number(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def _decimals_from_step(step: float) -> int:
    if not math.isfinite(step) or step <= 0:
        return 6
    exponent = Decimal(repr(float(step))).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))
