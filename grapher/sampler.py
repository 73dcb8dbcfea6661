from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import math

import numpy as np

from grapher.errors import PlotDataError
from grapher.raster import draw_polyline
from grapher.raster.canvas import RGBA
from grapher.scales import CoordinateMapper


LOGGER = logging.getLogger(__name__)

ScalarFunction = Callable[[float], float]


def identity(x: float) -> float:
    return x


@dataclass(frozen=True)
class SampledCurve:
    xs: np.ndarray
    ys: np.ndarray
    px: np.ndarray
    py: np.ndarray
    valid: np.ndarray

    @property
    def failed_samples(self) -> int:
        return int(np.count_nonzero(~self.valid))

    def runs(self) -> list[tuple[int, int]]:
        return contiguous_true_runs(self.valid)


def sample_range(range_low: float, range_high: float, step: float) -> np.ndarray:
    """Inclusive sample positions ``range_low, range_low + step, ..., range_high``."""
    lo, hi = (range_low, range_high) if range_low <= range_high else (range_high, range_low)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ValueError("sampling range must be finite")
    if not math.isfinite(step) or step <= 0:
        raise ValueError("sampling step must be > 0")
    count = int(math.floor((hi - lo) / step + 1e-9))
    xs = lo + np.arange(count + 1, dtype=np.float64) * step
    if hi - xs[-1] > step * 1e-6:
        xs = np.append(xs, hi)
    else:
        xs[-1] = hi
    return xs


def sample_function(
    func: ScalarFunction,
    mapper: CoordinateMapper,
    range_low: float | None = None,
    range_high: float | None = None,
) -> SampledCurve:
    """Evaluate ``func`` once per horizontal pixel across the range and map to pixels."""
    lo = mapper.window.xmin if range_low is None else float(range_low)
    hi = mapper.window.xmax if range_high is None else float(range_high)
    if lo > hi:
        lo, hi = hi, lo
    step = mapper.units_per_pixel("x")
    clamped = _clamp_to_window(lo, hi, step, mapper.window.xmin, mapper.window.xmax)
    if clamped is None:
        LOGGER.debug("sampling range [%r, %r] lies outside the window", lo, hi)
        empty = np.empty(0, dtype=np.float64)
        return SampledCurve(xs=empty, ys=empty, px=empty, py=empty, valid=np.empty(0, dtype=bool))
    xs = sample_range(clamped[0], clamped[1], step)
    ys = np.empty_like(xs)
    for i, x in enumerate(xs.tolist()):
        ys[i] = _evaluate(func, x)
    px, py = mapper.map_to_pixels(xs, ys)
    valid = np.isfinite(ys) & np.isfinite(px) & np.isfinite(py)
    skipped = int(np.count_nonzero(~valid))
    if skipped:
        LOGGER.debug("skipped %d of %d samples with non-finite values", skipped, xs.size)
    return SampledCurve(xs=xs, ys=ys, px=px, py=py, valid=valid)


def draw_curve(canvas: np.ndarray, curve: SampledCurve, *, color: RGBA, width: int = 1) -> None:
    # Failed samples split the curve; no segment touches them.
    for seg_start, seg_end in curve.runs():
        if seg_end - seg_start < 2:
            continue
        draw_polyline(canvas, curve.px[seg_start:seg_end], curve.py[seg_start:seg_end], color=color, width=width)


def draw_function(
    canvas: np.ndarray,
    func: ScalarFunction,
    mapper: CoordinateMapper,
    range_low: float | None = None,
    range_high: float | None = None,
    *,
    color: RGBA,
    width: int = 1,
) -> SampledCurve:
    curve = sample_function(func, mapper, range_low, range_high)
    draw_curve(canvas, curve, color=color, width=width)
    return curve


def contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def _clamp_to_window(lo: float, hi: float, step: float, xmin: float, xmax: float) -> tuple[float, float] | None:
    # Keep the first sample off-window on each side so edge segments still reach the border.
    # Clamped ends stay on the step grid anchored at ``lo``.
    if hi < xmin - step or lo > xmax + step:
        return None
    anchor = lo
    if lo < xmin - step:
        lo = anchor + math.floor((xmin - anchor) / step) * step
        if lo > xmin:
            lo -= step
    if hi > xmax + step:
        hi = anchor + math.ceil((xmax - anchor) / step) * step
        if hi < xmax:
            hi += step
    return lo, hi


def _evaluate(func: ScalarFunction, x: float) -> float:
    try:
        value = func(x)
    except (ArithmeticError, ValueError):
        # Undefined at x (division by zero, domain error): a failed sample.
        return math.nan
    if isinstance(value, complex):
        return math.nan
    try:
        return float(value)
    except OverflowError:
        # Integer result beyond float range.
        return math.nan
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"function returned a non-numeric value at x={x!r}: {value!r}") from exc
