from __future__ import annotations

import numpy as np

from grapher.raster.canvas import RGBA, draw_pixel


# Supersampling grid per pixel edge when antialiasing circle coverage.
_COVERAGE_SAMPLES = 4


def fill_circle(dst: np.ndarray, cx: int, cy: int, color: RGBA, diameter: int, *, antialias: bool = True) -> None:
    """Fill a circle of ``diameter`` pixels centered on ``(cx, cy)``.

    The bounding box handed to the fill is shifted by half the diameter in both
    axes, so ``(cx, cy)`` is the middle of the disc rather than its corner.
    """
    diameter = max(1, int(diameter))
    if diameter == 1:
        draw_pixel(dst, cx, cy, color)
        return
    left = cx - diameter // 2
    top = cy - diameter // 2
    _fill_ellipse_box(dst, left, top, diameter, diameter, color, antialias=antialias)


def _fill_ellipse_box(
    dst: np.ndarray,
    left: int,
    top: int,
    width: int,
    height: int,
    color: RGBA,
    *,
    antialias: bool,
) -> None:
    coverage = _ellipse_coverage(width, height)
    if not antialias:
        coverage = (coverage >= 0.5).astype(np.float32)
    for row in range(height):
        for col in range(width):
            cov = float(coverage[row, col])
            if cov <= 0.0:
                continue
            draw_pixel(dst, left + col, top + row, color, coverage=cov)


def _ellipse_coverage(width: int, height: int) -> np.ndarray:
    n = _COVERAGE_SAMPLES
    sub = (np.arange(n, dtype=np.float32) + 0.5) / n
    ys = (np.arange(height, dtype=np.float32)[:, None] + sub[None, :]).reshape(-1)
    xs = (np.arange(width, dtype=np.float32)[:, None] + sub[None, :]).reshape(-1)
    rx = width / 2.0
    ry = height / 2.0
    inside = ((xs[None, :] - rx) / rx) ** 2 + ((ys[:, None] - ry) / ry) ** 2 <= 1.0
    return inside.reshape(height, n, width, n).mean(axis=(1, 3)).astype(np.float32)
