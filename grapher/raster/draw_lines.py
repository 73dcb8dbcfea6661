from __future__ import annotations

import numpy as np

from grapher.raster.canvas import RGBA, draw_pixel


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        draw_segment(dst, float(xs[i]), float(ys[i]), float(xs[i + 1]), float(ys[i + 1]), color=color, width=width)


def draw_segment(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
    margin = float(max(1, width))
    clipped = clip_segment(
        x0,
        y0,
        x1,
        y1,
        xmin=-margin,
        ymin=-margin,
        xmax=dst.shape[1] - 1 + margin,
        ymax=dst.shape[0] - 1 + margin,
    )
    if clipped is None:
        return
    cx0, cy0, cx1, cy1 = clipped
    _draw_line_segment(
        dst,
        int(round(cx0)),
        int(round(cy0)),
        int(round(cx1)),
        int(round(cy1)),
        color=color,
        width=width,
    )


def clip_segment(
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    xmin: float,
    ymin: float,
    xmax: float,
    ymax: float,
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment to an axis-aligned rectangle."""
    if not all(np.isfinite(v) for v in (x0, y0, x1, y1)):
        return None
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0.0:
            if q < 0.0:
                return None
            continue
        t = q / p
        if p < 0.0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
