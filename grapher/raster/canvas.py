from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    fill_canvas(canvas, color)
    return canvas


def fill_canvas(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :, 0] = color[0]
    dst[:, :, 1] = color[1]
    dst[:, :, 2] = color[2]
    dst[:, :, 3] = color[3]


def is_rgba_canvas(dst: object) -> bool:
    return isinstance(dst, np.ndarray) and dst.dtype == np.uint8 and dst.ndim == 3 and dst.shape[2] == 4


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA, coverage: float = 1.0) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = (color[3] / 255.0) * coverage
    if a <= 0.0:
        return
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    for yy in _band(y, width):
        if yy < 0 or yy >= dst.shape[0]:
            continue
        xa = max(0, min(x0, x1))
        xb = min(dst.shape[1] - 1, max(x0, x1))
        if xa > xb:
            return
        _blend_segment(dst[yy, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    for xx in _band(x, width):
        if xx < 0 or xx >= dst.shape[1]:
            continue
        ya = max(0, min(y0, y1))
        yb = min(dst.shape[0] - 1, max(y0, y1))
        if ya > yb:
            return
        _blend_segment(dst[ya : yb + 1, xx], color)


def _band(center: int, width: int) -> range:
    # Thick lines straddle the nominal coordinate, extra pixel goes after it.
    width = max(1, int(width))
    start = center - (width - 1) // 2
    return range(start, start + width)


def _blend_segment(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255
