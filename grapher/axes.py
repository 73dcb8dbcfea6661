from __future__ import annotations

import logging

import numpy as np

from grapher.raster import draw_hline, draw_text, draw_vline, text_size
from grapher.scales import Axis, AxisGrid, CoordinateMapper, format_tick, layout_axis
from grapher.style import GraphStyle
from grapher.window import PixelPoint, Point, Window


LOGGER = logging.getLogger(__name__)


def axis_visible(window: Window, axis: Axis) -> bool:
    """The x axis is the line y == 0 and the y axis is x == 0."""
    if axis == "x":
        return window.ymin <= 0.0 <= window.ymax
    if axis == "y":
        return window.xmin <= 0.0 <= window.xmax
    raise ValueError("axis must be 'x' or 'y'")


def axis_segment(mapper: CoordinateMapper, axis: Axis) -> tuple[PixelPoint, PixelPoint] | None:
    window = mapper.window
    if not axis_visible(window, axis):
        return None
    if axis == "x":
        return (mapper.to_pixel(Point(window.xmin, 0.0)), mapper.to_pixel(Point(window.xmax, 0.0)))
    return (mapper.to_pixel(Point(0.0, window.ymin)), mapper.to_pixel(Point(0.0, window.ymax)))


def tick_index(value: float, units_per_line: float) -> int:
    return int(round(value / units_per_line))


def tick_labeled(value: float, units_per_line: float) -> bool:
    # Every second tick, never the origin tick of the axis it sits on.
    k = tick_index(value, units_per_line)
    return k != 0 and k % 2 == 0


def draw_grid_lines(canvas: np.ndarray, mapper: CoordinateMapper, style: GraphStyle) -> None:
    height = mapper.viewport.height
    width = mapper.viewport.width
    for col, _ in layout_axis(mapper, "x", style.grid_spacing).lines():
        draw_vline(canvas, col, 0, height - 1, style.grid_color, width=style.grid_width)
    for row, _ in layout_axis(mapper, "y", style.grid_spacing).lines():
        draw_hline(canvas, 0, width - 1, row, style.grid_color, width=style.grid_width)


def draw_axes(canvas: np.ndarray, mapper: CoordinateMapper, style: GraphStyle) -> tuple[Axis, ...]:
    """Draw the visible axes with their ticks and labels; return which axes were drawn."""
    drawn: list[Axis] = []
    x_seg = axis_segment(mapper, "x")
    if x_seg is not None:
        start, end = x_seg
        draw_hline(canvas, start.x, end.x, start.y, style.axis_color, width=style.axis_width)
        drawn.append("x")
    else:
        LOGGER.debug("x axis outside window y range [%r, %r]", mapper.window.ymin, mapper.window.ymax)

    y_seg = axis_segment(mapper, "y")
    if y_seg is not None:
        start, end = y_seg
        draw_vline(canvas, start.x, start.y, end.y, style.axis_color, width=style.axis_width)
        drawn.append("y")
    else:
        LOGGER.debug("y axis outside window x range [%r, %r]", mapper.window.xmin, mapper.window.xmax)

    if style.draw_ticks:
        if x_seg is not None:
            _draw_x_axis_ticks(canvas, layout_axis(mapper, "x", style.grid_spacing), x_seg[0].y, style)
        if y_seg is not None:
            _draw_y_axis_ticks(canvas, layout_axis(mapper, "y", style.grid_spacing), y_seg[0].x, style)
    return tuple(drawn)


def _tick_reach(style: GraphStyle) -> int:
    return max(style.tick_length // 2, style.axis_width // 2)


def _draw_x_axis_ticks(canvas: np.ndarray, grid: AxisGrid, axis_row: int, style: GraphStyle) -> None:
    half = style.tick_length // 2
    for col, value in grid.lines():
        if style.tick_length > 0:
            y0 = axis_row - half
            draw_vline(canvas, col, y0, y0 + style.tick_length - 1, style.axis_color, width=style.tick_width)
        if style.label_ticks and tick_labeled(value, grid.units_per_line):
            label = format_tick(value, step=grid.units_per_line)
            tw, th = text_size(label, font_family=style.font_family, font_size_px=style.font_size_px)
            top = axis_row + _tick_reach(style) + style.tick_label_pad
            if top + th > canvas.shape[0]:
                top = axis_row - _tick_reach(style) - style.tick_label_pad - th
            _draw_label(canvas, col - tw // 2, top, label, style)


def _draw_y_axis_ticks(canvas: np.ndarray, grid: AxisGrid, axis_col: int, style: GraphStyle) -> None:
    half = style.tick_length // 2
    for row, value in grid.lines():
        if style.tick_length > 0:
            x0 = axis_col - half
            draw_hline(canvas, x0, x0 + style.tick_length - 1, row, style.axis_color, width=style.tick_width)
        if style.label_ticks and tick_labeled(value, grid.units_per_line):
            label = format_tick(value, step=grid.units_per_line)
            tw, th = text_size(label, font_family=style.font_family, font_size_px=style.font_size_px)
            left = axis_col - _tick_reach(style) - style.tick_label_pad - tw
            if left < 0:
                left = axis_col + _tick_reach(style) + style.tick_label_pad
            _draw_label(canvas, left, row - th // 2, label, style)


def _draw_label(canvas: np.ndarray, x: int, y: int, label: str, style: GraphStyle) -> None:
    draw_text(
        canvas,
        x,
        y,
        label,
        style.text_color,
        font_family=style.font_family,
        font_size_px=style.font_size_px,
        antialias=style.antialias,
    )
