from __future__ import annotations

import logging

import numpy as np

from grapher.raster import draw_text, fill_circle, text_size
from grapher.scales import CoordinateMapper, format_number
from grapher.series import PointSet
from grapher.style import GraphStyle
from grapher.window import PixelPoint, Point, Window


LOGGER = logging.getLogger(__name__)


def visible_mask(points: PointSet, window: Window) -> np.ndarray:
    # NaN compares false, so non-finite points are never visible.
    return (
        (points.x >= window.xmin)
        & (points.x <= window.xmax)
        & (points.y >= window.ymin)
        & (points.y <= window.ymax)
    )


def point_label(point: Point) -> str:
    return f"({format_number(point.x)},{format_number(point.y)})"


def draw_points(canvas: np.ndarray, points: PointSet, mapper: CoordinateMapper, style: GraphStyle) -> list[PixelPoint]:
    """Draw every in-window point as a filled circle; return the pixel centers drawn."""
    mask = visible_mask(points, mapper.window)
    hidden = len(points) - int(np.count_nonzero(mask))
    if hidden:
        LOGGER.debug("skipping %d of %d points outside the window", hidden, len(points))
    color = points.color if points.color is not None else style.point_color
    diameter = points.diameter if points.diameter is not None else style.point_diameter
    labeled = style.label_points if points.labeled is None else points.labeled

    drawn: list[PixelPoint] = []
    for x, y in zip(points.x[mask].tolist(), points.y[mask].tolist(), strict=True):
        point = Point(x=x, y=y)
        center = mapper.to_pixel(point)
        fill_circle(canvas, center.x, center.y, color=color, diameter=diameter, antialias=style.antialias)
        if labeled:
            label_point(canvas, point, mapper, style, diameter=diameter)
        drawn.append(center)
    return drawn


def label_point(
    canvas: np.ndarray,
    point: Point,
    mapper: CoordinateMapper,
    style: GraphStyle,
    *,
    diameter: int | None = None,
) -> None:
    """Write ``"(x,y)"`` centered just below the point's marker."""
    center = mapper.to_pixel(point)
    radius = (style.point_diameter if diameter is None else diameter) // 2
    label = point_label(point)
    tw, _ = text_size(label, font_family=style.font_family, font_size_px=style.font_size_px)
    draw_text(
        canvas,
        center.x - tw // 2,
        center.y + radius + style.point_label_pad,
        label,
        style.text_color,
        font_family=style.font_family,
        font_size_px=style.font_size_px,
        antialias=style.antialias,
    )
