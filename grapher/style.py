from __future__ import annotations

from dataclasses import dataclass, fields, replace
import math
from numbers import Integral, Real
from typing import Any

from grapher.raster.canvas import RGBA
from grapher.raster.draw_text import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PX


def coerce_color(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float = 1.0) -> RGBA:
    if len(color) == 3:
        r, g, b = color
        a = int(max(0.0, min(1.0, alpha)) * 255)
        return (int(r), int(g), int(b), a)
    if len(color) != 4:
        raise ValueError(f"color must have 3 or 4 components (got {len(color)})")
    r, g, b, a = color
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (int(r), int(g), int(b), out_a)


_FLAG_FIELDS = ("draw_gridlines", "draw_ticks", "label_ticks", "label_points", "antialias")
_INT_FIELDS = (
    "grid_width",
    "axis_width",
    "tick_length",
    "tick_width",
    "tick_label_pad",
    "curve_width",
    "point_diameter",
    "point_label_pad",
)

_COLOR_FIELDS = ("background", "grid_color", "axis_color", "curve_color", "point_color", "text_color")


def _is_rgba(color: object) -> bool:
    if not isinstance(color, tuple) or len(color) != 4:
        return False
    return all(isinstance(c, Integral) and not isinstance(c, bool) and 0 <= c <= 255 for c in color)

@dataclass(frozen=True)
class GraphStyle:
    background: RGBA = (255, 255, 255, 255)

    draw_gridlines: bool = True
    grid_spacing: float = 1.0
    grid_color: RGBA = (214, 220, 229, 255)
    grid_width: int = 1

    axis_color: RGBA = (32, 36, 44, 255)
    axis_width: int = 2

    draw_ticks: bool = True
    label_ticks: bool = True
    tick_length: int = 8
    tick_width: int = 1
    tick_label_pad: int = 3

    curve_color: RGBA = (214, 84, 38, 255)
    curve_width: int = 2

    point_color: RGBA = (38, 110, 214, 255)
    point_diameter: int = 7
    label_points: bool = False
    point_label_pad: int = 2

    text_color: RGBA = (32, 36, 44, 255)
    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    antialias: bool = True

    def __post_init__(self) -> None:
        for name in _FLAG_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false")
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ValueError(f"{name} must be an integer")
        for name in ("grid_spacing", "font_size_px"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ValueError(f"{name} must be a number")
        if not isinstance(self.font_family, str):
            raise ValueError("font_family must be a string")
        for name in _COLOR_FIELDS:
            if not _is_rgba(getattr(self, name)):
                raise ValueError(f"{name} must be an (r, g, b, a) tuple of integers in 0..255")
        for name in ("grid_width", "axis_width", "tick_width", "curve_width"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be > 0")
        if self.tick_length < 0:
            raise ValueError("tick_length must be >= 0")
        if self.point_diameter <= 0:
            raise ValueError("point_diameter must be > 0")
        if not math.isfinite(self.font_size_px) or self.font_size_px <= 0:
            raise ValueError("font_size_px must be > 0")

    def with_options(self, **overrides: Any) -> "GraphStyle":
        return replace(self, **overrides)


STYLE_FIELDS = frozenset(f.name for f in fields(GraphStyle))
COLOR_FIELDS = frozenset(_COLOR_FIELDS)
