from __future__ import annotations

from dataclasses import dataclass
import math

from grapher.errors import InvalidViewportError, InvalidWindowError


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class PixelPoint:
    x: int
    y: int


@dataclass(frozen=True)
class Window:
    """Logical coordinate rectangle shown on the raster."""

    xmin: float
    xmax: float
    ymin: float
    ymax: float

    def validate(self) -> None:
        bounds = (self.xmin, self.xmax, self.ymin, self.ymax)
        if not all(math.isfinite(float(v)) for v in bounds):
            raise InvalidWindowError("window bounds must be finite")
        if self.xmax <= self.xmin:
            raise InvalidWindowError(f"xmax must be > xmin (got xmin={self.xmin}, xmax={self.xmax})")
        if self.ymax <= self.ymin:
            raise InvalidWindowError(f"ymax must be > ymin (got ymin={self.ymin}, ymax={self.ymax})")

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def contains(self, point: Point) -> bool:
        return self.xmin <= point.x <= self.xmax and self.ymin <= point.y <= self.ymax

    def axis_range(self, axis: str) -> tuple[float, float]:
        if axis == "x":
            return (self.xmin, self.xmax)
        if axis == "y":
            return (self.ymin, self.ymax)
        raise ValueError("axis must be 'x' or 'y'")


@dataclass(frozen=True)
class Viewport:
    width: int
    height: int

    def validate(self) -> None:
        if isinstance(self.width, bool) or isinstance(self.height, bool):
            raise InvalidViewportError("width and height must be integers")
        if int(self.width) != self.width or int(self.height) != self.height:
            raise InvalidViewportError("width and height must be integers")
        if self.width <= 0 or self.height <= 0:
            raise InvalidViewportError(f"width and height must be > 0 (got {self.width}x{self.height})")

    def extent(self, axis: str) -> int:
        if axis == "x":
            return int(self.width)
        if axis == "y":
            return int(self.height)
        raise ValueError("axis must be 'x' or 'y'")
