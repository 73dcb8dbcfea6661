from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
import logging

import numpy as np

from grapher.axes import draw_axes, draw_grid_lines
from grapher.errors import InvalidViewportError, PlotDataError
from grapher.points import draw_points, label_point
from grapher.raster import fill_canvas, is_rgba_canvas, new_canvas
from grapher.sampler import SampledCurve, ScalarFunction, draw_curve, identity, sample_function
from grapher.scales import CoordinateMapper
from grapher.series import FunctionPlot, PlotContent, PointSet
from grapher.style import GraphStyle
from grapher.window import Point, Viewport, Window


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphConfig:
    """Everything one render call needs besides the plotted content."""

    window: Window
    viewport: Viewport
    style: GraphStyle = field(default_factory=GraphStyle)

    def validate(self) -> None:
        self.window.validate()
        self.viewport.validate()

    def mapper(self) -> CoordinateMapper:
        return CoordinateMapper(window=self.window, viewport=self.viewport)

    def with_window(self, window: Window) -> "GraphConfig":
        return replace(self, window=window)

    def with_style(self, **overrides: object) -> "GraphConfig":
        return replace(self, style=self.style.with_options(**overrides))


@dataclass(frozen=True)
class _PreparedFunction:
    plot: FunctionPlot
    curve: SampledCurve


def validate(config: GraphConfig, content: Iterable[PlotContent] = (), raster: np.ndarray | None = None) -> list[PlotContent]:
    """Check every fatal condition up front; return the content as a list."""
    config.validate()
    if raster is not None:
        expected = (config.viewport.height, config.viewport.width, 4)
        if not is_rgba_canvas(raster) or raster.shape != expected:
            shape = getattr(raster, "shape", None)
            raise InvalidViewportError(f"raster must be uint8 with shape {expected}, got {shape}")
    items = _as_content_list(content)
    for item in items:
        if not isinstance(item, (PointSet, FunctionPlot)):
            raise PlotDataError(f"unsupported plot content: {type(item)!r}")
    return items


def render(config: GraphConfig, content: Iterable[PlotContent] | PlotContent = (), raster: np.ndarray | None = None) -> None:
    """Draw the graph into ``raster``, which must match ``config.viewport``.

    Stages run in a fixed order (background, grid lines, axes and ticks, then
    content in the order given) and each may paint over the previous ones.
    Nothing is written unless all validation passes; functions are sampled
    before the first pixel is touched, so a failing function leaves the raster
    unchanged too.
    """
    if raster is None:
        raise InvalidViewportError("render requires a raster; use render_graph to allocate one")
    items = validate(config, content, raster)
    mapper = config.mapper()
    style = config.style
    prepared: list[PointSet | _PreparedFunction] = []
    for item in items:
        if isinstance(item, FunctionPlot):
            curve = sample_function(item.func, mapper, item.range_low, item.range_high)
            prepared.append(_PreparedFunction(plot=item, curve=curve))
        else:
            prepared.append(item)

    fill_canvas(raster, style.background)
    if style.draw_gridlines:
        draw_grid_lines(raster, mapper, style)
    draw_axes(raster, mapper, style)
    for entry in prepared:
        if isinstance(entry, _PreparedFunction):
            draw_curve(
                raster,
                entry.curve,
                color=entry.plot.color if entry.plot.color is not None else style.curve_color,
                width=entry.plot.width if entry.plot.width is not None else style.curve_width,
            )
        else:
            draw_points(raster, entry, mapper, style)


def render_graph(config: GraphConfig, content: Iterable[PlotContent] | PlotContent = ()) -> np.ndarray:
    items = validate(config, content)
    raster = new_canvas(config.viewport.width, config.viewport.height, color=config.style.background)
    render(config, items, raster)
    return raster


class Grapher:
    """Renders graphs for one fixed configuration.

    The configuration is immutable; use ``with_window`` to get a grapher for a
    different range instead of mutating this one.
    """

    def __init__(self, config: GraphConfig) -> None:
        config.validate()
        self._config = config

    @property
    def config(self) -> GraphConfig:
        return self._config

    def with_window(self, window: Window) -> "Grapher":
        return Grapher(self._config.with_window(window))

    def new_raster(self) -> np.ndarray:
        return new_canvas(self._config.viewport.width, self._config.viewport.height, color=self._config.style.background)

    def draw_grid(self, raster: np.ndarray | None = None) -> np.ndarray:
        """Background, grid lines and axes only."""
        return self._render((), raster)

    def draw_points(self, x: object, y: object, *, labeled: bool | None = None, raster: np.ndarray | None = None) -> np.ndarray:
        return self._render([PointSet(x=x, y=y, labeled=labeled)], raster)

    def draw_function(
        self,
        func: ScalarFunction = identity,
        range_low: float | None = None,
        range_high: float | None = None,
        *,
        raster: np.ndarray | None = None,
    ) -> np.ndarray:
        return self._render([FunctionPlot(func=func, range_low=range_low, range_high=range_high)], raster)

    def draw_graph(self, content: Iterable[PlotContent] | PlotContent = (), raster: np.ndarray | None = None) -> np.ndarray:
        return self._render(content, raster)

    def label_point(self, raster: np.ndarray, x: float, y: float) -> None:
        validate(self._config, (), raster)
        label_point(raster, Point(x=float(x), y=float(y)), self._config.mapper(), self._config.style)

    def _render(self, content: Iterable[PlotContent] | PlotContent, raster: np.ndarray | None) -> np.ndarray:
        if raster is None:
            return render_graph(self._config, content)
        render(self._config, content, raster)
        return raster


def _as_content_list(content: Iterable[PlotContent] | PlotContent | None) -> list[PlotContent]:
    if content is None:
        return []
    if isinstance(content, (PointSet, FunctionPlot)):
        return [content]
    try:
        return list(content)
    except TypeError as exc:
        raise PlotDataError(f"unsupported plot content: {type(content)!r}") from exc
