from grapher.api import graph_config
from grapher.errors import (
    DimensionMismatchError,
    GraphError,
    InvalidViewportError,
    InvalidWindowError,
    PlotDataError,
)
from grapher.graph import GraphConfig, Grapher, render, render_graph, validate
from grapher.scales import AxisGrid, CoordinateMapper, GridPositions, layout_axis
from grapher.series import FunctionPlot, PointSet
from grapher.style import GraphStyle
from grapher.window import PixelPoint, Point, Viewport, Window

__all__ = [
    "AxisGrid",
    "CoordinateMapper",
    "DimensionMismatchError",
    "FunctionPlot",
    "GraphConfig",
    "GraphError",
    "GraphStyle",
    "Grapher",
    "GridPositions",
    "InvalidViewportError",
    "InvalidWindowError",
    "PixelPoint",
    "PlotDataError",
    "Point",
    "PointSet",
    "Viewport",
    "Window",
    "graph_config",
    "layout_axis",
    "render",
    "render_graph",
    "validate",
]
