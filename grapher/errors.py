from __future__ import annotations


class GraphError(ValueError):
    """Fatal input error detected before any pixel is written."""


class InvalidWindowError(GraphError):
    pass


class InvalidViewportError(GraphError):
    pass


class DimensionMismatchError(GraphError):
    pass


class PlotDataError(GraphError):
    pass
