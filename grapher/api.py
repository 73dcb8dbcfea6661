from __future__ import annotations

from typing import Any

from grapher.graph import GraphConfig
from grapher.style import GraphStyle
from grapher.window import Viewport, Window


DEFAULT_WINDOW = (-10.0, 10.0, -10.0, 10.0)
DEFAULT_SIZE = (400, 400)


def graph_config(
    window: tuple[float, float, float, float] = DEFAULT_WINDOW,
    size: tuple[int, int] = DEFAULT_SIZE,
    **style: Any,
) -> GraphConfig:
    """Build a validated config from ``(xmin, xmax, ymin, ymax)``, ``(width, height)`` and style options."""
    xmin, xmax, ymin, ymax = window
    width, height = size
    config = GraphConfig(
        window=Window(xmin=float(xmin), xmax=float(xmax), ymin=float(ymin), ymax=float(ymax)),
        viewport=Viewport(width=width, height=height),
        style=GraphStyle(**style),
    )
    config.validate()
    return config
