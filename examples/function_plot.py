from __future__ import annotations

import math
from pathlib import Path

import numpy as np

from grapher import FunctionPlot, Grapher, PointSet, graph_config
from grapher.export import save_png


def _damped(x: float) -> float:
    return 6.0 * math.exp(-0.15 * abs(x)) * math.cos(x)


def main() -> None:
    grapher = Grapher(graph_config((-12.0, 12.0, -8.0, 8.0), (720, 480), grid_spacing=1.0, label_points=True))
    xs = np.asarray([-6.0, -2.5, 0.0, 3.0, 7.5], dtype=np.float64)
    content = [
        FunctionPlot(func=_damped),
        # log raises for x <= 0; those samples are skipped.
        FunctionPlot(func=math.log, color=(70, 150, 90, 255), width=1),
        FunctionPlot(func=math.sqrt, range_low=0.0, range_high=9.0, color=(120, 70, 200, 255)),
        PointSet(x=xs, y=[_damped(float(x)) for x in xs]),
    ]
    raster = grapher.draw_graph(content)
    out = save_png(raster, Path(__file__).with_name("function_plot.png"))
    print(f"wrote {out}")


if __name__ == "__main__":
    main()
