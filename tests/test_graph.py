from __future__ import annotations

import math
import unittest

import numpy as np

from grapher import (
    FunctionPlot,
    GraphConfig,
    Grapher,
    GraphStyle,
    InvalidViewportError,
    InvalidWindowError,
    PlotDataError,
    PointSet,
    Viewport,
    Window,
    graph_config,
    render,
    render_graph,
    validate,
)
from grapher.errors import DimensionMismatchError, GraphError


RED = (220, 0, 0, 255)
BLUE = (0, 0, 220, 255)


def _config(**style: object) -> GraphConfig:
    return GraphConfig(
        window=Window(-10.0, 10.0, -10.0, 10.0),
        viewport=Viewport(200, 200),
        style=GraphStyle(**style),
    )


class ValidationTests(unittest.TestCase):
    def test_errors_share_a_base(self) -> None:
        for exc in (InvalidWindowError, InvalidViewportError, DimensionMismatchError, PlotDataError):
            self.assertTrue(issubclass(exc, GraphError))
            self.assertTrue(issubclass(exc, ValueError))

    def test_empty_window_rejected(self) -> None:
        config = GraphConfig(window=Window(1.0, 1.0, 0.0, 1.0), viewport=Viewport(10, 10))
        with self.assertRaises(InvalidWindowError):
            render_graph(config)

    def test_inverted_and_non_finite_windows_rejected(self) -> None:
        for window in (Window(0.0, 1.0, 2.0, 1.0), Window(0.0, math.inf, 0.0, 1.0), Window(math.nan, 1.0, 0.0, 1.0)):
            with self.subTest(window=window), self.assertRaises(InvalidWindowError):
                window.validate()

    def test_empty_viewport_rejected(self) -> None:
        for viewport in (Viewport(0, 10), Viewport(10, -1), Viewport(10.5, 10)):  # type: ignore[arg-type]
            with self.subTest(viewport=viewport), self.assertRaises(InvalidViewportError):
                viewport.validate()

    def test_raster_shape_must_match_viewport(self) -> None:
        config = _config()
        with self.assertRaises(InvalidViewportError):
            render(config, (), np.zeros((100, 200, 4), dtype=np.uint8))
        with self.assertRaises(InvalidViewportError):
            render(config, (), np.zeros((200, 200, 3), dtype=np.uint8))
        with self.assertRaises(InvalidViewportError):
            render(config, (), np.zeros((200, 200, 4), dtype=np.float32))
        with self.assertRaises(InvalidViewportError):
            render(config, (), None)

    def test_invalid_window_leaves_raster_untouched(self) -> None:
        config = GraphConfig(window=Window(5.0, -5.0, -1.0, 1.0), viewport=Viewport(20, 20))
        raster = np.full((20, 20, 4), 7, dtype=np.uint8)
        with self.assertRaises(InvalidWindowError):
            render(config, [FunctionPlot()], raster)
        self.assertTrue(np.all(raster == 7))

    def test_failing_function_leaves_raster_untouched(self) -> None:
        raster = np.full((200, 200, 4), 7, dtype=np.uint8)
        content = [PointSet(x=[0.0], y=[0.0]), FunctionPlot(func=lambda x: "nope")]
        with self.assertRaises(PlotDataError):
            render(_config(), content, raster)
        self.assertTrue(np.all(raster == 7))

    def test_unknown_content_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            validate(_config(), ["not content"])  # type: ignore[list-item]
        with self.assertRaises(PlotDataError):
            render_graph(_config(), 42)  # type: ignore[arg-type]

    def test_validate_returns_content_list(self) -> None:
        plot = FunctionPlot()
        self.assertEqual(validate(_config(), (p for p in [plot])), [plot])


class RenderTests(unittest.TestCase):
    def test_output_matches_viewport(self) -> None:
        raster = render_graph(GraphConfig(window=Window(-1.0, 1.0, -2.0, 2.0), viewport=Viewport(64, 48)))
        self.assertEqual(raster.shape, (48, 64, 4))
        self.assertEqual(raster.dtype, np.uint8)

    def test_rendering_is_deterministic(self) -> None:
        config = _config(label_points=True)
        content = [FunctionPlot(func=math.sin), PointSet(x=[1.0, -2.5], y=[3.0, 0.5])]
        first = render_graph(config, content)
        second = render_graph(config, content)
        np.testing.assert_array_equal(first, second)

    def test_render_into_caller_raster_overwrites_everything(self) -> None:
        config = _config(draw_gridlines=False, draw_ticks=False)
        raster = np.zeros((200, 200, 4), dtype=np.uint8)
        render(config, (), raster)
        np.testing.assert_array_equal(raster, render_graph(config))

    def test_background_then_grid_then_axes(self) -> None:
        style = GraphStyle(
            background=(250, 250, 250, 255),
            grid_color=(0, 200, 0, 255),
            axis_color=(0, 0, 0, 255),
            axis_width=1,
            grid_spacing=5.0,
            draw_ticks=False,
        )
        config = GraphConfig(window=Window(-10.0, 10.0, -10.0, 10.0), viewport=Viewport(200, 200), style=style)
        raster = render_graph(config)
        self.assertEqual(tuple(raster[10, 10, :3]), (250, 250, 250))
        self.assertEqual(tuple(raster[10, 50, :3]), (0, 200, 0))
        # The y axis sits on the x = 0 grid line and is drawn after it.
        self.assertEqual(tuple(raster[10, 100, :3]), (0, 0, 0))

    def test_gridlines_can_be_disabled(self) -> None:
        raster = render_graph(_config(draw_gridlines=False, grid_spacing=5.0, draw_ticks=False))
        self.assertEqual(tuple(raster[10, 50, :3]), (255, 255, 255))

    def test_content_draws_over_axes_in_order(self) -> None:
        config = _config(point_diameter=9, antialias=False)
        points_first = render_graph(config, [PointSet(x=[0.0], y=[0.0], color=RED), FunctionPlot(func=lambda x: 0.0, color=BLUE)])
        curve_first = render_graph(config, [FunctionPlot(func=lambda x: 0.0, color=BLUE), PointSet(x=[0.0], y=[0.0], color=RED)])
        self.assertEqual(tuple(points_first[100, 100, :3]), BLUE[:3])
        self.assertEqual(tuple(curve_first[100, 100, :3]), RED[:3])

    def test_piecewise_functions_keep_their_ranges(self) -> None:
        config = _config(draw_gridlines=False, draw_ticks=False, curve_width=1)
        content = [
            FunctionPlot(func=lambda x: 5.0, range_low=-10.0, range_high=0.0, color=RED),
            FunctionPlot(func=lambda x: -5.0, range_low=0.0, range_high=10.0, color=BLUE),
        ]
        raster = render_graph(config, content)
        self.assertEqual(tuple(raster[50, 40, :3]), RED[:3])
        self.assertEqual(tuple(raster[150, 160, :3]), BLUE[:3])
        self.assertEqual(tuple(raster[50, 160, :3]), (255, 255, 255))
        self.assertEqual(tuple(raster[150, 40, :3]), (255, 255, 255))

    def test_point_outside_window_changes_nothing(self) -> None:
        config = _config()
        np.testing.assert_array_equal(render_graph(config, [PointSet(x=[20.0], y=[0.0])]), render_graph(config))

    def test_window_without_origin_omits_vertical_axis(self) -> None:
        config = GraphConfig(
            window=Window(5.0, 15.0, -10.0, 10.0),
            viewport=Viewport(200, 200),
            style=GraphStyle(draw_gridlines=False, axis_color=(0, 0, 0, 255)),
        )
        raster = render_graph(config)
        self.assertFalse(np.any(np.all(raster[:, :, 0] == 0, axis=0)))
        self.assertTrue(np.all(raster[100, :, 0] == 0))


class GrapherTests(unittest.TestCase):
    def test_draw_function_defaults_to_identity(self) -> None:
        grapher = Grapher(_config(draw_gridlines=False, draw_ticks=False, curve_color=RED))
        raster = grapher.draw_function()
        self.assertEqual(tuple(raster[50, 150, :3]), RED[:3])
        self.assertEqual(tuple(raster[150, 150, :3]), (255, 255, 255))

    def test_draw_points_rejects_mismatch_before_drawing(self) -> None:
        grapher = Grapher(_config())
        raster = grapher.new_raster()
        raster[:] = 9
        with self.assertRaises(DimensionMismatchError):
            grapher.draw_points([1, 2, 3], [1, 2], raster=raster)
        self.assertTrue(np.all(raster == 9))

    def test_draw_grid_matches_empty_render(self) -> None:
        grapher = Grapher(_config())
        np.testing.assert_array_equal(grapher.draw_grid(), render_graph(grapher.config))

    def test_with_window_returns_new_grapher(self) -> None:
        grapher = Grapher(_config())
        moved = grapher.with_window(Window(0.0, 1.0, 0.0, 1.0))
        self.assertEqual(grapher.config.window, Window(-10.0, 10.0, -10.0, 10.0))
        self.assertEqual(moved.config.window, Window(0.0, 1.0, 0.0, 1.0))
        with self.assertRaises(InvalidWindowError):
            grapher.with_window(Window(1.0, 0.0, 0.0, 1.0))

    def test_label_point_writes_below_point(self) -> None:
        grapher = Grapher(_config(draw_gridlines=False, draw_ticks=False))
        raster = grapher.draw_grid()
        before = raster.copy()
        grapher.label_point(raster, 5.0, 5.0)
        changed_rows = np.flatnonzero(np.any(raster != before, axis=(1, 2)))
        self.assertGreater(changed_rows.size, 0)
        self.assertGreaterEqual(int(changed_rows.min()), 50)

    def test_graph_config_helper(self) -> None:
        config = graph_config((-1, 1, -1, 1), (32, 16), curve_width=3)
        self.assertEqual(config.viewport, Viewport(32, 16))
        self.assertEqual(config.style.curve_width, 3)
        with self.assertRaises(InvalidViewportError):
            graph_config(size=(0, 10))


if __name__ == "__main__":
    unittest.main()
