from __future__ import annotations

import math
import unittest

import numpy as np

from grapher.errors import DimensionMismatchError, PlotDataError
from grapher.points import draw_points, point_label, visible_mask
from grapher.raster import new_canvas
from grapher.scales import CoordinateMapper
from grapher.series import FunctionPlot, PointSet
from grapher.style import GraphStyle
from grapher.window import PixelPoint, Point, Viewport, Window


WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def _mapper(size: int = 40) -> CoordinateMapper:
    return CoordinateMapper(window=Window(-10.0, 10.0, -10.0, 10.0), viewport=Viewport(size, size))


class PointSetTests(unittest.TestCase):
    def test_mismatched_lengths_rejected(self) -> None:
        with self.assertRaises(DimensionMismatchError):
            PointSet(x=[1, 2, 3], y=[1, 2])

    def test_inputs_are_copied_and_frozen(self) -> None:
        xs = np.asarray([1.0, 2.0])
        points = PointSet(x=xs, y=[3, 4])
        xs[0] = 99.0
        self.assertEqual(points.x.tolist(), [1.0, 2.0])
        self.assertEqual(points.y.dtype, np.float64)
        with self.assertRaises(ValueError):
            points.x[0] = 5.0

    def test_from_pairs(self) -> None:
        points = PointSet.from_pairs([(1, 2), (3, 4)])
        self.assertEqual(points.x.tolist(), [1.0, 3.0])
        self.assertEqual(points.y.tolist(), [2.0, 4.0])
        self.assertEqual(len(points), 2)

    def test_from_pairs_rejects_ragged_pairs(self) -> None:
        with self.assertRaises(DimensionMismatchError):
            PointSet.from_pairs([(1, 2), (3,)])

    def test_non_numeric_values_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            PointSet(x=["a"], y=[1])

    def test_function_plot_requires_callable(self) -> None:
        with self.assertRaises(PlotDataError):
            FunctionPlot(func=3)  # type: ignore[arg-type]
        with self.assertRaises(PlotDataError):
            FunctionPlot(range_low=math.inf)


class VisibilityTests(unittest.TestCase):
    def test_mask_includes_edges_and_drops_nan(self) -> None:
        points = PointSet(x=[-10.0, 10.0, 20.0, math.nan, 0.0], y=[10.0, -10.0, 0.0, 0.0, 10.5])
        mask = visible_mask(points, Window(-10.0, 10.0, -10.0, 10.0))
        self.assertEqual(mask.tolist(), [True, True, False, False, False])

    def test_label_text_drops_integral_fraction(self) -> None:
        self.assertEqual(point_label(Point(1.0, 2.5)), "(1,2.5)")
        self.assertEqual(point_label(Point(-3.0, 0.0)), "(-3,0)")


class DrawPointsTests(unittest.TestCase):
    def test_point_outside_window_is_not_drawn(self) -> None:
        canvas = new_canvas(40, 40, WHITE)
        drawn = draw_points(canvas, PointSet(x=[20.0], y=[0.0]), _mapper(), GraphStyle())
        self.assertEqual(drawn, [])
        self.assertTrue(np.all(canvas == 255))

    def test_circle_is_centered_on_point(self) -> None:
        canvas = new_canvas(40, 40, WHITE)
        style = GraphStyle(point_color=BLACK, point_diameter=7, antialias=False)
        drawn = draw_points(canvas, PointSet(x=[0.0], y=[0.0]), _mapper(), style)
        self.assertEqual(drawn, [PixelPoint(20, 20)])
        self.assertEqual(tuple(canvas[20, 20, :3]), (0, 0, 0))
        for left, right in ((17, 23), (18, 22)):
            self.assertEqual(tuple(canvas[20, left, :3]), tuple(canvas[20, right, :3]))
            self.assertEqual(tuple(canvas[left, 20, :3]), tuple(canvas[right, 20, :3]))
        self.assertEqual(tuple(canvas[20, 17, :3]), (0, 0, 0))
        self.assertEqual(tuple(canvas[20, 16, :3]), (255, 255, 255))
        self.assertEqual(tuple(canvas[20, 24, :3]), (255, 255, 255))
        self.assertEqual(tuple(canvas[17, 17, :3]), (255, 255, 255))

    def test_antialiased_edges_blend(self) -> None:
        canvas = new_canvas(40, 40, WHITE)
        style = GraphStyle(point_color=BLACK, point_diameter=7, antialias=True)
        draw_points(canvas, PointSet(x=[0.0], y=[0.0]), _mapper(), style)
        values = canvas[17:24, 17:24, 0]
        self.assertTrue(np.any((values > 0) & (values < 255)))

    def test_aliased_circle_is_binary(self) -> None:
        canvas = new_canvas(40, 40, WHITE)
        style = GraphStyle(point_color=BLACK, point_diameter=9, antialias=False)
        draw_points(canvas, PointSet(x=[0.0, 5.0], y=[0.0, -5.0]), _mapper(), style)
        self.assertTrue(np.all(np.isin(canvas[:, :, 0], (0, 255))))

    def test_per_set_color_and_diameter_override_style(self) -> None:
        canvas = new_canvas(40, 40, WHITE)
        points = PointSet(x=[0.0], y=[0.0], color=(200, 0, 0, 255), diameter=1)
        draw_points(canvas, points, _mapper(), GraphStyle(point_diameter=9))
        self.assertEqual(tuple(canvas[20, 20, :3]), (200, 0, 0))
        self.assertEqual(tuple(canvas[20, 21, :3]), (255, 255, 255))

    def test_labels_written_below_marker_when_enabled(self) -> None:
        mapper = _mapper(60)
        unlabeled = new_canvas(60, 60, WHITE)
        draw_points(unlabeled, PointSet(x=[0.0], y=[0.0]), mapper, GraphStyle())
        labeled = new_canvas(60, 60, WHITE)
        draw_points(labeled, PointSet(x=[0.0], y=[0.0], labeled=True), mapper, GraphStyle())
        self.assertTrue(np.all(unlabeled[35:, :, :3] == 255))
        self.assertTrue(np.any(labeled[35:, :, 0] < 128))
        np.testing.assert_array_equal(labeled[:34], unlabeled[:34])


if __name__ == "__main__":
    unittest.main()
