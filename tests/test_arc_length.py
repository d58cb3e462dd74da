import unittest

import numpy as np

from splines.arc_length import ArcLengthTable, sample_curve
from splines.evaluator import evaluate_point
from splines.exceptions import InsufficientControlPointsError
from splines.spline_config import InterpolationScheme

CATMULL_ROM = InterpolationScheme.CATMULL_ROM
BEZIER = InterpolationScheme.BEZIER


class TestArcLengthTable(unittest.TestCase):
    def setUp(self):
        self.line = np.array([[0, 0, 0], [1, 0, 0], [2, 0, 0], [3, 0, 0]], dtype=float)
        self.square = np.array(
            [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=float
        )
        self.points = self.line
        self.scheme = CATMULL_ROM

    def source(self):
        return self.points, self.scheme

    def create_table(self, points, scheme=CATMULL_ROM, resolution=31):
        self.points = points
        self.scheme = scheme
        return ArcLengthTable(self.source, resolution)

    def test_straight_line_length(self):
        """Collinear, evenly spaced points: the curve is the segment itself"""
        table = self.create_table(self.line)
        self.assertAlmostEqual(table.total_length, 3.0, places=9)
        self.assertAlmostEqual(table.exact_length(), 3.0, places=6)

    def test_distances_are_non_decreasing(self):
        sampled = sample_curve(self.square, CATMULL_ROM, 25)
        self.assertEqual(sampled.distances[0], 0.0)
        self.assertTrue(np.all(np.diff(sampled.distances) >= 0))
        self.assertEqual(sampled.positions.shape, (25, 3))
        self.assertAlmostEqual(sampled.total_length, sampled.distances[-1])

    def test_end_positions_match_curve_ends(self):
        table = self.create_table(self.square, resolution=20)
        total = table.total_length
        np.testing.assert_allclose(
            table.get_position_at_distance(0.0), evaluate_point(self.square, CATMULL_ROM, 0.0)
        )
        np.testing.assert_allclose(
            table.get_position_at_distance(total), evaluate_point(self.square, CATMULL_ROM, 1.0)
        )

    def test_out_of_range_distance_is_clamped(self):
        table = self.create_table(self.square, resolution=20)
        np.testing.assert_allclose(
            table.get_position_at_distance(-5.0), evaluate_point(self.square, CATMULL_ROM, 0.0)
        )
        np.testing.assert_allclose(
            table.get_position_at_distance(table.total_length + 10.0),
            evaluate_point(self.square, CATMULL_ROM, 1.0),
        )

    def test_position_at_distance_on_line(self):
        table = self.create_table(self.line)
        np.testing.assert_allclose(table.get_position_at_distance(1.5), [1.5, 0, 0], atol=1e-9)
        self.assertAlmostEqual(table.distance_to_parameter(1.5), 0.5, places=9)
        self.assertAlmostEqual(table.parameter_to_distance(0.5), 1.5, places=9)
        np.testing.assert_allclose(table.get_tangent_at_distance(1.5), [1, 0, 0], atol=1e-12)

    def test_sample_by_distance_is_evenly_spaced(self):
        table = self.create_table(self.line)
        samples = table.sample_by_distance(5)
        np.testing.assert_allclose(samples[:, 0], [0.0, 0.75, 1.5, 2.25, 3.0], atol=1e-2)
        with self.assertRaises(ValueError):
            table.sample_by_distance(1)

    def test_table_is_built_once_until_invalidated(self):
        table = self.create_table(self.square)
        self.assertTrue(table.is_dirty)
        self.assertEqual(table.build_count, 0)

        for d in np.linspace(0, 2, 10):
            table.get_position_at_distance(d)
        self.assertEqual(table.build_count, 1)
        self.assertFalse(table.is_dirty)

        table.invalidate()
        self.assertTrue(table.is_dirty)
        table.distance_to_parameter(0.5)
        self.assertEqual(table.build_count, 2)

    def test_resolution_change_invalidates(self):
        table = self.create_table(self.square, resolution=20)
        self.assertEqual(len(table.table().distances), 20)

        table.resolution = 20
        self.assertFalse(table.is_dirty)

        table.resolution = 40
        self.assertTrue(table.is_dirty)
        self.assertEqual(len(table.table().distances), 40)

        with self.assertRaises(ValueError):
            table.resolution = 1

    def test_sampled_length_approaches_exact_length(self):
        table = self.create_table(self.square, resolution=50)
        sampled = table.total_length
        exact = table.exact_length()
        # Chords never exceed the arc they span
        self.assertLessEqual(sampled, exact + 1e-9)
        self.assertLess((exact - sampled) / exact, 0.01)

    def test_bezier_table(self):
        points = np.array([[0, 0, 0], [1, 2, 0], [3, 2, 0], [4, 0, 0]], dtype=float)
        table = self.create_table(points, scheme=BEZIER, resolution=40)
        self.assertGreater(table.total_length, 4.0)
        np.testing.assert_array_equal(table.get_position_at_distance(0.0), points[0])

    def test_failed_build_stays_dirty(self):
        table = self.create_table(self.square[:3])
        with self.assertRaises(InsufficientControlPointsError):
            table.total_length
        self.assertTrue(table.is_dirty)
        self.assertIsNone(table.sampled_curve)

    def test_nan_distance_is_rejected(self):
        table = self.create_table(self.line)
        with self.assertRaises(ValueError):
            table.distance_to_parameter(float("nan"))


if __name__ == '__main__':
    unittest.main()
