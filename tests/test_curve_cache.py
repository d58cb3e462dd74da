import unittest

import numpy as np

from splines.curve_cache import CurveCache
from splines.spline_config import InterpolationScheme


class TestCurveCache(unittest.TestCase):
    def setUp(self):
        self.points = np.array(
            [[0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 0]], dtype=float
        )
        self.scheme = InterpolationScheme.CATMULL_ROM
        self.cache = CurveCache(lambda: (self.points, self.scheme), resolution=20)

    def test_nothing_is_computed_before_refresh(self):
        self.assertTrue(self.cache.is_dirty)
        self.assertIsNone(self.cache.points)
        self.assertIsNone(self.cache.tangents)
        self.assertEqual(self.cache.refresh_count, 0)

    def test_refresh_samples_whole_curve(self):
        points = self.cache.refresh()
        self.assertEqual(points.shape, (20, 3))
        self.assertEqual(self.cache.tangents.shape, (20, 3))
        np.testing.assert_array_equal(points[0], self.points[0])
        np.testing.assert_allclose(points[-1], self.points[-1], atol=1e-12)
        np.testing.assert_allclose(np.linalg.norm(self.cache.tangents, axis=1), 1.0)

    def test_refresh_is_idempotent(self):
        """Two refreshes without a mutation return the same arrays"""
        first = self.cache.refresh()
        first_copy = first.copy()
        second = self.cache.refresh()
        self.assertIs(first, second)
        np.testing.assert_array_equal(first_copy, second)
        self.assertEqual(self.cache.refresh_count, 1)

    def test_reads_stay_stale_until_refresh(self):
        before = self.cache.refresh().copy()

        self.points = self.points * 2.0
        self.cache.invalidate()
        self.assertTrue(self.cache.is_dirty)
        np.testing.assert_array_equal(self.cache.points, before)

        after = self.cache.refresh()
        self.assertFalse(self.cache.is_dirty)
        np.testing.assert_allclose(after, before * 2.0, atol=1e-12)
        self.assertEqual(self.cache.refresh_count, 2)

    def test_resolution_change(self):
        self.cache.refresh()
        self.cache.resolution = 20
        self.assertFalse(self.cache.is_dirty)

        self.cache.resolution = 45
        self.assertTrue(self.cache.is_dirty)
        self.assertEqual(self.cache.refresh().shape, (45, 3))

        with self.assertRaises(ValueError):
            CurveCache(lambda: (self.points, self.scheme), resolution=1)


if __name__ == '__main__':
    unittest.main()
