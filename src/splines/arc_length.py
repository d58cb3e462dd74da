import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from scipy.integrate import quad

from splines import evaluator
from splines.spline_config import DEFAULT_RESOLUTION, InterpolationScheme, validate_resolution

logger = logging.getLogger(__name__)

CurveSource = Callable[[], Tuple[np.ndarray, InterpolationScheme]]


@dataclass
class SampledCurve:
    """Cache for quick parameter lookups based on distance"""

    parameters: np.ndarray  # Evenly spaced t values
    positions: np.ndarray  # (n, 3) positions at those parameters
    distances: np.ndarray  # Non-decreasing cumulative distance per sample
    total_length: float


def sample_curve(control_points, scheme, resolution: int) -> SampledCurve:
    """
    Sample the curve at `resolution` evenly spaced parameters and accumulate
    the chord lengths between consecutive samples.
    """
    parameters = np.linspace(0.0, 1.0, resolution)
    positions = np.array(
        [evaluator.evaluate_point(control_points, scheme, t) for t in parameters]
    )
    chord_lengths = np.linalg.norm(np.diff(positions, axis=0), axis=1)

    distances = np.zeros(resolution)
    distances[1:] = np.cumsum(chord_lengths)

    return SampledCurve(
        parameters=parameters,
        positions=positions,
        distances=distances,
        total_length=float(distances[-1]),
    )


class ArcLengthTable:
    """
    Maps distance along the curve to the parameter t.

    The table is built from `resolution` samples the first time it is queried
    and after every invalidate(); queries in between reuse it.
    """

    def __init__(self, source: CurveSource, resolution: int = DEFAULT_RESOLUTION):
        self._source = source
        self._resolution = validate_resolution(resolution)
        self.sampled_curve: Optional[SampledCurve] = None
        self._dirty = True
        self.build_count = 0

    @property
    def resolution(self) -> int:
        return self._resolution

    @resolution.setter
    def resolution(self, value: int) -> None:
        value = validate_resolution(value)
        if value != self._resolution:
            self._resolution = value
            self.invalidate()

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def invalidate(self) -> None:
        self._dirty = True

    def build(self) -> SampledCurve:
        """Rebuild the table from the current control points"""
        control_points, scheme = self._source()

        start_time = time.time()
        sampled = sample_curve(control_points, scheme, self._resolution)
        build_time = time.time() - start_time

        self.sampled_curve = sampled
        self._dirty = False
        self.build_count += 1
        logger.debug(
            f"Arc length table built: {self._resolution} samples, "
            f"length {sampled.total_length:.6f}, {build_time:.6f} seconds"
        )
        return sampled

    def table(self) -> SampledCurve:
        if self._dirty or self.sampled_curve is None:
            return self.build()
        return self.sampled_curve

    @property
    def total_length(self) -> float:
        return self.table().total_length

    def distance_to_parameter(self, distance: float) -> float:
        """
        Convert distance to parameter t using the lookup table and linear interpolation.
        Distances outside [0, total_length] are clamped to the curve ends.
        """
        table = self.table()
        distance = float(distance)
        if np.isnan(distance):
            raise ValueError("Distance must not be NaN")

        # Handle edge cases
        if distance <= 0:
            return 0.0
        if distance >= table.total_length:
            return 1.0

        # Find bracketing indices in lookup table
        idx = int(np.searchsorted(table.distances, distance, side="left"))
        if idx == 0:
            return float(table.parameters[0])

        d0 = table.distances[idx - 1]
        d1 = table.distances[idx]
        t0 = table.parameters[idx - 1]
        t1 = table.parameters[idx]

        if d1 - d0 <= 0:
            return float(t0)
        return float(t0 + (t1 - t0) * (distance - d0) / (d1 - d0))

    def parameter_to_distance(self, t: float) -> float:
        """Approximate distance travelled from the start up to parameter t"""
        table = self.table()
        t = evaluator.clamp_parameter(t)
        return float(np.interp(t, table.parameters, table.distances))

    def get_position_at_distance(self, distance: float) -> np.ndarray:
        control_points, scheme = self._source()
        t = self.distance_to_parameter(distance)
        return evaluator.evaluate_point(control_points, scheme, t)

    def get_tangent_at_distance(self, distance: float) -> np.ndarray:
        control_points, scheme = self._source()
        t = self.distance_to_parameter(distance)
        return evaluator.evaluate_tangent(control_points, scheme, t)

    def sample_by_distance(self, count: int) -> np.ndarray:
        """
        Get `count` points spaced evenly along the curve by arc length

        Returns:
            np.ndarray: (count, 3) positions, first and last on the curve ends
        """
        if count < 2:
            raise ValueError(f"Need at least 2 samples, got {count}")
        control_points, scheme = self._source()
        total_length = self.total_length
        return np.array(
            [
                evaluator.evaluate_point(
                    control_points, scheme, self.distance_to_parameter(d)
                )
                for d in np.linspace(0.0, total_length, count)
            ]
        )

    def exact_length(self, t0: float = 0.0, t1: float = 1.0) -> float:
        """
        Arc length between two parameters by adaptive quadrature of the speed.
        Slower than the table, used to check how well the samples approximate it.
        """
        control_points, scheme = self._source()
        t0 = evaluator.clamp_parameter(t0)
        t1 = evaluator.clamp_parameter(t1)
        if t1 <= t0:
            return 0.0

        def speed(t):
            return np.linalg.norm(evaluator.evaluate_derivative(control_points, scheme, t))

        segments = evaluator.get_basis(scheme).segment_count(len(control_points))
        # Segment joints are kinks in the speed, pass them as breakpoints
        breakpoints = [b for b in np.linspace(0.0, 1.0, segments + 1) if t0 < b < t1]
        length, _ = quad(speed, t0, t1, points=breakpoints or None, limit=200)
        return float(length)
