import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from splines import evaluator
from splines.arc_length import ArcLengthTable
from splines.control_points import ControlPointSet
from splines.curve_cache import CurveCache
from splines.spline_config import InterpolationScheme, SplineConfig, validate_resolution

logger = logging.getLogger(__name__)


class Spline:
    """
    A curve through an ordered set of control points, queried by the host
    rendering or editing layer.

    Owns the control points, the arc length table and the curve cache. Any
    mutation of the points or of the scheme, resolution or closed options
    marks both caches dirty. Not thread safe: keep all calls on one thread.
    """

    def __init__(
        self,
        points: Sequence[Sequence[float]] = (),
        config: Optional[SplineConfig] = None,
        **overrides,
    ):
        """
        Initialize the spline.

        Args:
            points: Initial control points, (x, y, z) or (x, y)
            config: Scheme, resolution and closed options (defaults if omitted)
            **overrides: Individual config fields taking precedence over `config`
        """
        base = config.to_dict() if config is not None else {}
        base.update(overrides)
        self.config = SplineConfig.from_dict(base)

        self.control_points = ControlPointSet(points)
        self._effective: Optional[np.ndarray] = None
        self._effective_key: Optional[Tuple[int, bool]] = None

        self.arc_length_table = ArcLengthTable(self._curve_source, self.config.resolution)
        self.curve_cache = CurveCache(self._curve_source, self.config.resolution)
        self.control_points.add_listener(self._invalidate_caches)

    # Configuration

    @property
    def scheme(self) -> InterpolationScheme:
        return self.config.scheme

    @property
    def resolution(self) -> int:
        return self.config.resolution

    @property
    def closed(self) -> bool:
        return self.config.closed

    def set_scheme(self, scheme) -> None:
        scheme = InterpolationScheme.parse(scheme)
        if scheme == self.config.scheme:
            return
        logger.info(f"Interpolation scheme changed from {self.config.scheme.value} to {scheme.value}")
        self.config.scheme = scheme
        self._invalidate_caches()

    def set_resolution(self, resolution: int) -> None:
        resolution = validate_resolution(resolution)
        if resolution == self.config.resolution:
            return
        logger.info(f"Resolution changed from {self.config.resolution} to {resolution}")
        self.config.resolution = resolution
        self.arc_length_table.resolution = resolution
        self.curve_cache.resolution = resolution

    def set_closed(self, closed: bool) -> None:
        """
        Close or open the curve by repeating the first control point at the end.

        The end points stay clamped, so a closed Catmull-Rom curve has a corner
        at the seam: the tangent at t = 0 and t = 1 generally differ.
        """
        closed = bool(closed)
        if closed == self.config.closed:
            return
        self.config.closed = closed
        self._invalidate_caches()

    # Control point mutation

    def add_point(self, point: Sequence[float]) -> None:
        self.control_points.append(point)

    def insert_point(self, index: int, point: Sequence[float]) -> None:
        self.control_points.insert(index, point)

    def remove_point(self, index: int) -> np.ndarray:
        return self.control_points.remove_at(index)

    def update_point(self, index: int, point: Sequence[float]) -> None:
        self.control_points.update_at(index, point)

    def _invalidate_caches(self) -> None:
        self.arc_length_table.invalidate()
        self.curve_cache.invalidate()

    def effective_control_points(self) -> np.ndarray:
        """
        Control points as evaluated, including the closing point of a closed curve.
        The array is read-only; edit points through the spline so the caches
        are invalidated.
        """
        key = (self.control_points.version, self.config.closed)
        if self._effective is None or self._effective_key != key:
            points = self.control_points.as_array()
            if self.config.closed:
                points = evaluator.close_control_points(points)
            points.setflags(write=False)
            self._effective = points
            self._effective_key = key
        return self._effective

    def _curve_source(self) -> Tuple[np.ndarray, InterpolationScheme]:
        return self.effective_control_points(), self.config.scheme

    # Queries

    def get_point(self, t: float) -> np.ndarray:
        """Position at parameter t; t is clamped to [0, 1]"""
        return evaluator.evaluate_point(self.effective_control_points(), self.config.scheme, t)

    def get_tangent(self, t: float) -> np.ndarray:
        """Unit direction of travel at parameter t"""
        return evaluator.evaluate_tangent(self.effective_control_points(), self.config.scheme, t)

    def get_curvature(self, t: float) -> float:
        return evaluator.evaluate_curvature(self.effective_control_points(), self.config.scheme, t)

    def get_position_at_distance(self, distance: float) -> np.ndarray:
        """Position `distance` along the curve, clamped to [0, total length]"""
        return self.arc_length_table.get_position_at_distance(distance)

    def get_tangent_at_distance(self, distance: float) -> np.ndarray:
        return self.arc_length_table.get_tangent_at_distance(distance)

    def get_total_length(self) -> float:
        return self.arc_length_table.total_length

    def distance_to_parameter(self, distance: float) -> float:
        return self.arc_length_table.distance_to_parameter(distance)

    def parameter_to_distance(self, t: float) -> float:
        return self.arc_length_table.parameter_to_distance(t)

    def sample_by_distance(self, count: int) -> np.ndarray:
        return self.arc_length_table.sample_by_distance(count)

    def refresh(self) -> np.ndarray:
        """Recompute the cached drawing points if anything changed"""
        return self.curve_cache.refresh()

    def __repr__(self) -> str:
        return (
            f"Spline({len(self.control_points)} points, scheme={self.config.scheme.value}, "
            f"resolution={self.config.resolution}, closed={self.config.closed})"
        )
