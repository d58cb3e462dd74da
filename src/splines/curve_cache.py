import logging
import time
from typing import Optional

import numpy as np

from splines import evaluator
from splines.arc_length import CurveSource
from splines.spline_config import DEFAULT_RESOLUTION, validate_resolution

logger = logging.getLogger(__name__)


class CurveCache:
    """
    Last materialised sample array of the whole curve, for drawing.

    Reads never recompute: after a mutation the owner must call refresh()
    explicitly, until then `points` and `tangents` hold the previous snapshot.
    """

    def __init__(self, source: CurveSource, resolution: int = DEFAULT_RESOLUTION):
        self._source = source
        self._resolution = validate_resolution(resolution)
        self.points: Optional[np.ndarray] = None
        self.tangents: Optional[np.ndarray] = None
        self._dirty = True
        self.refresh_count = 0

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

    def refresh(self) -> np.ndarray:
        """
        Recompute the `resolution` points if anything changed since the last refresh

        Returns:
            np.ndarray: (resolution, 3) cached positions
        """
        if not self._dirty and self.points is not None:
            return self.points

        control_points, scheme = self._source()
        start_time = time.time()
        parameters = np.linspace(0.0, 1.0, self._resolution)
        points = np.array(
            [evaluator.evaluate_point(control_points, scheme, t) for t in parameters]
        )
        tangents = np.array(
            [evaluator.evaluate_tangent(control_points, scheme, t) for t in parameters]
        )

        self.points = points
        self.tangents = tangents
        self._dirty = False
        self.refresh_count += 1
        logger.debug(
            f"Curve cache refreshed: {self._resolution} points in {time.time() - start_time:.6f} seconds"
        )
        return self.points
