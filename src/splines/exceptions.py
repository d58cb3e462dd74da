class SplineError(Exception):
    """Base class for errors raised by the spline engine"""


class InsufficientControlPointsError(SplineError, ValueError):
    """Raised when a scheme cannot be evaluated with the given control points"""

    def __init__(self, scheme, count: int, required: str):
        self.scheme = scheme
        self.count = count
        self.required = required
        super().__init__(
            f"{scheme.value} spline needs {required} control points, got {count}"
        )


class DegenerateSegmentWarning(UserWarning):
    """Tangent hit coincident control points and fell back to a neighbouring direction"""
