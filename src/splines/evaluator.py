"""
Stateless evaluation of a control point chain for a given interpolation scheme.

The global parameter t in [0, 1] is split across the segments of the chain:
segment i = floor(t * segment_count) and the local parameter u is the
fractional part. t = 1 maps to the end of the last segment.
"""
import logging
import math
import warnings
from typing import Tuple

import numpy as np

from splines.catmull_rom import CATMULL_ROM_BASIS
from splines.control_points import as_point_array
from splines.cubic_bezier import CUBIC_BEZIER_BASIS
from splines.exceptions import DegenerateSegmentWarning, InsufficientControlPointsError
from splines.scheme_basis import SchemeBasis
from splines.spline_config import InterpolationScheme

logger = logging.getLogger(__name__)

BASES = {
    InterpolationScheme.CATMULL_ROM: CATMULL_ROM_BASIS,
    InterpolationScheme.BEZIER: CUBIC_BEZIER_BASIS,
}

DEGENERATE_EPSILON = 1e-12
BOUNDARY_SNAP = 1e-9


def get_basis(scheme) -> SchemeBasis:
    return BASES[InterpolationScheme.parse(scheme)]


def _prepare(control_points, scheme) -> Tuple[np.ndarray, SchemeBasis]:
    scheme = InterpolationScheme.parse(scheme)
    basis = BASES[scheme]
    points = as_point_array(control_points)
    if not basis.is_valid_count(len(points)):
        raise InsufficientControlPointsError(scheme, len(points), basis.required)
    return points, basis


def clamp_parameter(t: float) -> float:
    """Clamp t to [0, 1]; out of range values are not an error"""
    t = float(t)
    if math.isnan(t):
        raise ValueError("Parameter t must not be NaN")
    if t < 0.0 or t > 1.0:
        logger.debug(f"Parameter t={t} clamped to [0, 1]")
        return min(max(t, 0.0), 1.0)
    return t


def _locate(basis: SchemeBasis, n: int, t: float) -> Tuple[int, float]:
    segments = basis.segment_count(n)
    scaled = t * segments
    nearest = round(scaled)
    # Land exactly on control points when t is a segment boundary up to rounding
    if abs(scaled - nearest) < BOUNDARY_SNAP:
        scaled = float(nearest)
    index = int(math.floor(scaled))
    if index >= segments:
        return segments - 1, 1.0
    return index, scaled - index


def locate(control_points, scheme, t: float) -> Tuple[int, float]:
    """
    Map global parameter t to (segment_index, local_u)

    Raises:
        InsufficientControlPointsError: If the chain is too short for the scheme
    """
    points, basis = _prepare(control_points, scheme)
    return _locate(basis, len(points), clamp_parameter(t))


def evaluate_point(control_points, scheme, t: float) -> np.ndarray:
    """
    Get the position on the curve at parameter t

    Args:
        control_points: (n, 3) array-like of control points
        scheme: InterpolationScheme or its name
        t: Parameter, clamped to [0, 1]

    Returns:
        np.ndarray: Position [x, y, z]
    """
    points, basis = _prepare(control_points, scheme)
    index, u = _locate(basis, len(points), clamp_parameter(t))
    return basis.point(*basis.segment_points(points, index), u)


def evaluate_derivative(control_points, scheme, t: float) -> np.ndarray:
    """First derivative with respect to the global parameter t"""
    points, basis = _prepare(control_points, scheme)
    index, u = _locate(basis, len(points), clamp_parameter(t))
    segments = basis.segment_count(len(points))
    return segments * basis.derivative(*basis.segment_points(points, index), u)


def evaluate_second_derivative(control_points, scheme, t: float) -> np.ndarray:
    """Second derivative with respect to the global parameter t"""
    points, basis = _prepare(control_points, scheme)
    index, u = _locate(basis, len(points), clamp_parameter(t))
    segments = basis.segment_count(len(points))
    return segments**2 * basis.second_derivative(*basis.segment_points(points, index), u)


def _fallback_direction(points: np.ndarray, basis: SchemeBasis, index: int) -> np.ndarray:
    """Chord direction of the nearest segment that is not collapsed to a point"""
    segments = basis.segment_count(len(points))
    for offset in range(segments):
        for candidate in (index - offset, index + offset):
            if 0 <= candidate < segments:
                chord = basis.segment_chord(points, candidate)
                length = np.linalg.norm(chord)
                if length > DEGENERATE_EPSILON:
                    return chord / length
    return np.zeros(3)


def evaluate_tangent(control_points, scheme, t: float) -> np.ndarray:
    """
    Get the unit tangent at parameter t

    A zero-length derivative (coincident control points) does not produce NaN:
    the chord direction of the nearest non-degenerate segment is used instead,
    or a zero vector if every segment is degenerate.

    Returns:
        np.ndarray: Unit direction of travel, or zeros for a degenerate curve
    """
    points, basis = _prepare(control_points, scheme)
    index, u = _locate(basis, len(points), clamp_parameter(t))
    derivative = basis.derivative(*basis.segment_points(points, index), u)
    length = np.linalg.norm(derivative)
    if length > DEGENERATE_EPSILON:
        return derivative / length

    fallback = _fallback_direction(points, basis, index)
    logger.warning(
        f"Degenerate tangent at t={t} (segment {index}, u={u:.4f}), "
        f"using fallback direction {fallback}"
    )
    warnings.warn(
        f"Degenerate tangent at t={t} in segment {index}",
        DegenerateSegmentWarning,
        stacklevel=2,
    )
    return fallback


def evaluate_curvature(control_points, scheme, t: float) -> float:
    """
    Get curvature at parameter t

    The curvature is calculated using the formula:
    κ = |P' × P''| / |P'|³

    Returns:
        float: Curvature, 0.0 where the speed vanishes
    """
    first_deriv = evaluate_derivative(control_points, scheme, t)
    second_deriv = evaluate_second_derivative(control_points, scheme, t)

    speed = np.linalg.norm(first_deriv)
    if speed < 1e-10:
        return 0.0

    return float(np.linalg.norm(np.cross(first_deriv, second_deriv)) / speed**3)


def close_control_points(control_points) -> np.ndarray:
    """
    Turn an open chain into a closed one by appending a copy of the first point.

    This is applied by the caller before evaluation; the evaluator itself has no
    closed mode. A chain that already ends on its first point is left as is.
    """
    points = as_point_array(control_points)
    if len(points) < 2 or np.array_equal(points[0], points[-1]):
        return points.copy()
    return np.vstack([points, points[:1]])
