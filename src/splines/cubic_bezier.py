import numpy as np

from splines.scheme_basis import SchemeBasis

MIN_POINTS = 4


def is_valid_count(n: int) -> bool:
    # Each extra segment reuses the previous end point, so n = 3k + 1
    return n >= MIN_POINTS and (n - 1) % 3 == 0


def segment_count(n: int) -> int:
    return (n - 1) // 3


def segment_points(points: np.ndarray, i: int):
    start = 3 * i
    return points[start], points[start + 1], points[start + 2], points[start + 3]


def segment_chord(points: np.ndarray, i: int) -> np.ndarray:
    return points[3 * i + 3] - points[3 * i]


def cubic_bezier_point(p0, p1, p2, p3, u: float) -> np.ndarray:
    return (1 - u)**3 * p0 + 3 * (1 - u)**2 * u * p1 + 3 * (1 - u) * u**2 * p2 + u**3 * p3


# 3(1 - u)^2(P1 - P0) + 6(1 - u)u(P2 - P1) + 3u^2(P3 - P2)
def cubic_bezier_derivative(p0, p1, p2, p3, u: float) -> np.ndarray:
    return 3 * ((1 - u)**2 * (p1 - p0) + 2 * (1 - u) * u * (p2 - p1) + u**2 * (p3 - p2))


def cubic_bezier_second_derivative(p0, p1, p2, p3, u: float) -> np.ndarray:
    return 6 * ((1 - u) * (p2 - 2 * p1 + p0) + u * (p3 - 2 * p2 + p1))


CUBIC_BEZIER_BASIS = SchemeBasis(
    name="bezier",
    is_valid_count=is_valid_count,
    required=f"3k + 1 (at least {MIN_POINTS})",
    segment_count=segment_count,
    segment_points=segment_points,
    segment_chord=segment_chord,
    point=cubic_bezier_point,
    derivative=cubic_bezier_derivative,
    second_derivative=cubic_bezier_second_derivative,
)
