"""
Uniform Catmull-Rom basis (tension 0.5).

The curve passes through every control point. Segment i runs from P[i] to
P[i+1] and is shaped by P[i-1] and P[i+2]. At the open ends the missing
neighbour is a duplicate of the end point itself, so the first and last
segments have reduced curvature compared to an interior segment.
"""
import numpy as np

from splines.scheme_basis import SchemeBasis

MIN_POINTS = 4


def is_valid_count(n: int) -> bool:
    return n >= MIN_POINTS


def segment_count(n: int) -> int:
    return n - 1


def segment_points(points: np.ndarray, i: int):
    last = len(points) - 1
    return (
        points[max(i - 1, 0)],
        points[i],
        points[min(i + 1, last)],
        points[min(i + 2, last)],
    )


def segment_chord(points: np.ndarray, i: int) -> np.ndarray:
    return points[min(i + 1, len(points) - 1)] - points[i]


def catmull_rom_point(p0, p1, p2, p3, u: float) -> np.ndarray:
    u2 = u * u
    u3 = u2 * u
    return 0.5 * (
        2 * p1
        + (-p0 + p2) * u
        + (2 * p0 - 5 * p1 + 4 * p2 - p3) * u2
        + (-p0 + 3 * p1 - 3 * p2 + p3) * u3
    )


def catmull_rom_derivative(p0, p1, p2, p3, u: float) -> np.ndarray:
    return 0.5 * (
        (-p0 + p2)
        + 2 * (2 * p0 - 5 * p1 + 4 * p2 - p3) * u
        + 3 * (-p0 + 3 * p1 - 3 * p2 + p3) * u * u
    )


def catmull_rom_second_derivative(p0, p1, p2, p3, u: float) -> np.ndarray:
    return (2 * p0 - 5 * p1 + 4 * p2 - p3) + 3 * (-p0 + 3 * p1 - 3 * p2 + p3) * u


CATMULL_ROM_BASIS = SchemeBasis(
    name="catmull_rom",
    is_valid_count=is_valid_count,
    required=f"at least {MIN_POINTS}",
    segment_count=segment_count,
    segment_points=segment_points,
    segment_chord=segment_chord,
    point=catmull_rom_point,
    derivative=catmull_rom_derivative,
    second_derivative=catmull_rom_second_derivative,
)
