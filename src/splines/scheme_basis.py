from dataclasses import dataclass
from typing import Callable, Tuple

import numpy as np

SegmentPoints = Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]


@dataclass(frozen=True)
class SchemeBasis:
    """
    Cubic basis for one interpolation scheme.

    All curve functions take the four points of a segment and the local
    parameter u in [0, 1]; derivatives are with respect to u.
    """

    name: str
    is_valid_count: Callable[[int], bool]
    required: str  # human readable point count requirement
    segment_count: Callable[[int], int]
    segment_points: Callable[[np.ndarray, int], SegmentPoints]
    segment_chord: Callable[[np.ndarray, int], np.ndarray]
    point: Callable[..., np.ndarray]
    derivative: Callable[..., np.ndarray]
    second_derivative: Callable[..., np.ndarray]
