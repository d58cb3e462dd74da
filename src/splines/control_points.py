import logging
from typing import Callable, Iterator, List, Sequence

import numpy as np

logger = logging.getLogger(__name__)


def to_point(point: Sequence[float]) -> np.ndarray:
    """
    Convert a 2D or 3D coordinate to a float64 array of shape (3,)

    Args:
        point: (x, y) or (x, y, z); 2D points get z = 0

    Returns:
        np.ndarray: The point as [x, y, z]

    Raises:
        ValueError: If the point has the wrong size or non-finite components
    """
    arr = np.asarray(point, dtype=np.float64).reshape(-1)
    if arr.shape[0] == 2:
        arr = np.append(arr, 0.0)
    if arr.shape[0] != 3:
        raise ValueError(f"Control point must have 2 or 3 components, got {arr.shape[0]}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"Control point must be finite, got {arr}")
    return arr


def as_point_array(points) -> np.ndarray:
    """Convert an array-like of 2D or 3D points to an (n, 3) float64 array"""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    if arr.ndim == 2 and arr.shape[1] == 2:
        arr = np.hstack([arr, np.zeros((len(arr), 1))])
    elif arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"Expected an (n, 2) or (n, 3) array of points, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("Control points must be finite")
    return arr


class ControlPointSet:
    """
    Ordered, mutable list of 3D control points.
    Every mutation bumps `version` and notifies the registered listeners.
    """

    def __init__(self, points: Sequence[Sequence[float]] = ()):
        self._points: List[np.ndarray] = [to_point(p) for p in points]
        self._listeners: List[Callable[[], None]] = []
        self.version: int = 0

    def add_listener(self, callback: Callable[[], None]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _changed(self) -> None:
        self.version += 1
        logger.debug(f"Control points changed: {len(self._points)} points, version {self.version}")
        for callback in list(self._listeners):
            callback()

    def append(self, point: Sequence[float]) -> None:
        self._points.append(to_point(point))
        self._changed()

    def insert(self, index: int, point: Sequence[float]) -> None:
        if not -len(self._points) <= index <= len(self._points):
            raise IndexError(f"Insert index {index} out of range for {len(self._points)} points")
        self._points.insert(index, to_point(point))
        self._changed()

    def remove_at(self, index: int) -> np.ndarray:
        removed = self._points.pop(index)
        self._changed()
        return removed

    def update_at(self, index: int, point: Sequence[float]) -> None:
        new_point = to_point(point)
        self._points[index] = new_point
        self._changed()

    def clear(self) -> None:
        if not self._points:
            return
        self._points = []
        self._changed()

    def as_array(self) -> np.ndarray:
        """Copy of the points as an (n, 3) array"""
        if not self._points:
            return np.zeros((0, 3), dtype=np.float64)
        return np.array(self._points, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> np.ndarray:
        return self._points[index].copy()

    def __iter__(self) -> Iterator[np.ndarray]:
        return (p.copy() for p in self._points)

    def __repr__(self) -> str:
        return f"ControlPointSet({len(self._points)} points, version={self.version})"
