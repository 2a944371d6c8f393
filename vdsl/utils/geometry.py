"""Leaf-node geometry helpers. No parser or model imports.

Rectangles are (left, top, right, bottom) tuples in pixel space; y grows down.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


Rect = tuple[float, float, float, float]


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Axis-aligned overlap with open intervals: shared edges do not overlap."""
    return not (a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1])


def cell_edges(start: float, stop: float, n: int) -> NDArray[np.float64]:
    """n+1 evenly spaced edge coordinates splitting [start, stop] into n cells."""
    return start + np.arange(n + 1, dtype=np.float64) * ((stop - start) / n)


def scale_points(
    points: NDArray[np.float64],
    rect: Rect,
    extent_w: float,
    extent_h: float,
) -> NDArray[np.float64]:
    """Map Nx2 logical (x, y) points of a W×H plane into a pixel rectangle."""
    if len(points) == 0:
        return np.empty((0, 2))
    left, top, right, bottom = rect
    scale = np.array([(right - left) / extent_w, (bottom - top) / extent_h])
    return points * scale + np.array([left, top])


def cell_centers(
    points: NDArray[np.float64],
    rect: Rect,
    rows: int,
    cols: int,
) -> NDArray[np.float64]:
    """Map Nx2 (column, row) grid coordinates to pixel cell centres."""
    if len(points) == 0:
        return np.empty((0, 2))
    left, top, right, bottom = rect
    cell = np.array([(right - left) / cols, (bottom - top) / rows])
    return points * cell + cell / 2 + np.array([left, top])


def as_point_array(pairs: list[tuple[float, float]]) -> NDArray[np.float64]:
    """Convert a list of (x, y) pairs to an Nx2 float array."""
    if not pairs:
        return np.empty((0, 2))
    return np.asarray(pairs, dtype=np.float64).reshape(-1, 2)


def to_pairs(points: NDArray[np.float64]) -> list[tuple[float, float]]:
    """Convert an Nx2 array back to plain (x, y) float tuples."""
    return [(float(x), float(y)) for x, y in points]
