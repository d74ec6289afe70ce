"""Geometry and distance utilities shared by K-means and DBSCAN.

Covers:
- Coercion of caller input into a validated (n, 2) float array
- Vectorized Euclidean distance matrices
- Epsilon-neighborhood queries, by brute-force scan or uniform grid
"""

import logging
from collections import defaultdict
from typing import Dict, List, Literal, Sequence, Tuple, Union

import numpy as np

from ..data.points import Point
from .errors import EmptyInput, InvalidParameter

logger = logging.getLogger(__name__)

PointsLike = Union[Sequence[Point], Sequence[Sequence[float]], np.ndarray]


def as_point_array(points: PointsLike, allow_empty: bool = False) -> np.ndarray:
    """Coerce caller input into a float64 array of shape (n, 2).

    Args:
        points: Sequence of Point, sequence of (x, y) pairs, or an array.
        allow_empty: Return an empty (0, 2) array instead of raising.

    Returns:
        Array of coordinates in input order.

    Raises:
        EmptyInput: If no points are supplied and allow_empty is False.
        InvalidParameter: If the input is not 2-D or has non-finite values.
    """
    try:
        if isinstance(points, np.ndarray):
            data = points.astype(float, copy=True)
        else:
            points = list(points)
            data = np.array(
                [(p.x, p.y) if isinstance(p, Point) else p for p in points],
                dtype=float,
            )
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"Points must be (x, y) pairs: {exc}") from exc

    if data.size == 0:
        if allow_empty:
            return np.empty((0, 2))
        raise EmptyInput("No points supplied")

    if data.ndim != 2 or data.shape[1] != 2:
        raise InvalidParameter(
            f"Points must have shape (n, 2), got {data.shape}"
        )
    if not np.all(np.isfinite(data)):
        raise InvalidParameter("Point coordinates must be finite")

    return data


def distance_matrix(data: np.ndarray, others: np.ndarray) -> np.ndarray:
    """Compute distances from every row of data to every row of others.

    Args:
        data: Points (n x d).
        others: Points (m x d).

    Returns:
        Distance matrix (n x m).
    """
    # (n, 1, d) - (1, m, d) -> (n, m, d) -> (n, m)
    diff = data[:, np.newaxis, :] - others[np.newaxis, :, :]
    return np.linalg.norm(diff, axis=2)


def squared_distances_to_assigned(
    data: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
) -> np.ndarray:
    """Squared distance from each point to the centroid it is assigned to."""
    diff = data - centroids[labels]
    return np.einsum("ij,ij->i", diff, diff)


class BruteForceNeighbors:
    """Epsilon-neighborhoods by a full O(n^2) distance scan."""

    def __init__(self, data: np.ndarray, epsilon: float):
        self.data = data
        self.epsilon = epsilon

    def query(self, index: int) -> np.ndarray:
        """Indices (ascending) of all points within epsilon of data[index]."""
        distances = np.linalg.norm(self.data - self.data[index], axis=1)
        return np.flatnonzero(distances <= self.epsilon)


class GridNeighbors:
    """Epsilon-neighborhoods backed by a uniform grid with cell size epsilon.

    Any point within epsilon of a query point lies in the query's cell or
    one of the eight surrounding cells, so only those are scanned.
    """

    def __init__(self, data: np.ndarray, epsilon: float):
        self.data = data
        self.epsilon = epsilon
        # Slightly wider than epsilon so rounding never puts a neighbor two cells away
        self.cell_size = epsilon * (1 + 1e-9)
        self.origin = data.min(axis=0) if len(data) else np.zeros(2)

        self._cells: Dict[Tuple[int, int], List[int]] = defaultdict(list)
        for i, cell in enumerate(self._cell_coords(data)):
            self._cells[cell].append(i)

        logger.debug(
            "Built neighbor grid: %d points in %d cells (epsilon=%g)",
            len(data), len(self._cells), epsilon,
        )

    def _cell_coords(self, data: np.ndarray) -> List[Tuple[int, int]]:
        cells = np.floor((data - self.origin) / self.cell_size).astype(np.int64)
        return [(int(cx), int(cy)) for cx, cy in cells]

    def query(self, index: int) -> np.ndarray:
        """Indices (ascending) of all points within epsilon of data[index]."""
        cx, cy = self._cell_coords(self.data[index:index + 1])[0]
        candidates: List[int] = []
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                candidates.extend(self._cells.get((cx + dx, cy + dy), ()))

        candidate_idx = np.array(sorted(candidates), dtype=np.int64)
        distances = np.linalg.norm(
            self.data[candidate_idx] - self.data[index], axis=1
        )
        return candidate_idx[distances <= self.epsilon]


NEIGHBOR_INDEXES = {
    "brute": BruteForceNeighbors,
    "grid": GridNeighbors,
}


def build_neighbor_index(
    data: np.ndarray,
    epsilon: float,
    kind: Literal["brute", "grid"] = "brute",
):
    """Create a neighborhood query structure for one clustering run.

    Raises:
        InvalidParameter: If kind is not a known index type.
    """
    try:
        index_cls = NEIGHBOR_INDEXES[kind]
    except KeyError:
        raise InvalidParameter(
            f"Unknown neighbor index: {kind}. Must be one of: "
            f"{', '.join(NEIGHBOR_INDEXES)}"
        ) from None
    return index_cls(data, epsilon)
