"""Point and cluster-label types shared by both clustering algorithms."""

from dataclasses import dataclass
from typing import Iterable, List, Sequence

import numpy as np


# Label carried by DBSCAN points that belong to no cluster.
NOISE = -1


@dataclass(frozen=True)
class Point:
    """A point in the plane.

    Identity is positional: a point is described by its index in the
    input sequence, not by any id of its own.

    Attributes:
        x: X-coordinate.
        y: Y-coordinate.
    """
    x: float
    y: float

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [x, y]."""
        return np.array([self.x, self.y], dtype=float)


@dataclass(frozen=True)
class ClusterAssignment:
    """One input point annotated with its cluster label.

    Attributes:
        point: The input point.
        cluster: Cluster index in [0, n_clusters), or NOISE.
    """
    point: Point
    cluster: int

    @property
    def is_noise(self) -> bool:
        return self.cluster == NOISE


def points_from_array(arr: np.ndarray) -> List[Point]:
    """Create Points from a numpy array of shape (n_points, 2)."""
    return [Point(x=float(row[0]), y=float(row[1])) for row in np.asarray(arr)]


def points_to_array(points: Sequence[Point]) -> np.ndarray:
    """Convert Points to a float array of shape (n_points, 2)."""
    return np.array([[p.x, p.y] for p in points], dtype=float).reshape(-1, 2)


def annotate(points: Iterable[Point], labels: Iterable[int]) -> List[ClusterAssignment]:
    """Pair every point with its label, preserving input order."""
    return [
        ClusterAssignment(point=p, cluster=int(label))
        for p, label in zip(points, labels)
    ]
