"""DBSCAN clustering of 2-D points.

Density-based expansion: core points (at least ``min_points`` points,
themselves included, within ``epsilon``) seed clusters that grow
breadth-first through other core points. Non-core points reached from
a core point become border points; everything else is noise.

Cluster ids follow the order in which core points are discovered while
scanning the input, and a border point reachable from several clusters
stays with the first one that reaches it.
"""

import logging
import numbers
from collections import deque
from dataclasses import dataclass
from typing import List, Literal

import numpy as np

from ..data.points import NOISE, ClusterAssignment, annotate, points_from_array
from .errors import InvalidParameter
from .geometry import PointsLike, as_point_array, build_neighbor_index

logger = logging.getLogger(__name__)


@dataclass
class DBSCANResult:
    """Result from DBSCAN clustering.

    Attributes:
        labels: Cluster id per point in input order, or NOISE.
        n_clusters: Number of clusters found.
        core_sample_mask: True where the point is a core point.
    """
    labels: np.ndarray
    n_clusters: int
    core_sample_mask: np.ndarray

    @property
    def n_noise(self) -> int:
        return int(np.sum(self.labels == NOISE))

    def to_assignments(self, points: PointsLike) -> List[ClusterAssignment]:
        """Annotate the clustered points with their labels."""
        return annotate(points_from_array(as_point_array(points)), self.labels)


class DBSCANClusterer:
    """Density-based spatial clustering with noise."""

    def __init__(
        self,
        epsilon: float = 50.0,
        min_points: int = 3,
        neighbor_index: Literal["brute", "grid"] = "brute",
    ):
        """Initialize DBSCAN.

        Args:
            epsilon: Neighborhood radius, > 0. The boundary is inclusive.
            min_points: Neighborhood size (point included) that makes a
                point a core point, >= 1.
            neighbor_index: "brute" for an O(n^2) scan, "grid" for a
                uniform grid. Both yield identical labels.
        """
        if (isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real)
                or not np.isfinite(epsilon) or epsilon <= 0):
            raise InvalidParameter(f"epsilon must be > 0, got {epsilon!r}")
        if (isinstance(min_points, bool)
                or not isinstance(min_points, (int, np.integer)) or min_points < 1):
            raise InvalidParameter(
                f"min_points must be an integer >= 1, got {min_points!r}"
            )

        self.epsilon = float(epsilon)
        self.min_points = int(min_points)
        self.neighbor_index = neighbor_index

    def fit(self, points: PointsLike) -> DBSCANResult:
        """Cluster points.

        Args:
            points: Points as Point objects, (x, y) pairs or an (n, 2) array.

        Returns:
            DBSCANResult.

        Raises:
            EmptyInput: If no points are supplied.
            InvalidParameter: If a coordinate is not finite.
        """
        data = as_point_array(points)
        index = build_neighbor_index(data, self.epsilon, self.neighbor_index)

        n_samples = len(data)
        labels = np.full(n_samples, NOISE, dtype=int)
        visited = np.zeros(n_samples, dtype=bool)
        is_core = np.zeros(n_samples, dtype=bool)

        cluster_id = 0
        for i in range(n_samples):
            if visited[i]:
                continue
            visited[i] = True

            neighbors = index.query(i)
            if len(neighbors) < self.min_points:
                # Tentative: a later cluster may claim it as a border point.
                continue

            is_core[i] = True
            labels[i] = cluster_id
            queue = deque(neighbors)

            while queue:
                j = queue.popleft()
                if labels[j] == NOISE:
                    labels[j] = cluster_id
                if visited[j]:
                    continue
                visited[j] = True

                j_neighbors = index.query(j)
                if len(j_neighbors) >= self.min_points:
                    is_core[j] = True
                    queue.extend(j_neighbors)

            cluster_id += 1

        result = DBSCANResult(
            labels=labels,
            n_clusters=cluster_id,
            core_sample_mask=is_core,
        )
        logger.debug(
            "DBSCAN eps=%g min_points=%d n=%d: %d clusters, %d core, %d noise",
            self.epsilon, self.min_points, n_samples,
            result.n_clusters, int(is_core.sum()), result.n_noise,
        )
        return result

    def cluster(self, points: PointsLike) -> List[ClusterAssignment]:
        """Fit and return one assignment per input point, in input order."""
        data = as_point_array(points)
        return self.fit(data).to_assignments(data)


def dbscan_fit(
    points: PointsLike,
    epsilon: float,
    min_points: int,
    neighbor_index: Literal["brute", "grid"] = "brute",
) -> np.ndarray:
    """Convenience function for DBSCAN.

    Returns:
        Labels per point, NOISE for unclustered points.
    """
    return DBSCANClusterer(
        epsilon=epsilon,
        min_points=min_points,
        neighbor_index=neighbor_index,
    ).fit(points).labels
