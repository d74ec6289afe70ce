"""K-means clustering of 2-D points.

Lloyd's algorithm with uniform initialization from distinct input
points. Deterministic given the input order and the seed.
"""

import logging
import numpy as np
from typing import List, Optional, Tuple, Union
from dataclasses import dataclass, field

from ..data.points import ClusterAssignment, annotate, points_from_array
from .errors import InvalidParameter
from .geometry import (
    PointsLike,
    as_point_array,
    distance_matrix,
    squared_distances_to_assigned,
)

logger = logging.getLogger(__name__)

SeedLike = Union[None, int, np.random.Generator]


@dataclass
class KMeansResult:
    """Result from k-means clustering.

    Attributes:
        centroids: Final cluster centroids (k x 2).
        labels: Cluster assignment for each point, in input order.
        inertia: Sum of squared distances to assigned centroids.
        n_iterations: Number of update steps performed.
        converged: Whether a stopping criterion fired before max_iter.
        inertia_history: Inertia after every assignment step.
    """
    centroids: np.ndarray
    labels: np.ndarray
    inertia: float
    n_iterations: int
    converged: bool
    inertia_history: List[float] = field(default_factory=list)

    @property
    def n_clusters(self) -> int:
        return len(self.centroids)

    def to_assignments(self, points: PointsLike) -> List[ClusterAssignment]:
        """Annotate the clustered points with their labels."""
        return annotate(points_from_array(as_point_array(points)), self.labels)


class KMeansClusterer:
    """K-means clustering using Euclidean distance.

    Standard Lloyd's algorithm. An empty cluster keeps its previous
    centroid instead of being re-seeded.
    """

    def __init__(
        self,
        n_clusters: int = 3,
        max_iter: int = 100,
        tol: float = 1e-6,
        seed: SeedLike = None,
    ):
        """Initialize k-means.

        Args:
            n_clusters: Number of clusters (k), at least 1.
            max_iter: Maximum number of update steps.
            tol: Stop when the largest centroid shift is below this.
            seed: Seed or numpy Generator for centroid initialization.
        """
        if (isinstance(n_clusters, bool)
                or not isinstance(n_clusters, (int, np.integer)) or n_clusters < 1):
            raise InvalidParameter(f"k must be an integer >= 1, got {n_clusters!r}")
        if max_iter < 1:
            raise InvalidParameter(f"max_iter must be >= 1, got {max_iter}")
        if tol < 0:
            raise InvalidParameter(f"tol must be non-negative, got {tol}")

        self.n_clusters = int(n_clusters)
        self.max_iter = max_iter
        self.tol = tol
        self.seed = seed

        self.centroids_: Optional[np.ndarray] = None
        self.labels_: Optional[np.ndarray] = None

    def _rng(self) -> np.random.Generator:
        # A Generator seed is used as-is; ints and None get a fresh one per fit.
        if isinstance(self.seed, np.random.Generator):
            return self.seed
        return np.random.default_rng(self.seed)

    def _initialize_centroids(
        self,
        data: np.ndarray,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Pick k distinct input points uniformly without replacement.

        Args:
            data: Data points (n x 2).
            rng: Random generator.

        Returns:
            Initial centroids (k x 2).
        """
        indices = rng.choice(len(data), size=self.n_clusters, replace=False)
        return data[indices].copy()

    def _assign_clusters(
        self,
        data: np.ndarray,
        centroids: np.ndarray,
    ) -> np.ndarray:
        """Assign each point to nearest centroid.

        argmin returns the first minimum, so ties go to the lowest index.

        Args:
            data: Data points (n x 2).
            centroids: Centroids (k x 2).

        Returns:
            Cluster assignments (n,).
        """
        distances = distance_matrix(data, centroids)
        return np.argmin(distances, axis=1)

    def _update_centroids(
        self,
        data: np.ndarray,
        labels: np.ndarray,
        centroids: np.ndarray,
    ) -> np.ndarray:
        """Update centroids as mean of assigned points.

        Args:
            data: Data points (n x 2).
            labels: Cluster assignments.
            centroids: Current centroids; kept for empty clusters.

        Returns:
            New centroids (k x 2).
        """
        new_centroids = centroids.copy()

        for k in range(self.n_clusters):
            mask = labels == k
            if np.any(mask):
                new_centroids[k] = data[mask].mean(axis=0)
            else:
                logger.debug("Cluster %d is empty; keeping its centroid", k)

        return new_centroids

    def _compute_inertia(
        self,
        data: np.ndarray,
        centroids: np.ndarray,
        labels: np.ndarray,
    ) -> float:
        """Sum of squared distances from points to their centroids."""
        return float(squared_distances_to_assigned(data, centroids, labels).sum())

    def fit(self, points: PointsLike) -> KMeansResult:
        """Fit k-means to points.

        Args:
            points: Points as Point objects, (x, y) pairs or an (n, 2) array.

        Returns:
            KMeansResult with final clustering.

        Raises:
            EmptyInput: If no points are supplied.
            InvalidParameter: If k exceeds the number of points.
        """
        data = as_point_array(points)
        if self.n_clusters > len(data):
            raise InvalidParameter(
                f"k={self.n_clusters} exceeds the number of points ({len(data)})"
            )

        rng = self._rng()
        centroids = self._initialize_centroids(data, rng)
        labels = self._assign_clusters(data, centroids)
        history = [self._compute_inertia(data, centroids, labels)]

        converged = False
        iteration = 0
        for iteration in range(1, self.max_iter + 1):
            new_centroids = self._update_centroids(data, labels, centroids)
            centroid_shift = float(
                np.max(np.linalg.norm(new_centroids - centroids, axis=1))
            )
            centroids = new_centroids

            new_labels = self._assign_clusters(data, centroids)
            history.append(self._compute_inertia(data, centroids, new_labels))

            unchanged = np.array_equal(new_labels, labels)
            labels = new_labels

            if unchanged or centroid_shift < self.tol:
                converged = True
                break

        logger.debug(
            "k-means k=%d n=%d: %s after %d iterations, inertia=%.6g",
            self.n_clusters, len(data),
            "converged" if converged else "stopped",
            iteration, history[-1],
        )

        self.centroids_ = centroids
        self.labels_ = labels

        return KMeansResult(
            centroids=centroids,
            labels=labels,
            inertia=history[-1],
            n_iterations=iteration,
            converged=converged,
            inertia_history=history,
        )

    def cluster(self, points: PointsLike) -> List[ClusterAssignment]:
        """Fit and return one assignment per input point, in input order."""
        data = as_point_array(points)
        return self.fit(data).to_assignments(data)

    def predict(self, points: PointsLike) -> np.ndarray:
        """Predict cluster assignments for new points.

        Args:
            points: Points to assign.

        Returns:
            Cluster assignments.
        """
        if self.centroids_ is None:
            raise ValueError("Must call fit() first")

        return self._assign_clusters(as_point_array(points), self.centroids_)


def kmeans_fit(
    points: PointsLike,
    k: int,
    max_iter: int = 100,
    tol: float = 1e-6,
    seed: SeedLike = None,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Convenience function for k-means clustering.

    Args:
        points: Points (n x 2).
        k: Number of clusters.
        max_iter: Maximum iterations.
        tol: Centroid shift threshold for convergence.
        seed: Random seed.

    Returns:
        Tuple of (centroids, labels, inertia).
    """
    kmeans = KMeansClusterer(
        n_clusters=k,
        max_iter=max_iter,
        tol=tol,
        seed=seed,
    )
    result = kmeans.fit(points)
    return result.centroids, result.labels, result.inertia
