"""Entry points consumed by the presentation layer.

``run_kmeans`` and ``run_dbscan`` raise ``ClusteringError`` on bad
input. ``cluster_points`` dispatches on the configured algorithm and
reports failures as a value, so an interactive caller can show the
message and keep drawing the previous result.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .clustering.dbscan import DBSCANClusterer
from .clustering.errors import ClusteringError
from .clustering.geometry import PointsLike
from .clustering.kmeans import KMeansClusterer, SeedLike
from .config import ClusterVizConfig
from .data.points import ClusterAssignment

logger = logging.getLogger(__name__)


def run_kmeans(
    points: PointsLike,
    k: int,
    seed: SeedLike = None,
    max_iter: int = 100,
    tol: float = 1e-6,
) -> Tuple[List[ClusterAssignment], np.ndarray]:
    """Cluster points into k groups.

    Returns:
        Tuple of (assignments in input order, centroids (k x 2)).
    """
    clusterer = KMeansClusterer(n_clusters=k, max_iter=max_iter, tol=tol, seed=seed)
    assignments = clusterer.cluster(points)
    return assignments, clusterer.centroids_


def run_dbscan(
    points: PointsLike,
    epsilon: float,
    min_points: int,
    neighbor_index: str = "brute",
) -> List[ClusterAssignment]:
    """Cluster points by density. Unclustered points carry NOISE."""
    clusterer = DBSCANClusterer(
        epsilon=epsilon,
        min_points=min_points,
        neighbor_index=neighbor_index,
    )
    return clusterer.cluster(points)


@dataclass
class ClusteringRun:
    """Outcome of one interactive clustering request.

    Attributes:
        algorithm: Algorithm that was requested.
        assignments: New assignments, or the previous ones on failure.
        centroids: K-means centroids, None for DBSCAN or on failure.
        error: Message for the user when the run was rejected.
    """
    algorithm: str
    assignments: List[ClusterAssignment] = field(default_factory=list)
    centroids: Optional[np.ndarray] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def cluster_points(
    points: PointsLike,
    config: ClusterVizConfig,
    previous: Optional[Sequence[ClusterAssignment]] = None,
) -> ClusteringRun:
    """Run the configured algorithm, never raising ClusteringError.

    Args:
        points: Points to cluster.
        config: Algorithm choice and parameters; validated first.
        previous: Assignments to hand back if the run is rejected.

    Returns:
        ClusteringRun with either fresh assignments or an error message.
    """
    try:
        config.validate()
        if config.algorithm == "kmeans":
            assignments, centroids = run_kmeans(
                points,
                k=config.kmeans.n_clusters,
                seed=config.kmeans.seed,
                max_iter=config.kmeans.max_iter,
                tol=config.kmeans.tol,
            )
        else:
            assignments = run_dbscan(
                points,
                epsilon=config.dbscan.epsilon,
                min_points=config.dbscan.min_points,
                neighbor_index=config.dbscan.neighbor_index,
            )
            centroids = None
    except ClusteringError as exc:
        message = f"Error running clustering algorithm: {exc}"
        logger.warning(message)
        return ClusteringRun(
            algorithm=config.algorithm,
            assignments=list(previous or []),
            error=message,
        )

    return ClusteringRun(
        algorithm=config.algorithm,
        assignments=assignments,
        centroids=centroids,
    )
