"""Clustering module: K-means and DBSCAN over 2-D points."""

from .errors import (
    ClusteringError,
    InvalidParameter,
    EmptyInput,
)
from .kmeans import (
    KMeansClusterer,
    KMeansResult,
    kmeans_fit,
)
from .dbscan import (
    DBSCANClusterer,
    DBSCANResult,
    dbscan_fit,
)
from .metrics import (
    inertia,
    overall_distance,
    silhouette_score,
    cluster_sizes,
    cluster_centroids,
)

__all__ = [
    "ClusteringError",
    "InvalidParameter",
    "EmptyInput",
    "KMeansClusterer",
    "KMeansResult",
    "kmeans_fit",
    "DBSCANClusterer",
    "DBSCANResult",
    "dbscan_fit",
    "inertia",
    "overall_distance",
    "silhouette_score",
    "cluster_sizes",
    "cluster_centroids",
]
