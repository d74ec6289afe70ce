"""clusterviz: K-means and DBSCAN clustering of 2-D points."""

from .api import ClusteringRun, cluster_points, run_dbscan, run_kmeans
from .clustering.errors import ClusteringError, EmptyInput, InvalidParameter
from .config import ClusterVizConfig
from .data.points import NOISE, ClusterAssignment, Point

__all__ = [
    "ClusteringRun",
    "cluster_points",
    "run_dbscan",
    "run_kmeans",
    "ClusteringError",
    "EmptyInput",
    "InvalidParameter",
    "ClusterVizConfig",
    "NOISE",
    "ClusterAssignment",
    "Point",
]
