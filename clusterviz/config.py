"""Configuration dataclasses for clusterviz."""

import numbers
from dataclasses import dataclass, field, asdict
from typing import Literal, Optional, Dict, Any, Tuple

from .clustering.errors import InvalidParameter


# Human-readable algorithm labels
ALGORITHM_LABELS = {
    "kmeans": "K-means",
    "dbscan": "DBSCAN",
}

# Inclusive ranges exposed by the interactive controls. These bound what
# the UI accepts, not what the algorithms can handle.
PARAMETER_BOUNDS: Dict[str, Tuple[float, float]] = {
    "n_clusters": (1, 10),
    "epsilon": (1, 100),
    "min_points": (1, 10),
}


@dataclass
class KMeansConfig:
    """Configuration for k-means.

    Attributes:
        n_clusters: Number of clusters (k).
        max_iter: Maximum iterations.
        tol: Centroid shift threshold for convergence.
        seed: Random seed for centroid initialization (None = fresh).
    """
    n_clusters: int = 3
    max_iter: int = 100
    tol: float = 1e-6
    seed: Optional[int] = None


@dataclass
class DBSCANConfig:
    """Configuration for DBSCAN.

    Attributes:
        epsilon: Neighborhood radius.
        min_points: Core point threshold (point itself included).
        neighbor_index: Neighborhood query strategy, "brute" or "grid".
    """
    epsilon: float = 50.0
    min_points: int = 3
    neighbor_index: Literal["brute", "grid"] = "brute"


@dataclass
class DataConfig:
    """Configuration for generated point clouds.

    Attributes:
        n_points: Number of points to generate.
        width: Canvas width.
        height: Canvas height.
        distribution: "uniform" or "blobs".
        n_blobs: Number of Gaussian blobs (blobs only).
        blob_std: Blob standard deviation (blobs only).
        seed: Random seed (None = fresh).
    """
    n_points: int = 100
    width: float = 800.0
    height: float = 600.0
    distribution: Literal["uniform", "blobs"] = "uniform"
    n_blobs: int = 3
    blob_std: float = 40.0
    seed: Optional[int] = None


@dataclass
class PlotConfig:
    """Configuration for rendering.

    Attributes:
        out_path: Output image path.
        point_size: Marker radius for data points.
        centroid_size: Ring radius for k-means centroids.
    """
    out_path: str = "clusters.png"
    point_size: float = 5.0
    centroid_size: float = 8.0


@dataclass
class ClusterVizConfig:
    """Master configuration for clusterviz.

    Combines all sub-configurations into a single object.

    Attributes:
        algorithm: "kmeans" or "dbscan".
    """
    algorithm: str = "kmeans"
    kmeans: KMeansConfig = field(default_factory=KMeansConfig)
    dbscan: DBSCANConfig = field(default_factory=DBSCANConfig)
    data: DataConfig = field(default_factory=DataConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)

    def __post_init__(self):
        """Normalize the algorithm name."""
        if isinstance(self.algorithm, str):
            self.algorithm = self.algorithm.lower()

    @property
    def algorithm_label(self) -> str:
        return ALGORITHM_LABELS.get(self.algorithm, self.algorithm)

    def validate(self) -> None:
        """Check the selected algorithm's parameters against PARAMETER_BOUNDS.

        Raises:
            InvalidParameter: On an unknown algorithm or out-of-range value.
        """
        if not isinstance(self.algorithm, str) or self.algorithm not in ALGORITHM_LABELS:
            raise InvalidParameter(
                f"Unknown algorithm: {self.algorithm}. "
                f"Must be one of: {', '.join(ALGORITHM_LABELS)}"
            )

        if self.algorithm == "kmeans":
            values = {"n_clusters": self.kmeans.n_clusters}
        else:
            values = {
                "epsilon": self.dbscan.epsilon,
                "min_points": self.dbscan.min_points,
            }

        for name, value in values.items():
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidParameter(f"{name} must be a number, got {value!r}")
            low, high = PARAMETER_BOUNDS[name]
            if not low <= value <= high:
                raise InvalidParameter(
                    f"{name}={value} is outside the allowed range [{low}, {high}]"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ClusterVizConfig":
        """Create config from dictionary."""
        return cls(
            algorithm=d.get("algorithm", "kmeans"),
            kmeans=KMeansConfig(**d.get("kmeans", {})),
            dbscan=DBSCANConfig(**d.get("dbscan", {})),
            data=DataConfig(**d.get("data", {})),
            plot=PlotConfig(**d.get("plot", {})),
        )
