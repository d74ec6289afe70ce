"""Synthetic 2-D point generation.

Produces the point clouds fed to the clustering engine:
1. Uniform points over a rectangular canvas
2. Gaussian blobs around random centers, with ground-truth blob ids

All draws go through a seeded generator for reproducibility.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .points import Point, points_from_array


@dataclass
class PointCloud:
    """A generated set of points.

    Attributes:
        points: List of Point objects.
        true_labels: Blob id of each point (empty for uniform clouds).
        centers: Blob centers (k x 2), or None for uniform clouds.
    """
    points: List[Point]
    true_labels: List[int] = field(default_factory=list)
    centers: Optional[np.ndarray] = None

    @property
    def n_points(self) -> int:
        return len(self.points)

    def to_array(self) -> np.ndarray:
        """Convert to numpy array of shape (n_points, 2)."""
        return np.array([[p.x, p.y] for p in self.points], dtype=float).reshape(-1, 2)


class PointGenerator:
    """Generator for random point clouds on a width x height canvas."""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        seed: Optional[int] = None,
    ):
        """Initialize generator.

        Args:
            width: Canvas width; x is drawn from [0, width).
            height: Canvas height; y is drawn from [0, height).
            seed: Random seed for reproducibility.
        """
        if width <= 0 or height <= 0:
            raise ValueError("Canvas width and height must be positive")
        self.width = width
        self.height = height
        self.rng = np.random.default_rng(seed)

    def uniform(self, n_points: int = 100) -> PointCloud:
        """Draw points uniformly over the canvas."""
        xs = self.rng.uniform(0.0, self.width, size=n_points)
        ys = self.rng.uniform(0.0, self.height, size=n_points)
        return PointCloud(points=points_from_array(np.column_stack([xs, ys])))

    def blobs(
        self,
        n_points: int = 100,
        n_blobs: int = 3,
        std: float = 40.0,
    ) -> PointCloud:
        """Draw points from isotropic Gaussian blobs.

        Blob centers are uniform over the canvas inset by one standard
        deviation. Points are split as evenly as possible between blobs
        and clipped to the canvas.

        Args:
            n_points: Total number of points.
            n_blobs: Number of blobs.
            std: Standard deviation of every blob.

        Returns:
            PointCloud with ground-truth blob ids and centers.
        """
        if n_blobs < 1:
            raise ValueError("n_blobs must be at least 1")

        margin_x = min(std, self.width / 2)
        margin_y = min(std, self.height / 2)
        centers = np.column_stack([
            self.rng.uniform(margin_x, self.width - margin_x, size=n_blobs),
            self.rng.uniform(margin_y, self.height - margin_y, size=n_blobs),
        ])

        sizes = np.full(n_blobs, n_points // n_blobs)
        sizes[: n_points % n_blobs] += 1

        coords = []
        labels: List[int] = []
        for blob_id, (center, size) in enumerate(zip(centers, sizes)):
            coords.append(self.rng.normal(center, std, size=(size, 2)))
            labels.extend([blob_id] * int(size))

        data = np.vstack(coords) if coords else np.empty((0, 2))
        data[:, 0] = np.clip(data[:, 0], 0.0, self.width)
        data[:, 1] = np.clip(data[:, 1], 0.0, self.height)

        return PointCloud(
            points=points_from_array(data),
            true_labels=labels,
            centers=centers,
        )


def generate_points(
    n_points: int = 100,
    distribution: Literal["uniform", "blobs"] = "uniform",
    width: float = 800.0,
    height: float = 600.0,
    n_blobs: int = 3,
    blob_std: float = 40.0,
    seed: Optional[int] = None,
) -> PointCloud:
    """Convenience function to generate a point cloud.

    Args:
        n_points: Number of points.
        distribution: "uniform" or "blobs".
        width: Canvas width.
        height: Canvas height.
        n_blobs: Number of blobs (blobs only).
        blob_std: Blob standard deviation (blobs only).
        seed: Random seed.

    Returns:
        PointCloud.
    """
    generator = PointGenerator(width=width, height=height, seed=seed)
    if distribution == "uniform":
        return generator.uniform(n_points)
    if distribution == "blobs":
        return generator.blobs(n_points, n_blobs=n_blobs, std=blob_std)
    raise ValueError(f"Unknown distribution: {distribution}")
