"""Data module for points, labels and synthetic point generation."""

from .points import (
    NOISE,
    Point,
    ClusterAssignment,
    annotate,
    points_from_array,
    points_to_array,
)
from .synthetic import (
    generate_points,
    PointGenerator,
    PointCloud,
)

__all__ = [
    "NOISE",
    "Point",
    "ClusterAssignment",
    "annotate",
    "points_from_array",
    "points_to_array",
    "generate_points",
    "PointGenerator",
    "PointCloud",
]
