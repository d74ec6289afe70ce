"""Clustering quality metrics for evaluation.

Provides metrics for:
- Inertia - within-cluster sum of squared distances (k-means objective)
- Overall distance (OD) - root mean squared distance to centroids
- Silhouette score - cluster separation quality, noise excluded
- Cluster sizes and derived centroids for any labelling
"""

import numpy as np
from typing import Dict

from ..data.points import NOISE
from .geometry import distance_matrix, squared_distances_to_assigned


def inertia(
    data: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
) -> float:
    """Sum of squared distances from each point to its centroid.

    Args:
        data: Data points (n x d).
        centroids: Cluster centroids (k x d).
        labels: Cluster assignments (n,).

    Returns:
        Inertia (lower is better).
    """
    data = np.asarray(data, dtype=float)
    return float(squared_distances_to_assigned(
        data, np.asarray(centroids, dtype=float), np.asarray(labels)
    ).sum())


def overall_distance(
    data: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
) -> float:
    """Compute overall distance (OD) metric.

    OD = sqrt(mean(||x_i - c_{y_i}||^2))

    Lower is better.

    Args:
        data: Data points (n x d).
        centroids: Cluster centroids (k x d).
        labels: Cluster assignments (n,).

    Returns:
        Overall distance.
    """
    data = np.asarray(data, dtype=float)
    return float(np.sqrt(inertia(data, centroids, labels) / len(data)))


def cluster_sizes(labels: np.ndarray) -> Dict[int, int]:
    """Count points per label. NOISE is included when present."""
    values, counts = np.unique(np.asarray(labels), return_counts=True)
    return {int(v): int(c) for v, c in zip(values, counts)}


def cluster_centroids(data: np.ndarray, labels: np.ndarray) -> Dict[int, np.ndarray]:
    """Mean position of every non-noise cluster.

    Matches how the renderer places centroid markers: one per label
    actually present, keyed by label.
    """
    data = np.asarray(data, dtype=float)
    labels = np.asarray(labels)
    return {
        int(k): data[labels == k].mean(axis=0)
        for k in np.unique(labels)
        if k != NOISE
    }


def silhouette_score(
    data: np.ndarray,
    labels: np.ndarray,
) -> float:
    """Compute silhouette score for clustering quality.

    Measures how similar points are to their own cluster vs other clusters.
    Noise points are left out. Range: [-1, 1], higher is better.

    Args:
        data: Data points (n x d).
        labels: Cluster assignments.

    Returns:
        Mean silhouette coefficient, 0.0 when fewer than two clusters.
    """
    data = np.asarray(data, dtype=float)
    labels = np.asarray(labels)

    keep = labels != NOISE
    data = data[keep]
    labels = labels[keep]

    n_samples = len(data)
    unique = np.unique(labels)
    if len(unique) <= 1 or len(unique) >= n_samples:
        return 0.0

    distances = distance_matrix(data, data)
    silhouette_values = np.zeros(n_samples)

    for i in range(n_samples):
        same = labels == labels[i]
        n_same = same.sum()

        # a(i) = mean distance to the rest of its own cluster
        if n_same > 1:
            a_i = distances[i, same].sum() / (n_same - 1)
        else:
            # Singleton clusters score 0 by convention
            continue

        # b(i) = min mean distance to another cluster
        b_i = min(
            distances[i, labels == other].mean()
            for other in unique
            if other != labels[i]
        )

        if max(a_i, b_i) > 0:
            silhouette_values[i] = (b_i - a_i) / max(a_i, b_i)

    return float(np.mean(silhouette_values))
