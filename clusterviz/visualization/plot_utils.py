"""
Plotting utilities for clustering results.

Renders what the interactive view shows: points colored by cluster
(tab10, noise in grey) on the canvas, with k-means centroids drawn as
black rings, plus a convergence plot of k-means inertia.

All plots are 150 DPI, bbox_inches='tight', with consistent style.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib
matplotlib.use("Agg")  # non-interactive backend
import matplotlib.pyplot as plt

from ..clustering.metrics import cluster_centroids
from ..data.points import NOISE, ClusterAssignment

logger = logging.getLogger(__name__)


# ── Style config ──────────────────────────────────────────────────────
STYLE_CONFIG = {
    "figure.figsize": (10, 7.5),
    "figure.dpi": 150,
    "figure.facecolor": "white",
    "axes.grid": True,
    "grid.alpha": 0.3,
    "font.size": 10,
    "axes.titlesize": 14,
    "axes.labelsize": 12,
    "legend.fontsize": 8,
    "lines.linewidth": 2,
}

COLORS = {
    "noise": "#cccccc",
    "centroid": "black",
    "line": "#4363d8",
}


def _apply_style():
    """Apply rcParams."""
    plt.rcParams.update(STYLE_CONFIG)


def _add_info_box(ax: plt.Axes, text: str, loc: str = "upper right"):
    """Add a semi-transparent info box to the axes."""
    props = dict(boxstyle="round,pad=0.4", facecolor="white", alpha=0.85,
                 edgecolor="#cccccc")
    anchors = {
        "upper right": (0.98, 0.98, "right", "top"),
        "upper left": (0.02, 0.98, "left", "top"),
        "lower right": (0.98, 0.02, "right", "bottom"),
    }
    x, y, ha, va = anchors.get(loc, anchors["upper right"])
    ax.text(x, y, text, transform=ax.transAxes, fontsize=8,
            verticalalignment=va, horizontalalignment=ha, bbox=props,
            family="monospace")


def _marker_area(radius: float) -> float:
    """Convert a marker radius in points to a scatter area."""
    return (2 * radius) ** 2


# ─────────────────────────────────────────────────────────────────────
# Cluster Plots
# ─────────────────────────────────────────────────────────────────────

def plot_cluster_assignments(
    assignments: Sequence[ClusterAssignment],
    centroids: Optional[np.ndarray] = None,
    out_path: Union[str, Path] = "clusters.png",
    title: str = "Cluster Assignments",
    algorithm_label: str = "",
    canvas: Optional[Tuple[float, float]] = None,
    point_size: float = 5.0,
    centroid_size: float = 8.0,
):
    """Scatter plot of points coloured by cluster assignment.

    Args:
        assignments: Clustered points, in input order.
        centroids: (K, 2) centroids to draw as rings. When None and
            algorithm_label is "K-means", the mean of each cluster is used.
        out_path: Output file path.
        title: Plot title.
        algorithm_label: E.g. "K-means"; shown in the info box.
        canvas: (width, height); the y-axis is flipped to match screen
            coordinates when given.
        point_size: Point marker radius.
        centroid_size: Centroid ring radius.
    """
    _apply_style()

    points = np.array([[a.point.x, a.point.y] for a in assignments],
                      dtype=float).reshape(-1, 2)
    labels = np.array([a.cluster for a in assignments], dtype=int)

    if centroids is None and algorithm_label == "K-means" and len(labels):
        # Same as the interactive view: one ring per non-empty cluster
        centroids = np.array(list(cluster_centroids(points, labels).values()))

    unique_labels = np.unique(labels[labels != NOISE])
    n_clusters = len(unique_labels)
    cmap = plt.get_cmap("tab10")

    fig, ax = plt.subplots()

    for k in unique_labels:
        mask = labels == k
        ax.scatter(
            points[mask, 0], points[mask, 1],
            color=cmap(int(k) % 10), s=_marker_area(point_size),
            label=f"C{k}",
        )

    noise_mask = labels == NOISE
    if noise_mask.any():
        ax.scatter(
            points[noise_mask, 0], points[noise_mask, 1],
            color=COLORS["noise"], s=_marker_area(point_size), label="Noise",
        )

    if centroids is not None and len(centroids):
        ax.scatter(
            centroids[:, 0], centroids[:, 1],
            facecolors="none", edgecolors=COLORS["centroid"],
            s=_marker_area(centroid_size), linewidths=2, zorder=10,
            label="Centroids",
        )

    info = f"clusters = {n_clusters}  |  N = {len(points)}"
    if noise_mask.any():
        info += f"  |  noise = {int(noise_mask.sum())}"
    if algorithm_label:
        info = f"{algorithm_label}\n{info}"
    _add_info_box(ax, info)

    if canvas is not None:
        width, height = canvas
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_aspect("equal")

    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    if n_clusters or noise_mask.any():
        ax.legend(loc="upper left", ncol=max(1, n_clusters // 8))
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.debug("Saved cluster plot to %s", out_path)


def plot_inertia_history(
    inertia_history: List[float],
    out_path: Union[str, Path] = "inertia.png",
    title: str = "K-means Convergence",
):
    """Plot inertia after every assignment step."""
    _apply_style()

    fig, ax = plt.subplots(figsize=(10, 5))

    steps = list(range(len(inertia_history)))
    ax.plot(steps, inertia_history, "o-", color=COLORS["line"])
    if len(inertia_history) > 1 and inertia_history[0] > 0:
        delta = inertia_history[0] - inertia_history[-1]
        pct = delta / inertia_history[0] * 100
        _add_info_box(ax, f"ΔSSE = {delta:.4g} ({pct:.1f}%)")

    ax.set_xlabel("Assignment step")
    ax.set_ylabel("Inertia (lower is better)")
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)


# ─────────────────────────────────────────────────────────────────────
# JSON Serialisation
# ─────────────────────────────────────────────────────────────────────

def _make_serializable(obj: Any) -> Any:
    """Recursively convert numpy types for JSON serialization."""
    if isinstance(obj, dict):
        return {k: _make_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_make_serializable(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


def assignments_to_records(
    assignments: Sequence[ClusterAssignment],
) -> List[Dict[str, Any]]:
    """Flatten assignments to {"x", "y", "cluster"} records."""
    return [
        {"x": a.point.x, "y": a.point.y, "cluster": a.cluster}
        for a in assignments
    ]


def save_results_json(
    results: Dict[str, Any],
    out_path: Union[str, Path],
):
    """Save results to JSON with numpy-safe conversion."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w") as f:
        json.dump(_make_serializable(results), f, indent=2)
