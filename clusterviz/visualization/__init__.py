"""
Visualization module for clusterviz.

Provides plotting utilities for:
- Cluster assignment scatter plots (noise in grey, centroid rings)
- K-means inertia convergence
- JSON export of clustered points
"""

from .plot_utils import (
    plot_cluster_assignments,
    plot_inertia_history,
    assignments_to_records,
    save_results_json,
    STYLE_CONFIG,
)

__all__ = [
    "plot_cluster_assignments",
    "plot_inertia_history",
    "assignments_to_records",
    "save_results_json",
    "STYLE_CONFIG",
]
