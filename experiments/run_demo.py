#!/usr/bin/env python3
"""Command-line demo for clusterviz.

Generates a random point cloud, clusters it with K-means or DBSCAN,
reports quality metrics and renders the result.

Usage:
    python experiments/run_demo.py
    python experiments/run_demo.py --algorithm kmeans --k 4 --seed 7
    python experiments/run_demo.py --algorithm dbscan --epsilon 40 --min-points 4
    python experiments/run_demo.py --distribution blobs --json results/run.json
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import argparse
import logging
import time
from datetime import datetime

import numpy as np

from clusterviz.api import cluster_points
from clusterviz.clustering.metrics import (
    cluster_centroids,
    cluster_sizes,
    inertia,
    silhouette_score,
)
from clusterviz.config import ClusterVizConfig
from clusterviz.data.points import NOISE, points_to_array
from clusterviz.data.synthetic import generate_points
from clusterviz.visualization.plot_utils import (
    assignments_to_records,
    plot_cluster_assignments,
    save_results_json,
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cluster random 2-D points")
    parser.add_argument("--algorithm", choices=["kmeans", "dbscan"], default="kmeans")
    parser.add_argument("--k", type=int, default=3, help="K-means cluster count")
    parser.add_argument("--epsilon", type=float, default=50.0, help="DBSCAN radius")
    parser.add_argument("--min-points", type=int, default=3, help="DBSCAN core threshold")
    parser.add_argument("--neighbor-index", choices=["brute", "grid"], default="brute")
    parser.add_argument("--n-points", type=int, default=100)
    parser.add_argument("--distribution", choices=["uniform", "blobs"], default="uniform")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--out", type=str, default="clusters.png")
    parser.add_argument("--json", type=str, default=None, help="Also write results JSON")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ClusterVizConfig:
    config = ClusterVizConfig(algorithm=args.algorithm)
    config.kmeans.n_clusters = args.k
    config.kmeans.seed = args.seed
    config.dbscan.epsilon = args.epsilon
    config.dbscan.min_points = args.min_points
    config.dbscan.neighbor_index = args.neighbor_index
    config.data.n_points = args.n_points
    config.data.distribution = args.distribution
    config.data.seed = args.seed
    config.plot.out_path = args.out
    return config


def main(argv=None) -> int:
    """Run the demo."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )
    config = build_config(args)

    print("=" * 60)
    print(f"clusterviz: {config.algorithm_label} on {config.data.n_points} points")
    print("=" * 60)
    print()

    cloud = generate_points(
        n_points=config.data.n_points,
        distribution=config.data.distribution,
        width=config.data.width,
        height=config.data.height,
        n_blobs=config.data.n_blobs,
        blob_std=config.data.blob_std,
        seed=config.data.seed,
    )

    start = time.time()
    run = cluster_points(cloud.points, config)
    elapsed = time.time() - start

    if not run.ok:
        print(run.error)
        return 1

    data = points_to_array([a.point for a in run.assignments])
    labels = np.array([a.cluster for a in run.assignments])
    sizes = cluster_sizes(labels)

    print(f"Clustered in {elapsed * 1000:.1f} ms")
    print(f"  Clusters: {len([k for k in sizes if k != NOISE])}")
    if NOISE in sizes:
        print(f"  Noise points: {sizes[NOISE]}")
    for k, size in sorted(sizes.items()):
        if k != NOISE:
            print(f"    C{k}: {size} points")

    silhouette = silhouette_score(data, labels)
    print(f"  Silhouette: {silhouette:.4f}")
    if run.centroids is not None:
        sse = inertia(data, run.centroids, labels)
        print(f"  Inertia: {sse:.2f}")

    plot_cluster_assignments(
        run.assignments,
        centroids=run.centroids,
        out_path=config.plot.out_path,
        title="Clustering Algorithm Visualization",
        algorithm_label=config.algorithm_label,
        canvas=(config.data.width, config.data.height),
        point_size=config.plot.point_size,
        centroid_size=config.plot.centroid_size,
    )
    print(f"\nSaved plot to {config.plot.out_path}")

    if args.json:
        centroids = run.centroids
        if centroids is None:
            centroids = np.array(list(cluster_centroids(data, labels).values()))
        save_results_json(
            {
                "timestamp": datetime.now().isoformat(),
                "config": config.to_dict(),
                "silhouette": silhouette,
                "cluster_sizes": {str(k): v for k, v in sizes.items()},
                "centroids": centroids,
                "points": assignments_to_records(run.assignments),
            },
            args.json,
        )
        print(f"Saved results to {args.json}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
