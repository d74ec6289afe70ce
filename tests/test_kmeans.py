"""Tests for k-means clustering."""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clusterviz.clustering.errors import EmptyInput, InvalidParameter
from clusterviz.clustering.kmeans import KMeansClusterer, kmeans_fit
from clusterviz.data.points import Point
from clusterviz.data.synthetic import generate_points


FOUR_POINTS = [(0.0, 0.0), (0.0, 1.0), (10.0, 10.0), (10.0, 11.0)]


class TestCentroidUpdate:
    """Tests for the centroid update step."""

    def test_centroid_matches_numpy_mean(self):
        """Centroid update should match numpy mean"""
        data = np.array([
            [0.0, 0.0],
            [1.0, 0.0],
            [0.0, 1.0],
            [1.0, 1.0],
        ])
        labels = np.array([0, 0, 0, 0])

        kmeans = KMeansClusterer(n_clusters=1)
        centroid = kmeans._update_centroids(data, labels, np.zeros((1, 2)))

        np.testing.assert_array_almost_equal(centroid[0], data.mean(axis=0))

    def test_multiple_clusters(self):
        """Centroid update works for multiple clusters"""
        data = np.array([
            [0.0, 0.0],
            [0.1, 0.1],
            [10.0, 10.0],
            [10.1, 10.1],
        ])
        labels = np.array([0, 0, 1, 1])

        kmeans = KMeansClusterer(n_clusters=2)
        centroids = kmeans._update_centroids(data, labels, np.zeros((2, 2)))

        np.testing.assert_array_almost_equal(centroids[0], [0.05, 0.05])
        np.testing.assert_array_almost_equal(centroids[1], [10.05, 10.05])

    def test_empty_cluster_keeps_previous_position(self):
        """Empty cluster keeps its centroid unchanged"""
        data = np.array([
            [0.0, 0.0],
            [1.0, 1.0],
        ])
        labels = np.array([0, 0])
        previous = np.array([[5.0, 5.0], [42.0, -3.0]])

        kmeans = KMeansClusterer(n_clusters=2)
        centroids = kmeans._update_centroids(data, labels, previous)

        np.testing.assert_array_almost_equal(centroids[0], [0.5, 0.5])
        np.testing.assert_array_equal(centroids[1], [42.0, -3.0])
        # Input is not modified
        np.testing.assert_array_equal(previous[0], [5.0, 5.0])


class TestAssignment:
    """Tests for the assignment step."""

    def test_nearest_centroid(self):
        """Points go to their nearest centroid"""
        data = np.array([[0.0, 0.0], [9.0, 9.0]])
        centroids = np.array([[10.0, 10.0], [1.0, 1.0]])

        labels = KMeansClusterer(n_clusters=2)._assign_clusters(data, centroids)

        np.testing.assert_array_equal(labels, [1, 0])

    def test_tie_goes_to_lowest_index(self):
        """Equidistant centroids resolve to the lowest index"""
        data = np.array([[0.0, 0.0]])
        centroids = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0]])

        labels = KMeansClusterer(n_clusters=3)._assign_clusters(data, centroids)

        assert labels[0] == 0


class TestKMeansFit:
    """Tests for full k-means fitting."""

    def test_basic_fit(self):
        """K-means can fit simple data"""
        rng = np.random.default_rng(42)
        cluster1 = rng.normal(size=(10, 2)) + np.array([0, 0])
        cluster2 = rng.normal(size=(10, 2)) + np.array([10, 10])
        data = np.vstack([cluster1, cluster2])

        result = KMeansClusterer(n_clusters=2, seed=0).fit(data)

        assert result.centroids.shape == (2, 2)
        assert len(result.labels) == 20
        assert result.n_iterations > 0
        assert result.converged
        assert len(set(result.labels[:10])) == 1
        assert len(set(result.labels[10:])) == 1
        assert result.labels[0] != result.labels[10]

    @pytest.mark.parametrize("seed", range(20))
    def test_two_pairs_any_seed(self, seed):
        """Two separated pairs split the same way for every seed"""
        result = KMeansClusterer(n_clusters=2, seed=seed).fit(FOUR_POINTS)
        labels = result.labels

        assert labels[0] == labels[1]
        assert labels[2] == labels[3]
        assert labels[0] != labels[2]

        centroids = sorted(map(tuple, np.round(result.centroids, 9)))
        assert centroids[0] == pytest.approx((0.0, 0.5))
        assert centroids[1] == pytest.approx((10.0, 10.5))

    def test_labels_in_range(self):
        """Every label lies in [0, k) and there is one per point"""
        cloud = generate_points(n_points=150, seed=3)
        for k in (1, 2, 5, 10):
            result = KMeansClusterer(n_clusters=k, seed=1).fit(cloud.points)
            assert len(result.labels) == 150
            assert result.labels.min() >= 0
            assert result.labels.max() < k

    def test_same_seed_is_idempotent(self):
        """Re-running with the same seed gives identical output"""
        cloud = generate_points(n_points=80, distribution="blobs", seed=11)
        kmeans = KMeansClusterer(n_clusters=4, seed=123)

        first = kmeans.fit(cloud.points)
        second = kmeans.fit(cloud.points)
        third = KMeansClusterer(n_clusters=4, seed=123).fit(cloud.points)

        np.testing.assert_array_equal(first.labels, second.labels)
        np.testing.assert_array_equal(first.labels, third.labels)
        np.testing.assert_array_equal(first.centroids, third.centroids)

    def test_k_equals_n(self):
        """With k == n every point becomes its own cluster"""
        data = np.array([[0.0, 0.0], [3.0, 1.0], [7.0, 2.0], [1.0, 9.0]])

        result = KMeansClusterer(n_clusters=4, seed=5).fit(data)

        assert sorted(result.labels.tolist()) == [0, 1, 2, 3]
        assert result.inertia == pytest.approx(0.0)
        assert result.converged

    def test_single_cluster_centroid_is_mean(self):
        """k=1 puts the centroid at the mean"""
        data = np.array([[0.0, 0.0], [2.0, 0.0], [4.0, 6.0]])

        result = KMeansClusterer(n_clusters=1, seed=0).fit(data)

        np.testing.assert_array_almost_equal(result.centroids[0], [2.0, 2.0])
        np.testing.assert_array_equal(result.labels, [0, 0, 0])

    def test_iteration_bound(self):
        """max_iter bounds the number of update steps"""
        cloud = generate_points(n_points=200, seed=9)
        result = KMeansClusterer(n_clusters=8, max_iter=1, seed=2).fit(cloud.points)
        assert result.n_iterations == 1

    def test_accepts_points_pairs_and_arrays(self):
        """Point objects, tuples and arrays give the same clustering"""
        as_points = [Point(x, y) for x, y in FOUR_POINTS]
        kmeans = KMeansClusterer(n_clusters=2, seed=4)

        a = kmeans.fit(as_points).labels
        b = kmeans.fit(FOUR_POINTS).labels
        c = kmeans.fit(np.array(FOUR_POINTS)).labels

        np.testing.assert_array_equal(a, b)
        np.testing.assert_array_equal(a, c)

    def test_cluster_returns_assignments_in_order(self):
        """cluster() pairs each input point with its label"""
        assignments = KMeansClusterer(n_clusters=2, seed=0).cluster(FOUR_POINTS)

        assert [(a.point.x, a.point.y) for a in assignments] == FOUR_POINTS
        assert assignments[0].cluster == assignments[1].cluster
        assert not any(a.is_noise for a in assignments)

    def test_predict(self):
        """predict assigns new points to the fitted centroids"""
        kmeans = KMeansClusterer(n_clusters=2, seed=0)
        result = kmeans.fit(FOUR_POINTS)

        predicted = kmeans.predict([(1.0, 0.0), (9.0, 12.0)])

        assert predicted[0] == result.labels[0]
        assert predicted[1] == result.labels[2]

    def test_predict_before_fit(self):
        """predict requires a fitted model"""
        with pytest.raises(ValueError):
            KMeansClusterer(n_clusters=2).predict(FOUR_POINTS)

    def test_convenience_function(self):
        """kmeans_fit convenience function works"""
        data = np.random.default_rng(0).normal(size=(20, 2))

        centroids, labels, inertia = kmeans_fit(data, k=3, seed=1)

        assert centroids.shape == (3, 2)
        assert len(labels) == 20
        assert inertia > 0


class TestInvalidInput:
    """Parameter and input validation."""

    def test_k_greater_than_n(self):
        """k > n is rejected"""
        with pytest.raises(InvalidParameter):
            KMeansClusterer(n_clusters=5).fit(FOUR_POINTS)

    @pytest.mark.parametrize("k", [0, -1, True, 2.0])
    def test_bad_k(self, k):
        """k must be an integer >= 1"""
        with pytest.raises(InvalidParameter):
            KMeansClusterer(n_clusters=k)

    def test_empty_input(self):
        """Empty input is rejected"""
        with pytest.raises(EmptyInput):
            KMeansClusterer(n_clusters=1).fit([])

    def test_non_finite_coordinates(self):
        """NaN coordinates are rejected"""
        with pytest.raises(InvalidParameter):
            KMeansClusterer(n_clusters=1).fit([(0.0, float("nan"))])


class TestObjective:
    """Tests for the clustering objective."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_inertia_never_increases(self, seed):
        """Inertia is non-increasing across iterations"""
        cloud = generate_points(n_points=120, distribution="blobs", n_blobs=4, seed=seed)

        result = KMeansClusterer(n_clusters=5, seed=seed).fit(cloud.points)
        history = np.array(result.inertia_history)

        assert len(history) == result.n_iterations + 1
        assert np.all(np.diff(history) <= 1e-9 * max(1.0, history[0]))
        assert result.inertia == pytest.approx(history[-1])

    def test_more_iterations_not_worse(self):
        """More iterations from the same start give same or lower inertia"""
        data = np.random.default_rng(42).normal(size=(30, 2))

        result_1 = KMeansClusterer(n_clusters=3, max_iter=1, seed=7).fit(data)
        result_10 = KMeansClusterer(n_clusters=3, max_iter=10, seed=7).fit(data)

        assert result_10.inertia <= result_1.inertia + 1e-12


class TestConvergence:
    """Tests for the stopping criteria."""

    @staticmethod
    def _fixed_start(kmeans):
        # (0, 1) starts with the far pair, then moves to (0, 0) after one update
        kmeans._initialize_centroids = lambda data, rng: np.array([[0.0, 0.0], [0.0, 1.0]])
        return kmeans

    def test_small_shift_stops_before_labels_settle(self):
        """A shift below tol ends the run even though labels just changed"""
        kmeans = self._fixed_start(KMeansClusterer(n_clusters=2, tol=100.0))

        result = kmeans.fit(FOUR_POINTS)

        assert result.converged
        assert result.n_iterations == 1
        np.testing.assert_array_equal(result.labels, [0, 0, 1, 1])

    def test_zero_tol_waits_for_stable_labels(self):
        """With tol=0 the same start needs a second update step"""
        kmeans = self._fixed_start(KMeansClusterer(n_clusters=2, tol=0.0))

        result = kmeans.fit(FOUR_POINTS)

        assert result.converged
        assert result.n_iterations == 2
        np.testing.assert_array_equal(result.labels, [0, 0, 1, 1])


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
