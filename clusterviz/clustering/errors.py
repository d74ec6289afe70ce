"""Exceptions raised by the clustering engine."""


class ClusteringError(ValueError):
    """Base class for errors that reject a clustering run."""


class InvalidParameter(ClusteringError):
    """A parameter (k, epsilon, min_points) or a coordinate is out of range."""


class EmptyInput(ClusteringError):
    """No points were supplied."""
