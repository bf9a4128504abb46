"""Four-vector helpers.

Four-vectors are stored as `(px, py, pz, E)` numpy arrays, which is the
component ordering used by the generator records and the analysis record.
"""

import numpy as np

__all__ = ["four_vector", "mag2", "vect_mag", "euclidean_distance"]


def four_vector(px=0.0, py=0.0, pz=0.0, e=0.0):
    """Builds a `(px, py, pz, E)` four-vector.

    Parameters
    ----------
    px, py, pz : float
        Momentum (or position) components
    e : float
        Energy (or time) component

    Returns
    -------
    np.ndarray
        (4) Four-vector
    """
    return np.array([px, py, pz, e], dtype=np.float64)


def mag2(p4):
    """Minkowski square of a four-vector, with a (+, -, -, -) metric.

    Parameters
    ----------
    p4 : np.ndarray
        (4) Four-vector

    Returns
    -------
    float
        E^2 - |p|^2
    """
    return float(p4[3] ** 2 - np.dot(p4[:3], p4[:3]))


def vect_mag(p4):
    """Norm of the spatial part of a four-vector."""
    return float(np.linalg.norm(p4[:3]))


def euclidean_distance(point_a, point_b):
    """Euclidean distance between two 3D points."""
    return float(np.linalg.norm(np.asarray(point_a[:3]) - np.asarray(point_b[:3])))
