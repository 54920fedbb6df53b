# vector.py
"""
2D vector helpers.

Vectors are NumPy arrays whose last axis holds the (x, y) components, so
every function works on a single vector of shape (2,) as well as on a
batch of shape (N, 2).
"""
import numpy as np

# --- Data Contracts ---
#
# length(v) -> float | np.ndarray
#   - Euclidean length over the last axis.
#
# normalize(v) -> np.ndarray
#   - Divides each vector by its length.
#   - Raises ValueError if any vector has zero length.
#
# distance(a, b) -> float | np.ndarray
#   - Euclidean distance, symmetric, distance(a, a) == 0.
#
# add(a, b) -> np.ndarray
#   - Component-wise sum.


def length(v):
    v = np.asarray(v, dtype=np.float64)
    return np.sqrt(np.sum(v * v, axis=-1))


def normalize(v) -> np.ndarray:
    """Returns the unit vector(s) pointing the same way as `v`."""
    v = np.asarray(v, dtype=np.float64)
    lengths = length(v)
    if np.any(lengths == 0):
        raise ValueError("Cannot normalize a zero-length vector.")
    return v / np.expand_dims(lengths, axis=-1)


def distance(a, b):
    return length(np.asarray(b, dtype=np.float64) - np.asarray(a, dtype=np.float64))


def add(a, b) -> np.ndarray:
    return np.asarray(a, dtype=np.float64) + np.asarray(b, dtype=np.float64)
