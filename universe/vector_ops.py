"""
universe/vector_ops.py - Fixed-Length Vector Algebra

Elementary operations on state vectors (1-D float64 numpy arrays).
Pure functions: every operation returns a new array and never mutates inputs.
"""

from typing import Optional, Sequence, Union

import numpy as np

Vector = np.ndarray
VectorLike = Union[np.ndarray, Sequence[float]]


def as_vector(values: VectorLike) -> Vector:
    """Copy values into a fresh 1-D float64 array."""
    vec = np.array(values, dtype=np.float64)
    if vec.ndim != 1:
        raise ValueError(f"State vectors are 1-D, got shape {vec.shape}")
    return vec


def _pair(a: VectorLike, b: VectorLike) -> tuple:
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Vector length mismatch: {a.shape} vs {b.shape}")
    return a, b


def zeros(n: int) -> Vector:
    return np.zeros(n, dtype=np.float64)


def rand_vec(n: int, rng: Optional[np.random.Generator] = None) -> Vector:
    """Independent uniform [0, 1) samples."""
    if rng is None:
        rng = np.random.default_rng()
    return rng.random(n)


def add(a: VectorLike, b: VectorLike) -> Vector:
    a, b = _pair(a, b)
    return a + b


def sub(a: VectorLike, b: VectorLike) -> Vector:
    a, b = _pair(a, b)
    return a - b


def scale(v: VectorLike, s: float) -> Vector:
    return np.asarray(v, dtype=np.float64) * s


def blend(a: VectorLike, b: VectorLike, alpha: float) -> Vector:
    """
    Linear blend (1 - alpha) * a + alpha * b.

    alpha = 0 returns a copy of a, alpha = 1 a copy of b.
    """
    a, b = _pair(a, b)
    return (1.0 - alpha) * a + alpha * b


def sin_vec(v: VectorLike) -> Vector:
    return np.sin(np.asarray(v, dtype=np.float64))


def cos_vec(v: VectorLike) -> Vector:
    return np.cos(np.asarray(v, dtype=np.float64))


def norm(v: VectorLike) -> float:
    """Euclidean norm sqrt(sum(x_i^2)) as a plain float."""
    v = np.asarray(v, dtype=np.float64)
    return float(np.sqrt(np.dot(v, v)))


__all__ = [
    "Vector",
    "VectorLike",
    "as_vector",
    "zeros",
    "rand_vec",
    "add",
    "sub",
    "scale",
    "blend",
    "sin_vec",
    "cos_vec",
    "norm",
]
