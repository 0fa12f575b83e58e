from __future__ import annotations
import math
import numpy as np
from numpy.typing import ArrayLike, NDArray
from .errors import DegenerateVectorError

"""
This module provides the small set of 3-vector helpers the kernel relies on. Vectors
are plain numpy arrays of shape (3,); vec3 builds an owned copy from any
three-component input, length returns the Euclidean norm and normalize returns a new
unit vector. Normalizing a zero-length or non-finite vector raises
DegenerateVectorError instead of producing NaN components.
"""




__all__ = ["vec3", "length", "normalize"]


def vec3(values: ArrayLike | None = None, *, dtype=np.float64) -> NDArray[np.floating]:
    if values is None:
        return np.zeros(3, dtype=dtype)
    arr = np.array(values, dtype=dtype).ravel()
    if arr.shape != (3,):
        raise ValueError(f"expected 3 components, got shape {np.shape(values)}")
    return arr


def length(v: ArrayLike) -> float:
    arr = np.asarray(v, dtype=float)
    return float(math.sqrt(float(np.dot(arr, arr))))


def normalize(v: ArrayLike) -> NDArray[np.floating]:
    arr = np.asarray(v)
    if not np.issubdtype(arr.dtype, np.floating):
        arr = arr.astype(np.float64)

    norm = length(arr)
    if norm == 0.0 or not math.isfinite(norm):
        raise DegenerateVectorError(f"cannot normalize vector {arr.tolist()} of length {norm}")
    return arr / arr.dtype.type(norm)
