"""Capability implementation for NumPy arrays.

One-dimensional arrays are read as column vectors, so ``np.array([1.0, 2.0])``
is a valid objective, and zero-dimensional arrays as 1 x 1 matrices.
Containers created by the solver use the input's floating dtype, or
``float64`` for integer input.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from .base import register_traits


def _float_dtype(m: np.ndarray) -> np.dtype:
    if np.issubdtype(m.dtype, np.floating):
        return m.dtype
    return np.dtype(np.float64)


def _index(m: np.ndarray, row: int, col: int) -> Tuple[int, ...]:
    if m.ndim == 2:
        return row, col
    if col != 0 or (m.ndim == 0 and row != 0):
        raise IndexError(f"index ({row}, {col}) out of range for a {m.ndim}-d array")
    return () if m.ndim == 0 else (row,)


class NumpyTraits:
    def rows(self, m: np.ndarray) -> int:
        if m.ndim == 0:
            return 1
        return int(m.shape[0])

    def columns(self, m: np.ndarray) -> int:
        if m.ndim < 2:
            return 1
        return int(m.shape[1])

    def get(self, m: np.ndarray, row: int, col: int) -> float:
        return m[_index(m, row, col)].item()

    def set(self, m: np.ndarray, row: int, col: int, value: float) -> None:
        m[_index(m, row, col)] = value

    def resize(self, m: np.ndarray, rows: int, cols: int) -> np.ndarray:
        return np.zeros((rows, cols), dtype=_float_dtype(m))

    def empty(self, like: np.ndarray) -> np.ndarray:
        return np.zeros((0, 0), dtype=_float_dtype(like))

    def epsilon(self, m: np.ndarray) -> float:
        return float(np.finfo(_float_dtype(m)).eps)


register_traits(np.ndarray, NumpyTraits())
