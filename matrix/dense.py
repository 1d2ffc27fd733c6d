"""A small row-major matrix backed by a Python list."""

from __future__ import annotations

import sys
from fractions import Fraction
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from .base import register_traits

Scalar = Callable[[Any], Any]


class DenseMatrix:
    """Trivial 2-D container; use NumPy if you need anything more."""

    def __init__(self, rows: int = 0, columns: int = 0, *, scalar: Scalar = float) -> None:
        self._scalar = scalar
        self._rows = 0
        self._columns = 0
        self._values: List[Any] = []
        self.resize(rows, columns)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], *, scalar: Scalar = float) -> "DenseMatrix":
        widths = {len(row) for row in rows}
        if len(widths) > 1:
            raise ValueError("all rows must have the same length")
        matrix = cls(len(rows), widths.pop() if widths else 0, scalar=scalar)
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                matrix[i, j] = value
        return matrix

    @classmethod
    def column(cls, values: Iterable[Any], *, scalar: Scalar = float) -> "DenseMatrix":
        return cls.from_rows([[value] for value in values], scalar=scalar)

    @property
    def scalar(self) -> Scalar:
        return self._scalar

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._columns

    def resize(self, rows: int, columns: int) -> None:
        """Reallocate to ``rows x columns``; every element becomes zero."""
        if rows < 0 or columns < 0:
            raise ValueError("matrix dimensions must be non-negative")
        zero = self._scalar(0)
        self._values = [zero] * (rows * columns)
        self._rows = rows
        self._columns = columns

    def tolist(self) -> List[List[Any]]:
        return [
            self._values[i * self._columns : (i + 1) * self._columns]
            for i in range(self._rows)
        ]

    def _offset(self, key: Tuple[int, int]) -> int:
        row, col = key
        if not (0 <= row < self._rows and 0 <= col < self._columns):
            raise IndexError(f"index ({row}, {col}) out of range for {self.shape}")
        return row * self._columns + col

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        return self._values[self._offset(key)]

    def __setitem__(self, key: Tuple[int, int], value: Any) -> None:
        self._values[self._offset(key)] = self._scalar(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DenseMatrix):
            return NotImplemented
        return self.shape == other.shape and self._values == other._values

    def __repr__(self) -> str:
        return f"DenseMatrix({self.tolist()!r})"


_EPSILONS = {float: sys.float_info.epsilon, Fraction: Fraction(0)}


class DenseTraits:
    """Capability implementation for :class:`DenseMatrix`."""

    def rows(self, m: DenseMatrix) -> int:
        return m.rows

    def columns(self, m: DenseMatrix) -> int:
        return m.columns

    def get(self, m: DenseMatrix, row: int, col: int) -> Any:
        return m[row, col]

    def set(self, m: DenseMatrix, row: int, col: int, value: Any) -> None:
        m[row, col] = value

    def resize(self, m: DenseMatrix, rows: int, cols: int) -> DenseMatrix:
        m.resize(rows, cols)
        return m

    def empty(self, like: DenseMatrix) -> DenseMatrix:
        return DenseMatrix(scalar=like.scalar)

    def epsilon(self, m: DenseMatrix) -> Any:
        try:
            return _EPSILONS[m.scalar]
        except KeyError:
            raise TypeError(f"unknown epsilon for scalar type {m.scalar!r}") from None


register_traits(DenseMatrix, DenseTraits())
