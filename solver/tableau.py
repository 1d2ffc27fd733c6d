"""Construction of the augmented simplex tableau.

Both layouts keep the objective row at index 0 and the right-hand side in the
last column, so the pivoting loop in :mod:`solver.pivoting` runs unchanged on
either of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

from matrix.base import MatrixTraits

M = TypeVar("M")


@dataclass(frozen=True)
class ProblemShape:
    variables: int
    constraints: int


def build_primal_tableau(
    objective: M, constraints: M, shape: ProblemShape, traits: MatrixTraits[Any]
) -> M:
    """Tableau for ``max c^T x`` subject to ``A x <= b``.

    Layout is ``(m + 1) x (n + m + 1)``: the negated objective, the constraint
    coefficients, one slack column per constraint and the right-hand side.
    """
    n, m = shape.variables, shape.constraints
    tableau = traits.resize(traits.empty(objective), m + 1, n + m + 1)

    for j in range(n):
        traits.set(tableau, 0, j, -traits.get(objective, j, 0))

    for i in range(m):
        for j in range(n):
            traits.set(tableau, i + 1, j, traits.get(constraints, i, j))
        traits.set(tableau, i + 1, n + i, 1)
        traits.set(tableau, i + 1, n + m, traits.get(constraints, i, n))
    return tableau


def build_dual_tableau(
    objective: M, constraints: M, shape: ProblemShape, traits: MatrixTraits[Any]
) -> M:
    """Tableau for the dual of ``min c^T x`` subject to ``A x >= b``.

    The dual is ``max b^T y`` subject to ``A^T y <= c``; the layout is
    ``(n + 1) x (n + m + 1)`` with the dual variables in columns ``0..m-1``
    and the slack block in columns ``m..m+n-1``.
    """
    n, m = shape.variables, shape.constraints
    tableau = traits.resize(traits.empty(objective), n + 1, n + m + 1)

    for i in range(m):
        traits.set(tableau, 0, i, -traits.get(constraints, i, n))
        for j in range(n):
            traits.set(tableau, j + 1, i, traits.get(constraints, i, j))

    for j in range(n):
        traits.set(tableau, j + 1, m + j, 1)
        traits.set(tableau, j + 1, n + m, traits.get(objective, j, 0))
    return tableau
