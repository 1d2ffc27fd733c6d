"""Pivot selection and Gauss-Jordan elimination on a simplex tableau."""

from __future__ import annotations

import enum
import logging
from typing import Any, Optional, Tuple, TypeVar

from matrix.base import MatrixTraits

M = TypeVar("M")

logger = logging.getLogger(__name__)


class Outcome(enum.Enum):
    OPTIMAL = "optimal"
    UNBOUNDED = "unbounded"
    ITERATION_LIMIT = "iteration_limit"


def close_to(value: Any, target: Any, tol: Any) -> bool:
    return target - tol <= value <= target + tol


def find_pivot_column(tableau: M, variable_count: int, traits: MatrixTraits[Any]) -> Optional[int]:
    """Return the column of the most negative objective entry, leftmost on ties.

    Only columns ``0..variable_count-1`` are candidates. Returns ``None`` when
    none of them is negative, i.e. the tableau is optimal.
    """
    pivot_col = 0
    for j in range(1, variable_count):
        if traits.get(tableau, 0, j) < traits.get(tableau, 0, pivot_col):
            pivot_col = j
    if traits.get(tableau, 0, pivot_col) >= 0:
        return None
    return pivot_col


def find_pivot_row(tableau: M, column: int, epsilon: Any, traits: MatrixTraits[Any]) -> Optional[int]:
    """Minimum ratio test on ``column``.

    Rows whose pivot entry is within ``epsilon`` of zero are skipped and only
    non-negative ratios count. When the best and the candidate ratio are both
    zero, the row with the smaller right-hand side wins, which ranks
    ``0/negative`` ahead of ``0/positive``.
    """
    rhs_col = traits.columns(tableau) - 1
    best_row: Optional[int] = None
    best_ratio: Any = None

    for i in range(1, traits.rows(tableau)):
        coeff = traits.get(tableau, i, column)
        if close_to(coeff, 0, epsilon):
            continue
        rhs = traits.get(tableau, i, rhs_col)
        ratio = rhs / coeff
        if ratio < 0:
            continue
        if best_row is None or ratio < best_ratio:
            best_row, best_ratio = i, ratio
        elif close_to(ratio, 0, epsilon) and close_to(best_ratio, 0, epsilon):
            if rhs < traits.get(tableau, best_row, rhs_col):
                best_row, best_ratio = i, ratio
    return best_row


def pivot(tableau: M, row: int, column: int, traits: MatrixTraits[Any]) -> None:
    """Scale ``row`` so the pivot becomes 1 and clear ``column`` elsewhere."""
    n_rows = traits.rows(tableau)
    n_cols = traits.columns(tableau)

    divisor = traits.get(tableau, row, column)
    for j in range(n_cols):
        traits.set(tableau, row, j, traits.get(tableau, row, j) / divisor)

    for i in range(n_rows):
        if i == row:
            continue
        factor = traits.get(tableau, i, column)
        if factor == 0:
            continue
        for j in range(n_cols):
            traits.set(
                tableau,
                i,
                j,
                traits.get(tableau, i, j) - traits.get(tableau, row, j) * factor,
            )


def run_simplex(
    tableau: M,
    variable_count: int,
    epsilon: Any,
    traits: MatrixTraits[Any],
    *,
    max_iterations: Optional[int] = None,
) -> Tuple[Outcome, int]:
    """Pivot until the objective row has no negative entry.

    Returns the outcome and the number of pivots performed. Without
    ``max_iterations`` the loop is unguarded, so a cycling degenerate problem
    never returns.
    """
    iterations = 0
    while True:
        pivot_col = find_pivot_column(tableau, variable_count, traits)
        if pivot_col is None:
            return Outcome.OPTIMAL, iterations

        pivot_row = find_pivot_row(tableau, pivot_col, epsilon, traits)
        if pivot_row is None:
            logger.debug("column %d has no admissible pivot row", pivot_col)
            return Outcome.UNBOUNDED, iterations

        if max_iterations is not None and iterations >= max_iterations:
            logger.warning("simplex stopped after %d pivots without converging", iterations)
            return Outcome.ITERATION_LIMIT, iterations

        logger.debug("pivot %d: row=%d col=%d", iterations + 1, pivot_row, pivot_col)
        pivot(tableau, pivot_row, pivot_col, traits)
        iterations += 1
