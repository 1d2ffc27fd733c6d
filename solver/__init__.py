"""Tableau construction, pivoting and the SciPy reference solver."""

from .pivoting import Outcome, find_pivot_column, find_pivot_row, pivot, run_simplex
from .tableau import ProblemShape, build_dual_tableau, build_primal_tableau

__all__ = [
    "Outcome",
    "ProblemShape",
    "build_dual_tableau",
    "build_primal_tableau",
    "find_pivot_column",
    "find_pivot_row",
    "pivot",
    "run_simplex",
]
