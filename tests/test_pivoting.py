from pathlib import Path
import sys

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from matrix import NumpyTraits
from solver.pivoting import (
    Outcome,
    find_pivot_column,
    find_pivot_row,
    pivot,
    run_simplex,
)
from solver.tableau import ProblemShape, build_dual_tableau, build_primal_tableau

TRAITS = NumpyTraits()
EPS = 1000 * np.finfo(np.float64).eps


def test_primal_tableau_layout():
    objective = np.array([[1.0], [2.0]])
    constraints = np.array([[2.0, 3.0, 34.0], [1.0, 5.0, 45.0], [1.0, 0.0, 15.0]])
    tableau = build_primal_tableau(objective, constraints, ProblemShape(2, 3), TRAITS)

    expected = np.array(
        [
            [-1.0, -2.0, 0.0, 0.0, 0.0, 0.0],
            [2.0, 3.0, 1.0, 0.0, 0.0, 34.0],
            [1.0, 5.0, 0.0, 1.0, 0.0, 45.0],
            [1.0, 0.0, 0.0, 0.0, 1.0, 15.0],
        ]
    )
    np.testing.assert_array_equal(tableau, expected)


def test_dual_tableau_layout():
    objective = np.array([[3.0], [4.0]])
    constraints = np.array([[1.0, 2.0, 5.0], [6.0, 7.0, 8.0], [9.0, 1.0, 2.0]])
    tableau = build_dual_tableau(objective, constraints, ProblemShape(2, 3), TRAITS)

    expected = np.array(
        [
            [-5.0, -8.0, -2.0, 0.0, 0.0, 0.0],
            [1.0, 6.0, 9.0, 1.0, 0.0, 3.0],
            [2.0, 7.0, 1.0, 0.0, 1.0, 4.0],
        ]
    )
    np.testing.assert_array_equal(tableau, expected)


def test_pivot_column_is_most_negative_and_leftmost():
    tableau = np.array([[-2.0, -3.0, -3.0, 0.0], [1.0, 1.0, 1.0, 1.0]])
    assert find_pivot_column(tableau, 3, TRAITS) == 1


def test_pivot_column_only_scans_structural_columns():
    tableau = np.array([[-1.0, 0.0, -5.0, 0.0], [1.0, 1.0, 1.0, 1.0]])
    assert find_pivot_column(tableau, 2, TRAITS) == 0
    assert find_pivot_column(tableau, 1, TRAITS) == 0

    optimal = np.array([[0.0, 2.0, -5.0, 7.0], [1.0, 1.0, 1.0, 1.0]])
    assert find_pivot_column(optimal, 2, TRAITS) is None


def test_pivot_row_uses_minimum_non_negative_ratio():
    tableau = np.array(
        [
            [-1.0, 0.0, 0.0],
            [2.0, 1.0, 10.0],  # ratio 5
            [1e-15, 1.0, 1.0],  # pivot entry treated as zero
            [-1.0, 1.0, 2.0],  # negative ratio
            [4.0, 1.0, 12.0],  # ratio 3
        ]
    )
    assert find_pivot_row(tableau, 0, EPS, TRAITS) == 4


def test_pivot_row_is_none_without_candidates():
    tableau = np.array([[-1.0, 0.0, 0.0], [-1.0, 1.0, 3.0], [0.0, 1.0, 2.0]])
    assert find_pivot_row(tableau, 0, EPS, TRAITS) is None


def test_zero_ratio_tie_prefers_negative_right_hand_side():
    # Both ratios are ~1e-14; 0/negative must rank ahead of 0/positive.
    tableau = np.array(
        [
            [-1.0, 0.0, 0.0, 0.0],
            [1.0, 1.0, 0.0, 1e-14],
            [-1.0, 0.0, 1.0, -1e-14],
        ]
    )
    assert find_pivot_row(tableau, 0, EPS, TRAITS) == 2

    swapped = tableau[[0, 2, 1]]
    assert find_pivot_row(swapped, 0, EPS, TRAITS) == 1


def test_non_zero_ratio_tie_keeps_first_row():
    tableau = np.array([[-1.0, 0.0], [1.0, 2.0], [2.0, 4.0]])
    assert find_pivot_row(tableau, 0, EPS, TRAITS) == 1


def test_pivot_clears_column():
    tableau = np.array(
        [
            [-1.0, -2.0, 0.0, 0.0],
            [2.0, 4.0, 1.0, 8.0],
            [1.0, 1.0, 0.0, 3.0],
        ]
    )
    pivot(tableau, 1, 1, TRAITS)

    np.testing.assert_allclose(tableau[:, 1], [0.0, 1.0, 0.0])
    np.testing.assert_allclose(tableau[1], [0.5, 1.0, 0.25, 2.0])
    np.testing.assert_allclose(tableau[0], [0.0, 0.0, 0.5, 4.0])
    np.testing.assert_allclose(tableau[2], [0.5, 0.0, -0.25, 1.0])


def test_run_simplex_reaches_optimum():
    objective = np.array([[1.0], [2.0]])
    constraints = np.array([[2.0, 3.0, 34.0], [1.0, 5.0, 45.0], [1.0, 0.0, 15.0]])
    tableau = build_primal_tableau(objective, constraints, ProblemShape(2, 3), TRAITS)

    outcome, iterations = run_simplex(tableau, 2, EPS, TRAITS)
    assert outcome is Outcome.OPTIMAL
    assert iterations == 2
    assert tableau[0, -1] == pytest.approx(21.0)


def test_run_simplex_stops_at_iteration_cap():
    tableau = np.array([[-1.0, 0.0, 0.0], [1.0, 1.0, 4.0]])
    outcome, iterations = run_simplex(tableau, 1, EPS, TRAITS, max_iterations=0)
    assert outcome is Outcome.ITERATION_LIMIT
    assert iterations == 0
    np.testing.assert_array_equal(tableau, [[-1.0, 0.0, 0.0], [1.0, 1.0, 4.0]])
