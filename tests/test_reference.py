from pathlib import Path
import sys

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from matrix import DenseMatrix
from simplex import Mode, SolutionType, Solver
from solver.reference import ReferenceSolverError, solve_reference


def _random_problem(seed: int, n: int, m: int):
    rng = np.random.default_rng(seed)
    A = rng.uniform(0.1, 2.0, size=(m, n))
    b = rng.uniform(1.0, 10.0, size=m)
    c = rng.uniform(0.5, 3.0, size=n)
    return c, A, b


@pytest.mark.parametrize("seed, n, m", [(0, 2, 3), (1, 3, 3), (2, 4, 2), (3, 5, 6), (4, 6, 4)])
def test_maximize_agrees_with_highs(seed, n, m):
    c, A, b = _random_problem(seed, n, m)
    solver = Solver(Mode.MAXIMIZE, c, np.column_stack([A, b]), full_pricing=True)
    reference = solve_reference(Mode.MAXIMIZE, c, np.column_stack([A, b]))

    assert solver.status() is SolutionType.FOUND
    x = solver.solution().ravel()
    assert solver.optimum() == pytest.approx(reference.objective, rel=1e-7)
    assert solver.optimum() == pytest.approx(float(c @ x), rel=1e-9)
    assert np.all(A @ x <= b + 1e-9)
    assert np.all(x >= -1e-12)


@pytest.mark.parametrize("seed, n, m", [(10, 2, 3), (11, 3, 3), (12, 4, 2), (13, 5, 6), (14, 6, 4)])
def test_minimize_agrees_with_highs(seed, n, m):
    c, A, b = _random_problem(seed, n, m)
    solver = Solver(Mode.MINIMIZE, c, np.column_stack([A, b]), full_pricing=True)
    reference = solve_reference("minimize", c, np.column_stack([A, b]))

    assert solver.status() is SolutionType.FOUND
    x = solver.solution().ravel()
    assert solver.optimum() == pytest.approx(reference.objective, rel=1e-7)
    assert solver.optimum() == pytest.approx(float(c @ x), rel=1e-9)
    assert np.all(A @ x >= b - 1e-9)
    assert np.all(x >= -1e-12)


def test_reference_accepts_dense_matrices():
    objective = DenseMatrix.column([1, 2])
    constraints = DenseMatrix.from_rows([[2, 3, 34], [1, 5, 45], [1, 0, 15]])
    reference = solve_reference("maximize", objective, constraints)
    assert reference.objective == pytest.approx(21.0)
    np.testing.assert_allclose(reference.x, [5.0, 8.0], atol=1e-7)


def test_reference_reports_unbounded_problem():
    with pytest.raises(ReferenceSolverError):
        solve_reference("maximize", [1.0, 1.0], [[1.0, -1.0, 1.0]])


def test_reference_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        solve_reference("maximize", [1.0, 1.0], [[1.0, 1.0]])
    with pytest.raises(ValueError):
        solve_reference("sideways", [1.0], [[1.0, 1.0]])
