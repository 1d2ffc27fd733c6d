"""Tableau simplex method for canonical-form linear programs.

Maximization problems are read as ``max c^T x`` subject to ``A x <= b``,
minimization problems as ``min c^T x`` subject to ``A x >= b``; in both cases
``x >= 0`` and ``b >= 0``. Minimization is solved through its dual.

The solver works on any matrix container that has :class:`matrix.MatrixTraits`
registered for it::

    solver = Solver(Mode.MAXIMIZE, np.array([1.0, 2.0]), constraints)
    if solver.status() is SolutionType.FOUND:
        print(solver.optimum(), solver.solution())
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

from matrix.base import MatrixTraits, traits_for
from solver.pivoting import Outcome, close_to, run_simplex
from solver.tableau import ProblemShape, build_dual_tableau, build_primal_tableau

M = TypeVar("M")

logger = logging.getLogger(__name__)

DEFAULT_EPSILON_SCALE = 1000


class Mode(enum.Enum):
    MINIMIZE = "minimize"  # constraints read as a.x >= b
    MAXIMIZE = "maximize"  # constraints read as a.x <= b


class SolutionType(enum.Enum):
    FOUND = "found"
    NONE = "none"
    ERR_OBJ_COLUMN = "objective must have exactly one column"
    ERR_OBJ_ROWS = "objective must have at least one row"
    ERR_OBJ_COEFF = "objective coefficients must be non-zero"
    ERR_CONSTR_ROWS = "constraints must have at least one row"
    ERR_CONSTR_COLUMN = "constraints must have one column more than there are variables"
    ERR_CONSTR_RHS = "right-hand sides must be non-negative"
    NOT_CONVERGED = "iteration limit reached"

    @property
    def is_error(self) -> bool:
        return self.name.startswith("ERR_")


class SimplexError(RuntimeError):
    """Raised when a result is read from a solver that has none."""


@dataclass(frozen=True)
class SolveResult(Generic[M]):
    status: SolutionType
    optimum: Any = None
    solution: Optional[M] = None
    iterations: int = 0


def validate_problem(
    objective: M, constraints: M, epsilon: Any, traits: MatrixTraits[Any]
) -> Union[ProblemShape, SolutionType]:
    """Check the input dimensions and values; the first failing rule wins."""
    n = traits.rows(objective)
    m = traits.rows(constraints)

    if traits.columns(objective) != 1:
        return SolutionType.ERR_OBJ_COLUMN
    if n < 1:
        return SolutionType.ERR_OBJ_ROWS
    if m < 1:
        return SolutionType.ERR_CONSTR_ROWS
    if traits.columns(constraints) != n + 1:
        return SolutionType.ERR_CONSTR_COLUMN
    if any(close_to(traits.get(objective, i, 0), 0, epsilon) for i in range(n)):
        return SolutionType.ERR_OBJ_COEFF
    if any(traits.get(constraints, i, n) < 0 for i in range(m)):
        return SolutionType.ERR_CONSTR_RHS
    return ProblemShape(variables=n, constraints=m)


class Solver(Generic[M]):
    """Solve a linear program once, at construction time.

    Args:
        mode: whether to maximize or minimize the objective.
        objective: column matrix with one coefficient per variable.
        constraints: matrix with one row per inequality; the last column holds
            the right-hand side.
        epsilon: values within ``epsilon`` of zero are treated as zero. It
            should sit a few orders of magnitude below the smallest significant
            value of the problem; the default, 1000 times the machine epsilon
            of the scalar type, suits values between roughly 1e-3 and 1e3.
        traits: capability implementation for the matrix type; looked up from
            the type of ``objective`` when omitted.
        max_iterations: optional cap on the number of pivots. Without it a
            cycling degenerate problem never terminates.
        full_pricing: let slack columns enter the basis as well. By default only
            the structural columns are priced. A maximization can then stop at
            a feasible vertex that is not optimal; a minimization can report
            FOUND with negative variables and an optimum below the true
            minimum, because its variables are the dual's unpriced slacks.

    Construction never raises for a bad problem; check :meth:`status` first.
    """

    def __init__(
        self,
        mode: Mode,
        objective: M,
        constraints: M,
        epsilon: Any = None,
        *,
        traits: Optional[MatrixTraits[M]] = None,
        max_iterations: Optional[int] = None,
        full_pricing: bool = False,
    ) -> None:
        self._traits = traits if traits is not None else traits_for(objective)
        if epsilon is None:
            epsilon = self._traits.epsilon(objective) * DEFAULT_EPSILON_SCALE
        self._epsilon = epsilon
        self._full_pricing = full_pricing
        self._result = self._solve(Mode(mode), objective, constraints, max_iterations)

    @property
    def epsilon(self) -> Any:
        return self._epsilon

    @property
    def result(self) -> SolveResult[M]:
        return self._result

    def status(self) -> SolutionType:
        return self._result.status

    def optimum(self) -> Any:
        """Optimal objective value; raises unless :meth:`status` is FOUND."""
        self._require_solution()
        return self._result.optimum

    def solution(self) -> M:
        """Column vector of variable values; raises unless :meth:`status` is FOUND.

        Each call returns a fresh copy, so the stored result cannot be altered.
        """
        self._require_solution()
        return self._copy(self._result.solution)

    def iterations(self) -> int:
        return self._result.iterations

    def _copy(self, m: M) -> M:
        traits = self._traits
        rows, cols = traits.rows(m), traits.columns(m)
        copy = traits.resize(traits.empty(m), rows, cols)
        for i in range(rows):
            for j in range(cols):
                traits.set(copy, i, j, traits.get(m, i, j))
        return copy

    def _require_solution(self) -> None:
        if self._result.status is not SolutionType.FOUND:
            raise SimplexError(f"no solution available: {self._result.status.name}")

    def _solve(
        self, mode: Mode, objective: M, constraints: M, max_iterations: Optional[int]
    ) -> SolveResult[M]:
        traits = self._traits
        checked = validate_problem(objective, constraints, self._epsilon, traits)
        if isinstance(checked, SolutionType):
            logger.debug("rejected problem: %s", checked.value)
            return SolveResult(status=checked)
        shape = checked

        if mode is Mode.MAXIMIZE:
            tableau = build_primal_tableau(objective, constraints, shape, traits)
            variable_count = shape.variables
        else:
            tableau = build_dual_tableau(objective, constraints, shape, traits)
            variable_count = shape.constraints
        if self._full_pricing:
            variable_count = traits.columns(tableau) - 1

        outcome, iterations = run_simplex(
            tableau, variable_count, self._epsilon, traits, max_iterations=max_iterations
        )
        if outcome is Outcome.UNBOUNDED:
            return SolveResult(status=SolutionType.NONE, iterations=iterations)
        if outcome is Outcome.ITERATION_LIMIT:
            return SolveResult(status=SolutionType.NOT_CONVERGED, iterations=iterations)

        if mode is Mode.MAXIMIZE:
            solution = self._extract_primal(tableau, objective, shape)
        else:
            solution = self._extract_dual(tableau, objective, shape)
        optimum = traits.get(tableau, 0, traits.columns(tableau) - 1)
        logger.debug("%s optimum %s after %d pivots", mode.value, optimum, iterations)
        return SolveResult(
            status=SolutionType.FOUND,
            optimum=optimum,
            solution=solution,
            iterations=iterations,
        )

    def _extract_primal(self, tableau: M, objective: M, shape: ProblemShape) -> M:
        traits = self._traits
        rhs_col = traits.columns(tableau) - 1
        solution = traits.resize(traits.empty(objective), shape.variables, 1)
        for i in range(shape.variables):
            row = self._basic_row(tableau, i)
            if row is not None:
                traits.set(solution, i, 0, traits.get(tableau, row, rhs_col))
        return solution

    def _extract_dual(self, tableau: M, objective: M, shape: ProblemShape) -> M:
        # The dual's slack columns carry the primal variables in the objective row.
        traits = self._traits
        solution = traits.resize(traits.empty(objective), shape.variables, 1)
        for i in range(shape.variables):
            traits.set(solution, i, 0, traits.get(tableau, 0, shape.constraints + i))
        return solution

    def _basic_row(self, tableau: M, column: int) -> Optional[int]:
        """Row holding the single 1 of a basic column, or ``None`` if non-basic."""
        traits = self._traits
        one_tol = 10 * self._epsilon
        found: Optional[int] = None
        for i in range(1, traits.rows(tableau)):
            value = traits.get(tableau, i, column)
            if close_to(value, 1, one_tol):
                if found is not None:
                    return None
                found = i
            elif not close_to(value, 0, self._epsilon):
                return None
        return found
