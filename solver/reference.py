"""Reference solutions from SciPy's HiGHS backend.

Used to cross-check the tableau solver on the same canonical-form problem.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import numpy as np
from scipy.optimize import linprog


@dataclass
class ReferenceSolution:
    x: np.ndarray
    objective: float
    status: int


class ReferenceSolverError(RuntimeError):
    pass


def _as_array(m: Any) -> np.ndarray:
    if not isinstance(m, np.ndarray) and hasattr(m, "tolist"):
        m = m.tolist()
    return np.asarray(m, dtype=float)


def _split_constraints(objective: Any, constraints: Any) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    c = _as_array(objective).reshape(-1)
    table = _as_array(constraints)
    if table.ndim != 2 or table.shape[1] != c.size + 1:
        raise ValueError("constraints must be a 2-D array with n + 1 columns")
    return c, table[:, :-1], table[:, -1]


def solve_reference(
    mode: Union[str, Any],
    objective: Any,
    constraints: Any,
) -> ReferenceSolution:
    """Solve the canonical LP with ``linprog``.

    ``mode`` is ``"maximize"`` (rows read as ``a.x <= b``) or ``"minimize"``
    (rows read as ``a.x >= b``); a :class:`simplex.Mode` member works too.
    Containers may be NumPy arrays, nested lists or anything with ``tolist()``.
    """
    mode_name = getattr(mode, "value", mode)
    c, A, b = _split_constraints(objective, constraints)
    bounds = [(0, None)] * c.size

    if mode_name == "maximize":
        res = linprog(-c, A_ub=A, b_ub=b, bounds=bounds, method="highs")
    elif mode_name == "minimize":
        res = linprog(c, A_ub=-A, b_ub=-b, bounds=bounds, method="highs")
    else:
        raise ValueError(f"unsupported mode: {mode_name}")

    if not res.success:
        raise ReferenceSolverError(res.message)
    return ReferenceSolution(res.x, float(c @ res.x), res.status)
