"""Configuration loading for solver runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional

import numpy as np
import yaml

from matrix.dense import DenseMatrix
from simplex import Mode

Backend = Literal["numpy", "dense"]
BACKENDS = ("numpy", "dense")


@dataclass
class ProblemConfig:
    mode: Mode
    objective: np.ndarray
    constraints: np.ndarray


@dataclass
class SolverConfig:
    epsilon: Optional[float] = None
    max_iterations: Optional[int] = None
    full_pricing: bool = False
    backend: Backend = "numpy"


@dataclass
class Config:
    problem: ProblemConfig
    solver: SolverConfig
    base_path: Path

    def matrices(self) -> tuple[Any, Any]:
        """Objective and constraints in the configured backend's container."""
        objective = self.problem.objective.reshape(-1, 1)
        constraints = self.problem.constraints
        if self.solver.backend == "dense":
            return (
                DenseMatrix.from_rows(objective.tolist()),
                DenseMatrix.from_rows(constraints.tolist()),
            )
        return objective.copy(), constraints.copy()


def _load_array(source: Any, base: Path) -> np.ndarray:
    if source is None:
        raise ValueError("problem is missing a required array")
    if not isinstance(source, str):
        return np.array(source, dtype=float)
    path = (base / source).expanduser().resolve()
    if not path.exists():
        raise FileNotFoundError(path)
    if path.suffix == ".npy":
        return np.load(path)
    if path.suffix in {".csv", ".txt"}:
        return np.loadtxt(path, delimiter=",", ndmin=2)
    raise ValueError(f"unsupported matrix file type: {path}")


def _parse_mode(raw: Any) -> Mode:
    try:
        return Mode(str(raw).lower())
    except ValueError:
        raise ValueError(f"unsupported mode: {raw}") from None


def load_config(path: str | Path) -> Config:
    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}

    base = cfg_path.parent

    problem_raw = raw.get("problem") or {}
    solver_raw = raw.get("solver") or {}

    objective = _load_array(problem_raw.get("objective"), base).astype(float).reshape(-1)
    constraints = _load_array(problem_raw.get("constraints"), base).astype(float)
    if constraints.size == 0:
        constraints = constraints.reshape(0, objective.size + 1)
    constraints = np.atleast_2d(constraints)

    problem = ProblemConfig(
        mode=_parse_mode(problem_raw.get("mode", "maximize")),
        objective=objective,
        constraints=constraints,
    )

    solver = SolverConfig(
        epsilon=solver_raw.get("epsilon"),
        max_iterations=solver_raw.get("max_iterations"),
        full_pricing=bool(solver_raw.get("full_pricing", False)),
        backend=str(solver_raw.get("backend", "numpy")),
    )
    if solver.epsilon is not None:
        solver.epsilon = float(solver.epsilon)
        if solver.epsilon < 0:
            raise ValueError("epsilon must be non-negative")
    if solver.max_iterations is not None:
        solver.max_iterations = int(solver.max_iterations)
        if solver.max_iterations <= 0:
            raise ValueError("max_iterations must be positive")
    if solver.backend not in BACKENDS:
        raise ValueError(f"unsupported backend: {solver.backend}")

    return Config(problem=problem, solver=solver, base_path=base)
