"""Command-line interface for solving a linear program described in YAML."""

from __future__ import annotations

import argparse
import logging
import math
from typing import Any, Optional, Sequence

from config import Config, load_config
from matrix.base import traits_for
from simplex import SolutionType, Solver
from solver.reference import ReferenceSolverError, solve_reference
from telemetry.writer import write_result

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tableau simplex solver")
    parser.add_argument(
        "--config",
        required=True,
        help="Path to YAML problem file.",
    )
    parser.add_argument(
        "--out",
        help="Optional path of a JSON file receiving the result.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compare the optimum against SciPy's HiGHS solver.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging, including every pivot.",
    )
    return parser.parse_args(argv)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    cfg = load_config(args.config)
    solver = _solve(cfg)
    record = _to_record(solver)

    if args.check and solver.status() is SolutionType.FOUND:
        record["reference"] = _check(cfg, solver)

    _report(record)
    if args.out:
        write_result(args.out, record)
        logger.info("result written to %s", args.out)
    return 0 if solver.status() is SolutionType.FOUND else 1


def _solve(cfg: Config) -> Solver:
    objective, constraints = cfg.matrices()
    logger.info(
        "%s problem with %d variables and %d constraints (%s backend)",
        cfg.problem.mode.value,
        cfg.problem.objective.size,
        cfg.problem.constraints.shape[0],
        cfg.solver.backend,
    )
    return Solver(
        cfg.problem.mode,
        objective,
        constraints,
        cfg.solver.epsilon,
        max_iterations=cfg.solver.max_iterations,
        full_pricing=cfg.solver.full_pricing,
    )


def _to_record(solver: Solver) -> dict[str, Any]:
    status = solver.status()
    record: dict[str, Any] = {
        "status": status.name,
        "iterations": solver.iterations(),
        "epsilon": float(solver.epsilon),
    }
    if status is SolutionType.FOUND:
        solution = solver.solution()
        traits = traits_for(solution)
        record["optimum"] = float(solver.optimum())
        record["solution"] = [
            float(traits.get(solution, i, 0)) for i in range(traits.rows(solution))
        ]
    return record


def _check(cfg: Config, solver: Solver) -> dict[str, Any]:
    try:
        reference = solve_reference(
            cfg.problem.mode, cfg.problem.objective, cfg.problem.constraints
        )
    except ReferenceSolverError as exc:
        logger.warning("reference solver failed: %s", exc)
        return {"status": "failed", "message": str(exc)}
    agrees = math.isclose(
        float(solver.optimum()), reference.objective, rel_tol=1e-6, abs_tol=1e-9
    )
    if not agrees:
        logger.warning(
            "optimum %s differs from reference %s", solver.optimum(), reference.objective
        )
    return {"objective": reference.objective, "x": reference.x, "agrees": agrees}


def _report(record: dict[str, Any]) -> None:
    status = record["status"]
    if status == SolutionType.FOUND.name:
        print(f"The optimum is: {record['optimum']:g}")
        print("The solution is: " + " ".join(f"{v:g}" for v in record["solution"]))
    elif status == SolutionType.NONE.name:
        print("The linear problem has no solution.")
    else:
        print(f"The problem could not be solved: {SolutionType[status].value}")


if __name__ == "__main__":
    raise SystemExit(main())
