"""
Request handling around the solvers.

Each entry point validates the payload, runs the solver and wraps the outcome in a
response envelope:
  {"status": "ok" | "invalid" | "error", "message": str, "data": dict | None}
User-correctable problems come back as "invalid" with their message; anything else is
logged with its traceback and reported as a generic "error".
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .errors import InvalidProblemError
from .graphical import parse_graphical_spec, solve_graphical
from .schemas import (
    Constraint,
    GraphicalResult,
    LPProblem,
    Point,
    SolveOptions,
    TransportMethod,
    TransportProblem,
    TransportSolution,
)
from .transport import balance, compare_all_methods, solve_transportation

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Unexpected error while solving the problem."

METHOD_LABELS: Dict[str, str] = {
    "northwest_corner": "Northwest Corner",
    "least_cost": "Least Cost",
    "vogel": "Vogel's Approximation",
}

_NON_NEGATIVITY_TOL = 1e-10


def solve_graphical_request(
    problem: Union[LPProblem, Dict[str, Any]],
    options: Union[SolveOptions, Dict[str, Any], None] = None,
) -> Dict[str, Any]:
    logger.info("Graphical solve started.")
    try:
        lp = LPProblem.model_validate(problem)
        opts = SolveOptions.model_validate(options or {})
        logger.debug("Request: %s", lp.model_dump())

        lp = strip_non_negativity_constraints(lp)
        result = solve_graphical(lp, opts)
        logger.info("Graphical solve finished: %s.", result.solution_kind)

        data = graphical_result_to_dict(result, lp, opts)
        logger.debug("Response: %s", data)
        return _ok(data, data["message"])
    except (InvalidProblemError, ValidationError) as exc:
        return _invalid(exc)
    except Exception:
        logger.exception("Unexpected error in graphical solve.")
        return _error()


def parse_graphical_request(spec: str) -> Dict[str, Any]:
    try:
        lp = parse_graphical_spec(spec)
        return _ok(lp.model_dump(), f"Parsed {len(lp.constraints)} constraint(s).")
    except (InvalidProblemError, ValidationError) as exc:
        return _invalid(exc)
    except Exception:
        logger.exception("Unexpected error while parsing LP text.")
        return _error()


def solve_transport_request(
    problem: Union[TransportProblem, Dict[str, Any]],
    method: TransportMethod,
    options: Union[SolveOptions, Dict[str, Any], None] = None,
) -> Dict[str, Any]:
    logger.info("Transportation solve started (%s).", method)
    try:
        original = TransportProblem.model_validate(problem)
        opts = SolveOptions.model_validate(options or {})
        logger.debug("Request: %s", original.model_dump())

        solution = solve_transportation(original, method, opts)
        balanced = balance(original, opts)
        logger.debug("Balance: %s, dummy added: %s.", original.balance_kind(opts.zero_tol), balanced.has_dummy)
        logger.info("Solved with %s, total cost %s.", method, solution.total_cost)

        data = transport_solution_to_dict(solution, original, balanced, opts)
        logger.debug("Response: %s", data)
        return _ok(data, data["message"])
    except (InvalidProblemError, ValidationError) as exc:
        return _invalid(exc)
    except Exception:
        logger.exception("Unexpected error in transportation solve.")
        return _error()


def compare_methods_request(
    problem: Union[TransportProblem, Dict[str, Any]],
    options: Union[SolveOptions, Dict[str, Any], None] = None,
) -> Dict[str, Any]:
    logger.info("Method comparison started.")
    try:
        original = TransportProblem.model_validate(problem)
        opts = SolveOptions.model_validate(options or {})
        logger.debug("Request: %s", original.model_dump())

        comparison = compare_all_methods(original, opts)
        balanced = balance(original, opts)
        for method in ("northwest_corner", "least_cost", "vogel"):
            logger.info("  %s: cost = %s", METHOD_LABELS[method], getattr(comparison, method).total_cost)

        best = comparison.best()
        data = {
            method: transport_solution_to_dict(getattr(comparison, method), original, balanced, opts)
            for method in ("northwest_corner", "least_cost", "vogel")
        }
        data["best_method"] = best
        message = f"Lowest initial cost: {METHOD_LABELS[best]} ({getattr(comparison, best).total_cost:.2f})."
        return _ok(data, message)
    except (InvalidProblemError, ValidationError) as exc:
        return _invalid(exc)
    except Exception:
        logger.exception("Unexpected error while comparing methods.")
        return _error()


def strip_non_negativity_constraints(problem: LPProblem) -> LPProblem:
    """Drop explicit x1 >= 0 / x2 >= 0 rows; the non_negativity flag already covers them."""
    kept = [cons for cons in problem.constraints if not _is_sign_restriction(cons)]
    if len(kept) == len(problem.constraints):
        return problem
    logger.debug("Dropped %d explicit non-negativity constraint(s).", len(problem.constraints) - len(kept))
    return problem.model_copy(update={"constraints": kept})


def _is_sign_restriction(cons: Constraint) -> bool:
    if cons.cmp != ">=" or abs(cons.rhs) >= _NON_NEGATIVITY_TOL:
        return False
    unit_x1 = abs(cons.coef_x1 - 1) < _NON_NEGATIVITY_TOL and abs(cons.coef_x2) < _NON_NEGATIVITY_TOL
    unit_x2 = abs(cons.coef_x1) < _NON_NEGATIVITY_TOL and abs(cons.coef_x2 - 1) < _NON_NEGATIVITY_TOL
    return unit_x1 or unit_x2


def graphical_result_to_dict(result: GraphicalResult, problem: LPProblem, opts: SolveOptions) -> Dict[str, Any]:
    optimum = result.optimum if result.has_solution else None
    binding: List[int] = []
    if optimum is not None:
        binding = [
            idx for idx, cons in enumerate(result.constraints)
            if cons.is_active(optimum.x1, optimum.x2, opts.zero_tol)
        ]

    return {
        "solution_kind": result.solution_kind,
        "optimum": _point_to_dict(optimum) if optimum is not None else None,
        "optimal_value": _round(result.optimal_value) if optimum is not None else None,
        "vertices": [_point_to_dict(p) for p in result.vertices],
        "feasible_region": [_point_to_dict(p) for p in result.feasible_region],
        "constraints": [_constraint_to_dict(cons, opts) for cons in result.constraints],
        "binding_constraints": binding,
        "objective_slope": _slope_or_none(problem.objective, opts.tol),
        "message": _graphical_message(result),
    }


def transport_solution_to_dict(
    solution: TransportSolution,
    original: TransportProblem,
    balanced: TransportProblem,
    opts: SolveOptions,
) -> Dict[str, Any]:
    kind = original.balance_kind(opts.zero_tol)
    basic = solution.basic_cell_count(opts.zero_tol)
    expected = solution.expected_basic_cells
    return {
        "method": solution.method,
        "allocations": solution.allocations,
        "total_cost": solution.total_cost,
        "dummy_added": balanced.has_dummy,
        "balance_kind": kind,
        "source_names": balanced.source_names,
        "destination_names": balanced.destination_names,
        "basic_cells": basic,
        "expected_basic_cells": expected,
        "degenerate": basic != expected,
        "message": _transport_message(solution, kind, basic, expected),
    }


def _graphical_message(result: GraphicalResult) -> str:
    if result.solution_kind == "infeasible":
        return "No point satisfies every constraint; the feasible region is empty."
    if result.solution_kind == "unbounded":
        return "The objective improves without limit over the feasible region; no finite optimum."
    point = result.optimum
    where = f"({_round(point.x1):g}, {_round(point.x2):g})"
    value = f"{_round(point.objective_value):g}"
    if result.solution_kind == "multiple":
        return f"Multiple optima: Z = {value} along an edge of the region, e.g. at {where}."
    return f"Unique optimum at {where} with Z = {value}."


def _transport_message(solution: TransportSolution, kind: str, basic: int, expected: int) -> str:
    parts = [f"{METHOD_LABELS[solution.method]}: total cost {solution.total_cost:.2f}."]
    if kind == "excess_supply":
        parts.append("Supply exceeded demand; a dummy destination was added.")
    elif kind == "excess_demand":
        parts.append("Demand exceeded supply; a dummy source was added.")
    if basic != expected:
        parts.append(f"Degenerate solution: {basic} basic cells instead of {expected}.")
    return " ".join(parts)


def _point_to_dict(point: Point) -> Dict[str, Any]:
    return {
        "x1": _round(point.x1),
        "x2": _round(point.x2),
        "objective_value": _round(point.objective_value) if point.objective_value is not None else None,
        "is_feasible": point.is_feasible,
    }


def _constraint_to_dict(cons: Constraint, opts: SolveOptions) -> Dict[str, Any]:
    data = cons.model_dump()
    data["slope"] = _slope_or_none(cons, opts.zero_tol)
    return data


def _slope_or_none(line: Any, tol: float) -> Optional[float]:
    try:
        return line.slope(tol)
    except ArithmeticError:
        return None


def _round(value: float) -> float:
    return round(value, 10)


def _ok(data: Dict[str, Any], message: str) -> Dict[str, Any]:
    return {"status": "ok", "message": message, "data": data}


def _invalid(exc: Exception) -> Dict[str, Any]:
    logger.warning("Rejected problem: %s", exc)
    return {"status": "invalid", "message": str(exc), "data": None}


def _error() -> Dict[str, Any]:
    return {"status": "error", "message": GENERIC_FAILURE, "data": None}
