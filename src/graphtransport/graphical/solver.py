from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from .geometry import deduplicate, enumerate_candidates
from .objective import evaluate_all, find_optimum, is_multiple_optimum
from ..errors import InvalidProblemError
from ..schemas import GraphicalResult, LPProblem, Point, SolveOptions


def solve_graphical(problem: LPProblem, opts: Optional[SolveOptions] = None) -> GraphicalResult:
    """
    Graphical method for two-variable LPs:
      - enumerate candidate vertices and drop duplicates
      - keep the feasible ones (empty set => infeasible)
      - evaluate the objective, test the unboundedness heuristic
      - pick the optimum, flag tied optima, order the region counterclockwise
    """

    opts = opts or SolveOptions()
    validate_lp_problem(problem, opts)

    candidates = deduplicate(enumerate_candidates(problem.constraints, opts), opts.tol)
    feasible = filter_feasible(candidates, problem, opts)

    if not feasible:
        return GraphicalResult(
            optimum=None,
            vertices=candidates,
            feasible_region=[],
            constraints=list(problem.constraints),
            solution_kind="infeasible",
        )

    evaluated = evaluate_all(problem.objective, feasible)
    region = order_counterclockwise(evaluated)

    if is_unbounded(problem):
        return GraphicalResult(
            optimum=None,
            vertices=evaluated,
            feasible_region=region,
            constraints=list(problem.constraints),
            solution_kind="unbounded",
        )

    sense = problem.objective.sense
    optimum = find_optimum(evaluated, sense)
    kind = "multiple" if is_multiple_optimum(evaluated, sense, opts.tol) else "unique"

    return GraphicalResult(
        optimum=optimum,
        vertices=evaluated,
        feasible_region=region,
        constraints=list(problem.constraints),
        solution_kind=kind,
    )


def validate_lp_problem(problem: LPProblem, opts: SolveOptions) -> None:
    if not problem.objective.is_valid(opts.tol):
        raise InvalidProblemError("Objective function needs at least one non-zero coefficient.")
    if len(problem.constraints) < opts.min_constraints:
        raise InvalidProblemError(
            f"At least {opts.min_constraints} constraint(s) required, got {len(problem.constraints)}."
        )
    for idx, cons in enumerate(problem.constraints, start=1):
        if not cons.is_valid(opts.zero_tol):
            raise InvalidProblemError(f"Constraint {idx} needs at least one non-zero coefficient.")


def is_feasible(point: Point, problem: LPProblem, opts: SolveOptions) -> bool:
    if problem.non_negativity and (point.x1 < -opts.tol or point.x2 < -opts.tol):
        return False
    return all(cons.is_satisfied(point.x1, point.x2, opts.zero_tol) for cons in problem.constraints)


def filter_feasible(points: Sequence[Point], problem: LPProblem, opts: Optional[SolveOptions] = None) -> List[Point]:
    opts = opts or SolveOptions()
    return [
        point.model_copy(update={"is_feasible": True})
        for point in points
        if is_feasible(point, problem, opts)
    ]


def is_unbounded(problem: LPProblem) -> bool:
    """
    Heuristic only: the region is treated as open in the improving direction when no
    constraint of the closing kind exists (or fewer than two constraints are given)
    and some objective coefficient pushes that way.
    """

    objective = problem.objective
    too_few = len(problem.constraints) < 2

    if objective.sense == "max":
        has_upper = any(cons.cmp == "<=" for cons in problem.constraints)
        if (not has_upper or too_few) and (objective.coef_x1 > 0 or objective.coef_x2 > 0):
            return True
    else:
        has_lower = any(cons.cmp == ">=" for cons in problem.constraints)
        if (not has_lower or too_few) and (objective.coef_x1 < 0 or objective.coef_x2 < 0):
            return True
    return False


def order_counterclockwise(points: Sequence[Point]) -> List[Point]:
    """Sort around the centroid by polar angle so the region draws as a simple polygon."""
    if len(points) < 3:
        return list(points)
    coords = np.array([[p.x1, p.x2] for p in points], dtype=float)
    centroid = coords.mean(axis=0)
    angles = np.arctan2(coords[:, 1] - centroid[1], coords[:, 0] - centroid[0])
    order = np.argsort(angles, kind="stable")
    return [points[int(idx)] for idx in order]
