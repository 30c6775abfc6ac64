from __future__ import annotations

import math
from typing import Callable, Dict, Optional

from .balance import balance
from .least_cost import least_cost
from .northwest import northwest_corner
from .vogel import vogel
from ..errors import InvalidProblemError
from ..schemas import MethodComparison, SolveOptions, TransportMethod, TransportProblem, TransportSolution

Strategy = Callable[[TransportProblem, Optional[SolveOptions]], TransportSolution]

METHODS: Dict[TransportMethod, Strategy] = {
    "northwest_corner": northwest_corner,
    "least_cost": least_cost,
    "vogel": vogel,
}


def solve_transportation(
    problem: TransportProblem,
    method: TransportMethod,
    opts: Optional[SolveOptions] = None,
) -> TransportSolution:
    """Validate, balance and build an initial basic feasible solution with ``method``."""
    opts = opts or SolveOptions()
    if method not in METHODS:
        raise InvalidProblemError(f"Unknown initial-solution method '{method}'.")
    validate_transport_problem(problem)
    return METHODS[method](balance(problem, opts), opts)


def compare_all_methods(problem: TransportProblem, opts: Optional[SolveOptions] = None) -> MethodComparison:
    opts = opts or SolveOptions()
    validate_transport_problem(problem)
    balanced = balance(problem, opts)
    return MethodComparison(
        northwest_corner=northwest_corner(balanced, opts),
        least_cost=least_cost(balanced, opts),
        vogel=vogel(balanced, opts),
    )


def validate_transport_problem(problem: TransportProblem) -> None:
    m = len(problem.supply)
    n = len(problem.demand)
    if m == 0:
        raise InvalidProblemError("At least one source (supply entry) is required.")
    if n == 0:
        raise InvalidProblemError("At least one destination (demand entry) is required.")
    if not problem.cost:
        raise InvalidProblemError("Cost matrix is required.")
    if len(problem.cost) != m:
        raise InvalidProblemError(f"Cost matrix must have {m} rows (one per source), got {len(problem.cost)}.")
    for i, row in enumerate(problem.cost):
        if len(row) != n:
            raise InvalidProblemError(f"Cost row {i} must have {n} columns (one per destination), got {len(row)}.")
        for j, value in enumerate(row):
            if not math.isfinite(value) or value < 0:
                raise InvalidProblemError(f"Cost at ({i}, {j}) must be a finite non-negative number.")

    if problem.source_names is not None and len(problem.source_names) != m:
        raise InvalidProblemError(f"Expected {m} source names or none.")
    if problem.destination_names is not None and len(problem.destination_names) != n:
        raise InvalidProblemError(f"Expected {n} destination names or none.")

    for i, value in enumerate(problem.supply):
        if not math.isfinite(value) or value < 0:
            raise InvalidProblemError(f"Supply of source {i} must be a finite non-negative number.")
    for j, value in enumerate(problem.demand):
        if not math.isfinite(value) or value < 0:
            raise InvalidProblemError(f"Demand of destination {j} must be a finite non-negative number.")

    if problem.total_supply == 0:
        raise InvalidProblemError("Total supply must be greater than zero.")
    if problem.total_demand == 0:
        raise InvalidProblemError("Total demand must be greater than zero.")
