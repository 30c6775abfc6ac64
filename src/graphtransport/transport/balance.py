from __future__ import annotations

from typing import Optional

from ..schemas import SolveOptions, TransportProblem

DUMMY_NAME = "Dummy"
DUMMY_COST = 0.0


def balance(problem: TransportProblem, opts: Optional[SolveOptions] = None) -> TransportProblem:
    """
    Equalise total supply and demand with a zero-cost dummy destination (excess supply)
    or dummy source (excess demand). Balanced input is returned as is.
    """

    opts = opts or SolveOptions()
    if problem.is_balanced(opts.zero_tol):
        return problem

    excess = problem.imbalance
    supply = list(problem.supply)
    demand = list(problem.demand)
    cost = [list(row) for row in problem.cost]
    source_names = list(problem.source_names) if problem.source_names is not None else None
    destination_names = list(problem.destination_names) if problem.destination_names is not None else None

    if excess > 0:
        demand.append(excess)
        for row in cost:
            row.append(DUMMY_COST)
        if destination_names is not None:
            destination_names.append(DUMMY_NAME)
    else:
        supply.append(-excess)
        cost.append([DUMMY_COST] * len(demand))
        if source_names is not None:
            source_names.append(DUMMY_NAME)

    return TransportProblem(
        supply=supply,
        demand=demand,
        cost=cost,
        source_names=source_names,
        destination_names=destination_names,
        has_dummy=True,
    )
