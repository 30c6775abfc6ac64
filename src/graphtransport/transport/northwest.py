from __future__ import annotations

from typing import Optional

from .utils import build_solution, working_arrays
from ..schemas import SolveOptions, TransportProblem, TransportSolution


def northwest_corner(problem: TransportProblem, opts: Optional[SolveOptions] = None) -> TransportSolution:
    """Sweep from the top-left cell, moving down on exhausted supply and right on exhausted demand."""
    opts = opts or SolveOptions()
    supply, demand, cost, allocations = working_arrays(problem)
    m, n = allocations.shape

    i = j = 0
    while i < m and j < n:
        amount = min(supply[i], demand[j])
        allocations[i, j] = amount
        supply[i] -= amount
        demand[j] -= amount

        # Both pointers move on an exact tie.
        row_done = abs(supply[i]) < opts.zero_tol
        col_done = abs(demand[j]) < opts.zero_tol
        if row_done:
            i += 1
        if col_done:
            j += 1

    return build_solution(allocations, cost, "northwest_corner")
