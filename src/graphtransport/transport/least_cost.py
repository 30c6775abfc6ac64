from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .utils import build_solution, working_arrays
from ..schemas import SolveOptions, TransportProblem, TransportSolution


def least_cost(problem: TransportProblem, opts: Optional[SolveOptions] = None) -> TransportSolution:
    """
    Repeatedly fill the cheapest cell whose row and column are both still open.
    Ties go to the first cell in row-major order.
    """

    opts = opts or SolveOptions()
    supply, demand, cost, allocations = working_arrays(problem)
    m, n = allocations.shape
    row_done = np.zeros(m, dtype=bool)
    col_done = np.zeros(n, dtype=bool)

    assigned = 0
    expected = m + n - 1
    while assigned < expected:
        cell = _cheapest_open_cell(cost, row_done, col_done)
        if cell is None:
            break
        i, j = cell

        amount = min(supply[i], demand[j])
        allocations[i, j] = amount
        supply[i] -= amount
        demand[j] -= amount

        if abs(supply[i]) < opts.zero_tol:
            row_done[i] = True
        if abs(demand[j]) < opts.zero_tol:
            col_done[j] = True
        assigned += 1

    return build_solution(allocations, cost, "least_cost")


def _cheapest_open_cell(cost: np.ndarray, row_done: np.ndarray, col_done: np.ndarray) -> Optional[Tuple[int, int]]:
    best: Optional[Tuple[int, int]] = None
    best_cost = np.inf
    open_cols: List[int] = [j for j in range(cost.shape[1]) if not col_done[j]]
    for i in range(cost.shape[0]):
        if row_done[i]:
            continue
        for j in open_cols:
            if cost[i, j] < best_cost:
                best_cost = cost[i, j]
                best = (i, j)
    return best
