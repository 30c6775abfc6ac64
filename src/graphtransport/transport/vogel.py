from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .utils import build_solution, working_arrays
from ..schemas import SolveOptions, TransportProblem, TransportSolution

_NO_PENALTY = -1.0


def vogel(problem: TransportProblem, opts: Optional[SolveOptions] = None) -> TransportSolution:
    """
    Vogel's approximation method.

    Each round computes a penalty for every open row and column (gap between its two
    cheapest open cells, or the single remaining cost when only one is left), takes the
    line with the largest penalty (rows before columns, first found on ties) and fills its
    cheapest open cell. Stops after m + n - 1 allocations or when no penalty remains.
    """

    opts = opts or SolveOptions()
    supply, demand, cost, allocations = working_arrays(problem)
    m, n = allocations.shape
    row_done = np.zeros(m, dtype=bool)
    col_done = np.zeros(n, dtype=bool)

    assigned = 0
    expected = m + n - 1
    while assigned < expected:
        row_penalties = _penalties(cost, row_done, col_done)
        col_penalties = _penalties(cost.T, col_done, row_done)

        line = _largest_penalty(row_penalties, col_penalties, row_done, col_done)
        if line is None:
            break
        cell = _cheapest_cell_on_line(cost, line, row_done, col_done)
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

    return build_solution(allocations, cost, "vogel")


def _penalties(cost: np.ndarray, line_done: np.ndarray, cross_done: np.ndarray) -> np.ndarray:
    """Penalty per row of ``cost``; pass ``cost.T`` with the flags swapped for columns."""
    penalties = np.full(cost.shape[0], _NO_PENALTY)
    for k in range(cost.shape[0]):
        if line_done[k]:
            continue
        available = np.sort(cost[k, ~cross_done])
        if available.size >= 2:
            penalties[k] = available[1] - available[0]
        elif available.size == 1:
            penalties[k] = available[0]
    return penalties


def _largest_penalty(
    row_penalties: np.ndarray,
    col_penalties: np.ndarray,
    row_done: np.ndarray,
    col_done: np.ndarray,
) -> Optional[Tuple[bool, int]]:
    best_value = _NO_PENALTY
    best: Optional[Tuple[bool, int]] = None
    for i, value in enumerate(row_penalties):
        if not row_done[i] and value > best_value:
            best_value = value
            best = (True, i)
    for j, value in enumerate(col_penalties):
        if not col_done[j] and value > best_value:
            best_value = value
            best = (False, j)
    return best


def _cheapest_cell_on_line(
    cost: np.ndarray,
    line: Tuple[bool, int],
    row_done: np.ndarray,
    col_done: np.ndarray,
) -> Optional[Tuple[int, int]]:
    is_row, index = line
    best: Optional[Tuple[int, int]] = None
    best_cost = np.inf
    if is_row:
        for j in range(cost.shape[1]):
            if not col_done[j] and cost[index, j] < best_cost:
                best_cost = cost[index, j]
                best = (index, j)
    else:
        for i in range(cost.shape[0]):
            if not row_done[i] and cost[i, index] < best_cost:
                best_cost = cost[i, index]
                best = (i, index)
    return best
