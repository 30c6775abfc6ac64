from __future__ import annotations

from typing import Tuple

import numpy as np

from ..schemas import TransportMethod, TransportProblem, TransportSolution


def working_arrays(problem: TransportProblem) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Fresh copies of supply, demand and cost plus an empty allocation matrix."""
    supply = np.array(problem.supply, dtype=float)
    demand = np.array(problem.demand, dtype=float)
    cost = np.array(problem.cost, dtype=float).reshape(len(supply), len(demand))
    allocations = np.zeros((len(supply), len(demand)), dtype=float)
    return supply, demand, cost, allocations


def build_solution(allocations: np.ndarray, cost: np.ndarray, method: TransportMethod) -> TransportSolution:
    total = float(np.sum(allocations * cost))
    return TransportSolution(allocations=allocations.tolist(), total_cost=total, method=method)
