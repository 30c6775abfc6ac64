"""Initial basic feasible solutions for the transportation problem."""

from .balance import balance
from .least_cost import least_cost
from .methods import METHODS, compare_all_methods, solve_transportation, validate_transport_problem
from .northwest import northwest_corner
from .vogel import vogel

__all__ = [
    "balance",
    "northwest_corner",
    "least_cost",
    "vogel",
    "METHODS",
    "solve_transportation",
    "compare_all_methods",
    "validate_transport_problem",
]
