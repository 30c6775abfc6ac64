"""Graphical method for two-variable linear programs."""

from .geometry import deduplicate, enumerate_candidates, intersect
from .objective import evaluate, evaluate_all, find_optimum, is_multiple_optimum
from .parser import parse_graphical_spec
from .solver import filter_feasible, is_unbounded, order_counterclockwise, solve_graphical

__all__ = [
    "intersect",
    "enumerate_candidates",
    "deduplicate",
    "evaluate",
    "evaluate_all",
    "find_optimum",
    "is_multiple_optimum",
    "filter_feasible",
    "is_unbounded",
    "order_counterclockwise",
    "solve_graphical",
    "parse_graphical_spec",
]
