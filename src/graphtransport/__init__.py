"""Graphical LP and transportation-problem solvers exposed over MCP."""

from .errors import InvalidProblemError
from .graphical import solve_graphical
from .transport import compare_all_methods, solve_transportation

__all__ = ["InvalidProblemError", "solve_graphical", "solve_transportation", "compare_all_methods"]
