from __future__ import annotations

import math
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Sense = Literal["max", "min"]
Cmp = Literal["<=", ">=", "=="]
SolutionKind = Literal["unique", "multiple", "infeasible", "unbounded"]
TransportMethod = Literal["northwest_corner", "least_cost", "vogel"]
BalanceKind = Literal["balanced", "excess_supply", "excess_demand"]


class SolveOptions(BaseModel):
    tol: float = 1e-10
    zero_tol: float = 1e-6
    min_constraints: int = 1


class Point(BaseModel):
    """
    A candidate vertex. Model equality is exact over every field; two points count as the
    same vertex when `is_close` holds, which is what deduplication uses.
    """

    model_config = ConfigDict(frozen=True)

    x1: float
    x2: float
    objective_value: Optional[float] = None
    is_feasible: bool = False

    def is_close(self, other: "Point", tol: float = 1e-10) -> bool:
        return abs(self.x1 - other.x1) < tol and abs(self.x2 - other.x2) < tol


class Constraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    coef_x1: float
    coef_x2: float
    cmp: Cmp
    rhs: float

    def lhs(self, x1: float, x2: float) -> float:
        return self.coef_x1 * x1 + self.coef_x2 * x2

    def is_satisfied(self, x1: float, x2: float, tol: float = 1e-6) -> bool:
        value = self.lhs(x1, x2)
        if self.cmp == "<=":
            return value <= self.rhs + tol
        if self.cmp == ">=":
            return value >= self.rhs - tol
        return abs(value - self.rhs) < tol

    def is_active(self, x1: float, x2: float, tol: float = 1e-6) -> bool:
        return abs(self.lhs(x1, x2) - self.rhs) < tol

    def axis_x1_intercept(self, tol: float = 1e-6) -> Optional[Point]:
        """Where the boundary line meets the x1 axis (x2 = 0), or None when parallel to it."""
        if abs(self.coef_x1) < tol:
            return None
        return Point(x1=self.rhs / self.coef_x1, x2=0.0)

    def axis_x2_intercept(self, tol: float = 1e-6) -> Optional[Point]:
        """Where the boundary line meets the x2 axis (x1 = 0), or None when parallel to it."""
        if abs(self.coef_x2) < tol:
            return None
        return Point(x1=0.0, x2=self.rhs / self.coef_x2)

    def is_valid(self, tol: float = 1e-6) -> bool:
        return abs(self.coef_x1) > tol or abs(self.coef_x2) > tol

    def slope(self, tol: float = 1e-6) -> float:
        if abs(self.coef_x2) < tol:
            raise ArithmeticError("Coefficient of x2 is zero; the boundary line is vertical and has no slope.")
        return -self.coef_x1 / self.coef_x2


class ObjectiveFunction(BaseModel):
    model_config = ConfigDict(frozen=True)

    coef_x1: float
    coef_x2: float
    sense: Sense

    def evaluate(self, x1: float, x2: float) -> float:
        return self.coef_x1 * x1 + self.coef_x2 * x2

    def is_valid(self, tol: float = 1e-10) -> bool:
        return abs(self.coef_x1) > tol or abs(self.coef_x2) > tol

    def slope(self, tol: float = 1e-10) -> float:
        if abs(self.coef_x2) < tol:
            raise ArithmeticError("Coefficient of x2 is zero; the objective line has no slope.")
        return -self.coef_x1 / self.coef_x2


class LPProblem(BaseModel):
    model_config = ConfigDict(frozen=True)

    objective: ObjectiveFunction
    constraints: List[Constraint] = Field(default_factory=list)
    non_negativity: bool = True


class GraphicalResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    optimum: Optional[Point]
    vertices: List[Point]
    feasible_region: List[Point]
    constraints: List[Constraint]
    solution_kind: SolutionKind

    @property
    def has_solution(self) -> bool:
        return self.optimum is not None and self.solution_kind in ("unique", "multiple")

    @property
    def optimal_value(self) -> Optional[float]:
        if self.optimum is None:
            return None
        return self.optimum.objective_value


class TransportProblem(BaseModel):
    model_config = ConfigDict(frozen=True)

    supply: List[float]
    demand: List[float]
    cost: List[List[float]]
    source_names: Optional[List[str]] = None
    destination_names: Optional[List[str]] = None
    has_dummy: bool = False

    @property
    def total_supply(self) -> float:
        return math.fsum(self.supply)

    @property
    def total_demand(self) -> float:
        return math.fsum(self.demand)

    @property
    def imbalance(self) -> float:
        return self.total_supply - self.total_demand

    def is_balanced(self, tol: float = 1e-6) -> bool:
        return abs(self.imbalance) < tol

    def balance_kind(self, tol: float = 1e-6) -> BalanceKind:
        diff = self.imbalance
        if abs(diff) < tol:
            return "balanced"
        return "excess_supply" if diff > 0 else "excess_demand"


class Cell(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    col: int
    cost: float
    allocation: float = 0.0

    @property
    def is_basic(self) -> bool:
        return abs(self.allocation) > 1e-6

    @property
    def total_cost(self) -> float:
        return self.cost * self.allocation


class TransportSolution(BaseModel):
    model_config = ConfigDict(frozen=True)

    allocations: List[List[float]]
    total_cost: float
    method: TransportMethod

    @property
    def expected_basic_cells(self) -> int:
        if not self.allocations:
            return 0
        return len(self.allocations) + len(self.allocations[0]) - 1

    def basic_cell_count(self, tol: float = 1e-6) -> int:
        return sum(1 for row in self.allocations for value in row if abs(value) > tol)

    def is_degenerate(self, tol: float = 1e-6) -> bool:
        return self.basic_cell_count(tol) != self.expected_basic_cells

    def cells(self, problem: TransportProblem) -> List[Cell]:
        return [
            Cell(row=i, col=j, cost=problem.cost[i][j], allocation=value)
            for i, row in enumerate(self.allocations)
            for j, value in enumerate(row)
        ]


class MethodComparison(BaseModel):
    model_config = ConfigDict(frozen=True)

    northwest_corner: TransportSolution
    least_cost: TransportSolution
    vogel: TransportSolution

    def best(self) -> TransportMethod:
        candidates = [self.northwest_corner, self.least_cost, self.vogel]
        return min(candidates, key=lambda solution: solution.total_cost).method
