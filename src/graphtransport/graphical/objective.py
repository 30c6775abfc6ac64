from __future__ import annotations

from typing import List, Optional, Sequence

from ..schemas import ObjectiveFunction, Point, Sense


def evaluate(objective: ObjectiveFunction, point: Point) -> float:
    return objective.evaluate(point.x1, point.x2)


def evaluate_all(objective: ObjectiveFunction, points: Sequence[Point]) -> List[Point]:
    """Return copies of the points carrying their objective value."""
    return [point.model_copy(update={"objective_value": evaluate(objective, point)}) for point in points]


def find_optimum(points: Sequence[Point], sense: Sense) -> Optional[Point]:
    # Strict comparison keeps the first point on ties.
    if not points:
        return None
    best = points[0]
    for point in points:
        if sense == "max":
            if point.objective_value > best.objective_value:
                best = point
        elif point.objective_value < best.objective_value:
            best = point
    return best


def optimal_value(points: Sequence[Point], sense: Sense) -> float:
    best = find_optimum(points, sense)
    return best.objective_value if best is not None else 0.0


def is_multiple_optimum(points: Sequence[Point], sense: Sense, tol: float = 1e-10) -> bool:
    """True when two or more points reach the optimal value, i.e. a whole edge is optimal."""
    if len(points) < 2:
        return False
    target = optimal_value(points, sense)
    matches = 0
    for point in points:
        if abs(point.objective_value - target) < tol:
            matches += 1
            if matches > 1:
                return True
    return False
