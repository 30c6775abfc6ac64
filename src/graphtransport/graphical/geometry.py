from __future__ import annotations

from typing import List, Optional, Sequence

from ..schemas import Constraint, Point, SolveOptions


def intersect(first: Constraint, second: Constraint, tol: float = 1e-10) -> Optional[Point]:
    """
    Solve the 2x2 system formed by two constraint boundaries with Cramer's rule:
      a1*x1 + b1*x2 = c1
      a2*x1 + b2*x2 = c2
    Returns None when the lines are parallel or coincident.
    """

    a1, b1, c1 = first.coef_x1, first.coef_x2, first.rhs
    a2, b2, c2 = second.coef_x1, second.coef_x2, second.rhs

    det = a1 * b2 - a2 * b1
    if abs(det) < tol:
        return None

    x1 = (c1 * b2 - c2 * b1) / det
    x2 = (a1 * c2 - a2 * c1) / det
    return Point(x1=x1, x2=x2)


def enumerate_candidates(constraints: Sequence[Constraint], opts: Optional[SolveOptions] = None) -> List[Point]:
    """
    Candidate vertices in a fixed order: pairwise intersections, then each constraint's
    intercepts with the x1 and x2 axes (non-negative side only), then the origin.
    """

    opts = opts or SolveOptions()
    candidates: List[Point] = []

    for i in range(len(constraints)):
        for j in range(i + 1, len(constraints)):
            point = intersect(constraints[i], constraints[j], opts.tol)
            if point is not None:
                candidates.append(point)

    for cons in constraints:
        on_x1_axis = cons.axis_x1_intercept(opts.zero_tol)
        if on_x1_axis is not None and on_x1_axis.x1 >= -opts.tol:
            candidates.append(on_x1_axis)
        on_x2_axis = cons.axis_x2_intercept(opts.zero_tol)
        if on_x2_axis is not None and on_x2_axis.x2 >= -opts.tol:
            candidates.append(on_x2_axis)

    candidates.append(Point(x1=0.0, x2=0.0))
    return candidates


def deduplicate(points: Sequence[Point], tol: float = 1e-10) -> List[Point]:
    unique: List[Point] = []
    for point in points:
        if not any(point.is_close(existing, tol) for existing in unique):
            unique.append(point)
    return unique
