import pytest

from graphtransport.graphical.geometry import deduplicate, enumerate_candidates, intersect
from graphtransport.schemas import Constraint, Point


def make_constraint(a: float, b: float, cmp: str, rhs: float) -> Constraint:
    return Constraint(coef_x1=a, coef_x2=b, cmp=cmp, rhs=rhs)


def test_intersect_uses_cramers_rule():
    point = intersect(make_constraint(2, 3, "==", 12), make_constraint(1, -1, "==", 1))

    assert point is not None
    assert point.x1 == pytest.approx(3.0)
    assert point.x2 == pytest.approx(2.0)
    assert point.is_feasible is False
    assert point.objective_value is None


def test_parallel_lines_have_no_intersection():
    assert intersect(make_constraint(1, 1, "==", 4), make_constraint(2, 2, "==", 10)) is None


def test_coincident_lines_have_no_intersection():
    assert intersect(make_constraint(1, 1, "<=", 4), make_constraint(2, 2, ">=", 8)) is None


def test_candidates_follow_pairs_axes_origin_order():
    constraints = [make_constraint(1, 1, "<=", 4), make_constraint(1, -1, "<=", 2)]
    candidates = enumerate_candidates(constraints)

    coords = [(p.x1, p.x2) for p in candidates]
    assert coords[0] == pytest.approx((3.0, 1.0))
    # x1 + x2 = 4 meets both axes, x1 - x2 = 2 only meets x2 = 0 on the non-negative side
    assert coords[1:4] == [(4.0, 0.0), (0.0, 4.0), (2.0, 0.0)]
    assert coords[-1] == (0.0, 0.0)
    assert len(coords) == 5


def test_axis_parallel_constraint_contributes_one_axis_point():
    candidates = enumerate_candidates([make_constraint(1, 0, "<=", 4)])

    assert [(p.x1, p.x2) for p in candidates] == [(4.0, 0.0), (0.0, 0.0)]


def test_negative_axis_intercepts_are_skipped():
    candidates = enumerate_candidates([make_constraint(1, 1, ">=", -3)])

    assert [(p.x1, p.x2) for p in candidates] == [(0.0, 0.0)]


def test_deduplicate_collapses_points_within_tolerance():
    points = [Point(x1=1.0, x2=2.0), Point(x1=1.0 + 5e-11, x2=2.0 - 5e-11), Point(x1=1.0 + 1e-6, x2=2.0)]
    unique = deduplicate(points)

    assert len(unique) == 2
    assert unique[0] is points[0]
    assert unique[1].x1 == pytest.approx(1.0 + 1e-6, abs=1e-12)


def test_deduplicate_keeps_first_occurrence_order():
    points = [Point(x1=0, x2=0), Point(x1=4, x2=0), Point(x1=0, x2=0), Point(x1=0, x2=6)]

    assert [(p.x1, p.x2) for p in deduplicate(points)] == [(0, 0), (4, 0), (0, 6)]


def test_point_identity_goes_through_is_close():
    plain = Point(x1=1.0, x2=2.0)
    evaluated = Point(x1=1.0 + 5e-11, x2=2.0, objective_value=7.0, is_feasible=True)

    assert plain != evaluated
    assert plain.is_close(evaluated)
    assert not plain.is_close(Point(x1=1.0 + 1e-9, x2=2.0))
    assert deduplicate([plain, evaluated]) == [plain]
