from graphtransport.graphical.objective import evaluate, evaluate_all, find_optimum, is_multiple_optimum
from graphtransport.schemas import ObjectiveFunction, Point


def make_points(*values):
    return [Point(x1=float(k), x2=0.0, objective_value=v) for k, v in enumerate(values)]


def test_evaluate_and_evaluate_all_leave_inputs_untouched():
    objective = ObjectiveFunction(coef_x1=3, coef_x2=5, sense="max")
    points = [Point(x1=2, x2=6), Point(x1=4, x2=0)]

    assert evaluate(objective, points[0]) == 36
    evaluated = evaluate_all(objective, points)
    assert [p.objective_value for p in evaluated] == [36, 12]
    assert all(p.objective_value is None for p in points)


def test_find_optimum_max_and_min():
    points = make_points(5.0, 9.0, 1.0)

    assert find_optimum(points, "max").x1 == 1.0
    assert find_optimum(points, "min").x1 == 2.0
    assert find_optimum([], "max") is None


def test_find_optimum_keeps_first_on_ties():
    points = make_points(3.0, 7.0, 7.0)

    assert find_optimum(points, "max").x1 == 1.0


def test_multiple_optimum_detection():
    assert is_multiple_optimum(make_points(20.0, 20.0 + 1e-12, 4.0), "max") is True
    assert is_multiple_optimum(make_points(20.0, 19.0, 4.0), "max") is False
    assert is_multiple_optimum(make_points(0.0, 0.0, 4.0), "min") is True
    assert is_multiple_optimum(make_points(4.0), "max") is False
