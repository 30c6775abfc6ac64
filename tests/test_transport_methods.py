import json
from pathlib import Path

import pytest

from graphtransport.errors import InvalidProblemError
from graphtransport.schemas import TransportProblem
from graphtransport.transport import METHODS, compare_all_methods, solve_transportation
from graphtransport.transport.least_cost import least_cost
from graphtransport.transport.northwest import northwest_corner
from graphtransport.transport.vogel import vogel


def load_example(name: str) -> TransportProblem:
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    return TransportProblem.model_validate(data)


def make_classic() -> TransportProblem:
    return TransportProblem(
        supply=[20, 30, 25],
        demand=[10, 25, 40],
        cost=[[8, 6, 10], [9, 12, 13], [14, 9, 16]],
    )


def make_non_degenerate() -> TransportProblem:
    # No proper subset of supplies sums to a subset of demands.
    return TransportProblem(
        supply=[7, 9, 18],
        demand=[5, 8, 21],
        cost=[[4, 8, 1], [6, 2, 5], [3, 7, 9]],
    )


def test_northwest_corner_sweep():
    solution = northwest_corner(make_classic())

    assert solution.allocations == [
        [10.0, 10.0, 0.0],
        [0.0, 15.0, 15.0],
        [0.0, 0.0, 25.0],
    ]
    assert solution.total_cost == pytest.approx(915.0)
    assert solution.method == "northwest_corner"


def test_least_cost_classic():
    solution = least_cost(make_classic())

    assert solution.allocations == [
        [0.0, 20.0, 0.0],
        [10.0, 0.0, 20.0],
        [0.0, 5.0, 20.0],
    ]
    assert solution.total_cost == pytest.approx(835.0)


def test_vogel_classic_is_degenerate_but_terminates():
    solution = vogel(make_classic())

    assert solution.allocations == [
        [0.0, 0.0, 20.0],
        [10.0, 0.0, 20.0],
        [0.0, 25.0, 0.0],
    ]
    assert solution.total_cost == pytest.approx(775.0)
    assert solution.basic_cell_count() == 4
    assert solution.is_degenerate()


def test_textbook_costs():
    problem = load_example("transport_textbook.json")

    assert solve_transportation(problem, "northwest_corner").total_cost == pytest.approx(1015.0)
    assert solve_transportation(problem, "least_cost").total_cost == pytest.approx(814.0)
    assert solve_transportation(problem, "vogel").total_cost == pytest.approx(779.0)


def test_textbook_vogel_allocations():
    solution = solve_transportation(load_example("transport_textbook.json"), "vogel")

    assert solution.allocations == [
        [5.0, 0.0, 0.0, 2.0],
        [0.0, 0.0, 7.0, 2.0],
        [0.0, 8.0, 0.0, 10.0],
    ]


@pytest.mark.parametrize("method", list(METHODS))
def test_basic_cell_count_is_m_plus_n_minus_one(method):
    for problem in (make_non_degenerate(), load_example("transport_textbook.json")):
        solution = solve_transportation(problem, method)
        m, n = len(problem.supply), len(problem.demand)

        assert solution.basic_cell_count() == m + n - 1
        assert not solution.is_degenerate()


@pytest.mark.parametrize("method", list(METHODS))
def test_row_and_column_sums_match_supply_and_demand(method):
    problem = load_example("transport_textbook.json")
    solution = solve_transportation(problem, method)

    for i, row in enumerate(solution.allocations):
        assert sum(row) == pytest.approx(problem.supply[i])
    for j in range(len(problem.demand)):
        assert sum(row[j] for row in solution.allocations) == pytest.approx(problem.demand[j])


@pytest.mark.parametrize("method", list(METHODS))
def test_unbalanced_problem_gets_dummy_column(method):
    problem = TransportProblem(supply=[20, 30, 25], demand=[10, 25, 30], cost=[[8, 6, 10], [9, 12, 13], [14, 9, 16]])
    solution = solve_transportation(problem, method)

    assert all(len(row) == 4 for row in solution.allocations)
    assert sum(row[3] for row in solution.allocations) == pytest.approx(10.0)


@pytest.mark.parametrize("method", list(METHODS))
def test_input_arrays_are_not_mutated(method):
    supply = [20.0, 30.0, 25.0]
    demand = [10.0, 25.0, 40.0]
    cost = [[8.0, 6.0, 10.0], [9.0, 12.0, 13.0], [14.0, 9.0, 16.0]]
    problem = TransportProblem(supply=supply, demand=demand, cost=cost)

    solve_transportation(problem, method)

    assert problem.supply == [20.0, 30.0, 25.0]
    assert problem.demand == [10.0, 25.0, 40.0]
    assert problem.cost[0] == [8.0, 6.0, 10.0]


def test_vogel_never_worse_than_northwest_on_fixed_instances():
    for problem in (make_classic(), make_non_degenerate(), load_example("transport_textbook.json")):
        comparison = compare_all_methods(problem)

        assert comparison.vogel.total_cost <= comparison.northwest_corner.total_cost


def test_compare_all_methods_reports_best():
    comparison = compare_all_methods(load_example("transport_textbook.json"))

    assert comparison.northwest_corner.method == "northwest_corner"
    assert comparison.least_cost.method == "least_cost"
    assert comparison.best() == "vogel"


def test_single_source_single_destination():
    solution = solve_transportation(TransportProblem(supply=[5], demand=[5], cost=[[3]]), "vogel")

    assert solution.allocations == [[5.0]]
    assert solution.total_cost == pytest.approx(15.0)


def test_cells_expose_basic_state():
    problem = make_classic()
    cells = northwest_corner(problem).cells(problem)

    basic = [(c.row, c.col) for c in cells if c.is_basic]
    assert basic == [(0, 0), (0, 1), (1, 1), (1, 2), (2, 2)]
    assert sum(c.total_cost for c in cells) == pytest.approx(915.0)


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"supply": [], "demand": [5], "cost": []}, "source"),
        ({"supply": [5], "demand": [], "cost": [[]]}, "destination"),
        ({"supply": [5, 5], "demand": [10], "cost": [[1]]}, "rows"),
        ({"supply": [5], "demand": [3, 2], "cost": [[1]]}, "columns"),
        ({"supply": [-5, 10], "demand": [5], "cost": [[1], [2]]}, "Supply"),
        ({"supply": [5], "demand": [-1, 6], "cost": [[1, 2]]}, "Demand"),
        ({"supply": [0, 0], "demand": [5], "cost": [[1], [2]]}, "Total supply"),
        ({"supply": [5], "demand": [0], "cost": [[1]]}, "Total demand"),
        ({"supply": [5], "demand": [5], "cost": [[-1]]}, "Cost"),
        ({"supply": [5], "demand": [5], "cost": [[1]], "source_names": ["A", "B"]}, "source names"),
    ],
)
def test_invalid_problems_are_rejected(kwargs, message):
    with pytest.raises(InvalidProblemError, match=message):
        solve_transportation(TransportProblem(**kwargs), "least_cost")


def test_unknown_method_is_rejected():
    with pytest.raises(InvalidProblemError):
        solve_transportation(make_classic(), "modi")  # type: ignore[arg-type]
