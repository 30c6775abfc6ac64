#!/usr/bin/env python3
import json
import time
from pathlib import Path

from graphtransport.schemas import TransportProblem
from graphtransport.transport import METHODS, solve_transportation
from scripts.generate_instances import generate_random_transport


def load_example(name: str) -> TransportProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return TransportProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    cases = [("examples/transport_textbook.json", load_example("transport_textbook.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_transport(4, 5, seed)))
    cases.append(("random-unbalanced", generate_random_transport(4, 5, 99, balanced=False)))

    print("name,method,total_cost,basic_cells,expected_cells,time_ms")
    for name, problem in cases:
        for method in METHODS:
            start = time.perf_counter()
            solution = solve_transportation(problem, method)
            elapsed_ms = (time.perf_counter() - start) * 1000
            print(
                f"{name},{method},{solution.total_cost},{solution.basic_cell_count()},"
                f"{solution.expected_basic_cells},{elapsed_ms:.2f}"
            )


if __name__ == "__main__":
    main()
