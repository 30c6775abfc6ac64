#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import Optional

from graphtransport.schemas import TransportProblem


def generate_random_transport(
    num_sources: int,
    num_destinations: int,
    seed: Optional[int] = None,
    balanced: bool = True,
) -> TransportProblem:
    rng = random.Random(seed)
    supply = [float(rng.randint(10, 60)) for _ in range(num_sources)]
    total = sum(supply)
    if not balanced:
        total += rng.choice([-1, 1]) * rng.randint(1, 10)

    # Split the total into integer demands that add up exactly.
    cuts = sorted(rng.sample(range(1, int(total)), num_destinations - 1))
    bounds = [0] + cuts + [int(total)]
    demand = [float(bounds[k + 1] - bounds[k]) for k in range(num_destinations)]

    cost = [[float(rng.randint(1, 30)) for _ in range(num_destinations)] for _ in range(num_sources)]
    return TransportProblem(supply=supply, demand=demand, cost=cost)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random transportation problem instances.")
    parser.add_argument("--sources", type=int, default=3, help="Number of sources")
    parser.add_argument("--destinations", type=int, default=4, help="Number of destinations")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--unbalanced", action="store_true", help="Perturb total demand")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    instances = [
        generate_random_transport(
            args.sources,
            args.destinations,
            (args.seed or 0) + idx,
            balanced=not args.unbalanced,
        )
        for idx in range(args.count)
    ]
    payload = [instance.model_dump() for instance in instances]

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
