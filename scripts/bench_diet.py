#!/usr/bin/env python3
import time

from diet_optimizer.data import REFERENCE_FOODS, REQUIREMENT_PRESETS, generate_random_instance
from diet_optimizer.lp.reference import solve_with_highs
from diet_optimizer.lp.simplex import solve
from diet_optimizer.schemas import SolveOptions


def main() -> None:
    opts = SolveOptions(record_snapshots=False)
    cases = [(f"preset-{name}", REFERENCE_FOODS, reqs) for name, reqs in REQUIREMENT_PRESETS.items()]
    for seed in range(5):
        items, reqs = generate_random_instance(12, 5, seed)
        cases.append((f"random-{seed}", items, reqs))

    print("name,status,total_cost,highs_cost,iterations,time_ms")
    for name, items, reqs in cases:
        start = time.perf_counter()
        solution = solve(items, reqs, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        reference = solve_with_highs(items, reqs)
        print(
            f"{name},{solution.status},{solution.total_cost},{reference.total_cost},"
            f"{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
