from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from .data import REFERENCE_FOODS, REQUIREMENT_PRESETS, parse_food_table
from .lp.sensitivity import sensitivity
from .lp.simplex import solve
from .schemas import DietSolution, Item, RequirementSet, SolveOptions, TableauSnapshot

RULE = "=" * 40


def format_snapshot(snapshot: TableauSnapshot) -> str:
    if snapshot.pivot_row is None:
        header = "Initial Tableau:"
    else:
        header = (
            f"Iteration {snapshot.iteration}: pivot at row {snapshot.pivot_row}, "
            f"column {snapshot.pivot_col}"
        )
    lines = [header]
    last = len(snapshot.matrix) - 1
    for idx, row in enumerate(snapshot.matrix):
        cells = " ".join(f"{value:8.3f}" for value in row)
        if idx < last:
            cells += f" | Basis: {snapshot.basis[idx]}"
        lines.append(cells)
    return "\n".join(lines)


def format_report(
    solution: DietSolution, items: Sequence[Item], requirements: RequirementSet
) -> str:
    if solution.amounts is None:
        return f"\nNo feasible solution found! ({solution.status}: {solution.message})\n"

    lines = ["", RULE, "      OPTIMAL DIET SOLUTION", RULE]
    if solution.message:
        lines.append(f"\nNote: {solution.message}")
    lines.append(f"\nMinimum Daily Cost: ${solution.total_cost:.2f}")
    lines.append("\nFood Quantities:")
    lines.append("-" * 40)
    for item, amount in zip(items, solution.amounts):
        if amount > 1e-6:
            lines.append(f"{item.name:<20}: {amount:8.2f} units (${amount * item.unit_cost:.2f})")

    lines += ["", RULE, "      SHADOW PRICES (Dual Values)", RULE]
    lines.append("\nMarginal value of each constraint:")
    lines.append("-" * 40)
    for idx, name in enumerate(requirements.nutrient_names()):
        price = (solution.shadow_prices or {}).get(idx, 0.0)
        lines.append(f"{name:<20}: ${price:.6f} per unit")

    lines += ["", RULE, "      SENSITIVITY ANALYSIS", RULE]
    for entry in sensitivity(solution, items):
        lines.append(
            f"\n{entry.item_name} (Current: ${entry.current_cost:.2f}, Quantity: {entry.quantity:.2f})"
        )
        lines.append("Price Change | New Price | Cost Impact")
        lines.append("-" * 40)
        for point in entry.sweep:
            lines.append(
                f"{point.pct_change:4d}%       | ${point.new_cost:7.2f}  | ${point.cost_impact:7.2f}"
            )
    lines.append("")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Minimum-cost diet via the simplex method.")
    parser.add_argument(
        "--preset",
        default="standard-adult",
        choices=sorted(REQUIREMENT_PRESETS),
        help="Requirement preset",
    )
    parser.add_argument("--foods", type=Path, default=None, help="CSV or JSON food table")
    parser.add_argument("--max-iters", type=int, default=100, help="Pivot cap")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every tableau")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        options = SolveOptions(max_iters=args.max_iters)
    except ValidationError as exc:
        print(f"error: invalid solver options: {exc}", file=sys.stderr)
        return 2

    if args.foods is not None:
        try:
            items = parse_food_table(args.foods.read_text())
        except (OSError, ValueError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
    else:
        items = REFERENCE_FOODS
    requirements = REQUIREMENT_PRESETS[args.preset]

    print("\nConstraints (Minimum Daily Requirements):")
    for name, minimum in zip(requirements.nutrient_names(), requirements.minimums):
        print(f"  {name} >= {minimum:.1f}")
    print("\nAvailable Foods:")
    for item in items:
        print(f"  {item.name:<20}: ${item.unit_cost:.2f}")

    solution = solve(items, requirements, options)
    if args.verbose:
        for snapshot in solution.snapshots:
            print()
            print(format_snapshot(snapshot))

    print(format_report(solution, items, requirements))
    return 0 if solution.amounts is not None else 1


if __name__ == "__main__":
    sys.exit(main())
