#!/usr/bin/env python3
import argparse
import json
from pathlib import Path

from diet_optimizer.data import generate_random_instance


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random diet instances.")
    parser.add_argument("--foods", type=int, default=8, help="Number of foods")
    parser.add_argument("--nutrients", type=int, default=5, help="Number of nutrients")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    payload = []
    for idx in range(args.count):
        items, requirements = generate_random_instance(
            args.foods, args.nutrients, (args.seed or 0) + idx
        )
        payload.append(
            {
                "foods": [item.model_dump() for item in items],
                "requirements": requirements.model_dump(),
            }
        )

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
