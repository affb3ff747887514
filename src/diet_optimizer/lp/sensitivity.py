from __future__ import annotations

from typing import List, Sequence

from ..schemas import DietSolution, Item, ItemSensitivity, SweepPoint
from .tableau import EPS

PRICE_STEPS = tuple(range(-50, 51, 10))


class SensitivityAnalyzer:
    """
    First-order cost sweep for the items a solution uses.

    Each used item's unit cost is moved by -50%..+50% in 10% steps and the
    change in total cost is ``quantity * (new_cost - current_cost)``. There is
    no re-solve, so the figures only hold while the optimal basis does not
    change.
    """

    def __init__(self, steps: Sequence[int] = PRICE_STEPS, tol: float = EPS) -> None:
        self.steps = tuple(steps)
        self.tol = tol

    def sweep(self, item: Item, quantity: float) -> List[SweepPoint]:
        points: List[SweepPoint] = []
        for pct in self.steps:
            new_cost = item.unit_cost * (1 + pct / 100)
            points.append(
                SweepPoint(
                    pct_change=pct,
                    new_cost=new_cost,
                    cost_impact=quantity * (new_cost - item.unit_cost),
                )
            )
        return points

    def analyze(self, solution: DietSolution, items: Sequence[Item]) -> List[ItemSensitivity]:
        if solution.amounts is None:
            raise ValueError(f"Solution with status '{solution.status}' carries no amounts.")
        if len(solution.amounts) != len(items):
            raise ValueError(
                f"Solution has {len(solution.amounts)} amounts but {len(items)} items were given."
            )

        report: List[ItemSensitivity] = []
        for item, quantity in zip(items, solution.amounts):
            if quantity <= self.tol:
                continue
            report.append(
                ItemSensitivity(
                    item_name=item.name,
                    current_cost=item.unit_cost,
                    quantity=quantity,
                    sweep=self.sweep(item, quantity),
                )
            )
        return report


def sensitivity(
    solution: DietSolution, items: Sequence[Item], tol: float = EPS
) -> List[ItemSensitivity]:
    return SensitivityAnalyzer(tol=tol).analyze(solution, items)
