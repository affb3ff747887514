from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from ..schemas import Item
from .tableau import EPS, Tableau


class SolutionExtractor:
    """Reads item quantities, total cost and shadow prices off a final tableau."""

    def __init__(self, tol: float = EPS) -> None:
        self.tol = tol

    def amounts(self, tableau: Tableau) -> List[float]:
        rhs = tableau.rhs
        result: List[float] = []
        for col in range(tableau.num_items):
            row = tableau.is_unit_column(col, self.tol)
            # Identical nutrient columns share the unit vector; only the basic one counts.
            if row is None or tableau.basis[row] != col:
                result.append(0.0)
            else:
                result.append(max(0.0, float(rhs[row])))
        return result

    @staticmethod
    def total_cost(amounts: Sequence[float], items: Sequence[Item]) -> float:
        # Recomputed from the amounts rather than read off the objective row.
        return float(sum(amount * item.unit_cost for amount, item in zip(amounts, items)))

    def shadow_prices(self, tableau: Tableau) -> Dict[int, float]:
        objective = tableau.objective
        return {
            i: abs(float(objective[tableau.slack_column(i)]))
            for i in range(tableau.num_constraints)
        }

    def extract(
        self, tableau: Tableau, items: Sequence[Item]
    ) -> Tuple[List[float], float, Dict[int, float]]:
        amounts = self.amounts(tableau)
        return amounts, self.total_cost(amounts, items), self.shadow_prices(tableau)
