from __future__ import annotations

from typing import List, Optional, Tuple

from .tableau import EPS, Tableau


class PivotSelector:
    """Dantzig-style pivot choices over a Tableau; every tie goes to the lowest index."""

    def __init__(self, tableau: Tableau, tol: float = EPS) -> None:
        self.tableau = tableau
        self.tol = tol

    def find_entering_column(self) -> Optional[int]:
        objective = self.tableau.objective
        entering: Optional[int] = None
        most_negative = -self.tol
        for col in range(self.tableau.num_columns - 1):
            if objective[col] < most_negative:
                most_negative = objective[col]
                entering = col
        return entering

    def find_leaving_row(self, entering_col: int) -> Optional[int]:
        matrix = self.tableau.matrix
        ratios: List[Tuple[float, int]] = []
        for row in range(self.tableau.num_constraints):
            value = matrix[row, entering_col]
            if value > self.tol:
                ratio = matrix[row, -1] / value
                if ratio >= 0.0:
                    ratios.append((ratio, row))
        if not ratios:
            return None
        return min(ratios)[1]

    def find_infeasible_row(self) -> Optional[int]:
        rhs = self.tableau.rhs
        leaving: Optional[int] = None
        most_negative = -self.tol
        for row, value in enumerate(rhs):
            if value < most_negative:
                most_negative = value
                leaving = row
        return leaving

    def find_dual_entering_column(self, row: int) -> Optional[int]:
        matrix = self.tableau.matrix
        objective = self.tableau.objective
        ratios: List[Tuple[float, int]] = []
        for col in range(self.tableau.num_columns - 1):
            value = matrix[row, col]
            if value < -self.tol:
                ratios.append((max(objective[col], 0.0) / -value, col))
        if not ratios:
            return None
        return min(ratios)[1]
