from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from ..schemas import Item, TableauSnapshot

EPS = 1e-6


class Tableau:
    """
    Dense simplex tableau for "minimise cost subject to nutrient minimums".

    Layout for n items and m nutrients:
      rows 0..m-1   one ">=" constraint each, stored as -N x + s = -r
      row m         objective row (unit costs, then zeros)
      cols 0..n-1   items, cols n..n+m-1 surplus columns, col n+m the RHS
    """

    def __init__(self, matrix: np.ndarray, basis: Sequence[int], num_items: int) -> None:
        matrix = np.array(matrix, dtype=float)
        if matrix.ndim != 2 or matrix.shape[0] < 1:
            raise ValueError("Tableau matrix must be two-dimensional with an objective row.")
        if len(basis) != matrix.shape[0] - 1:
            raise ValueError(
                f"Basis has {len(basis)} entries for {matrix.shape[0] - 1} constraint rows."
            )
        self.matrix = matrix
        self.basis: List[int] = [int(col) for col in basis]
        self.num_items = num_items

    @classmethod
    def from_items(cls, items: Sequence[Item], requirements: Sequence[float]) -> "Tableau":
        n = len(items)
        m = len(requirements)
        matrix = np.zeros((m + 1, n + m + 1), dtype=float)
        for i in range(m):
            for j, item in enumerate(items):
                matrix[i, j] = -item.nutrients[i]
            matrix[i, n + i] = 1.0
            matrix[i, -1] = -requirements[i]
        for j, item in enumerate(items):
            matrix[m, j] = item.unit_cost
        return cls(matrix, [n + i for i in range(m)], n)

    @property
    def num_constraints(self) -> int:
        return self.matrix.shape[0] - 1

    @property
    def num_columns(self) -> int:
        return self.matrix.shape[1]

    @property
    def objective(self) -> np.ndarray:
        return self.matrix[-1]

    @property
    def rhs(self) -> np.ndarray:
        return self.matrix[:-1, -1]

    def slack_column(self, constraint: int) -> int:
        return self.num_items + constraint

    def pivot(self, row: int, col: int) -> None:
        pivot_element = self.matrix[row, col]
        assert abs(pivot_element) > EPS, f"Zero pivot element at ({row}, {col})"

        self.matrix[row] /= pivot_element
        factors = self.matrix[:, col].copy()
        factors[row] = 0.0
        self.matrix -= np.outer(factors, self.matrix[row])
        # Re-seat exact zeros/one so the basic column is a clean unit vector.
        self.matrix[:, col] = 0.0
        self.matrix[row, col] = 1.0
        self.basis[row] = col

    def is_unit_column(self, col: int, tol: float = EPS) -> Optional[int]:
        """Row index where ``col`` holds the 1 of a unit vector, or None.

        The 1 must sit in a constraint row; every other row, the objective
        row included, must be zero within ``tol``.
        """
        column = self.matrix[:, col]
        ones = np.flatnonzero(np.abs(column[:-1] - 1.0) < tol)
        if ones.size != 1:
            return None
        row = int(ones[0])
        others = np.delete(column, row)
        if np.any(np.abs(others) >= tol):
            return None
        return row

    def copy(self) -> "Tableau":
        return Tableau(self.matrix.copy(), list(self.basis), self.num_items)

    def snapshot(
        self,
        iteration: int,
        pivot_row: Optional[int] = None,
        pivot_col: Optional[int] = None,
    ) -> TableauSnapshot:
        return TableauSnapshot(
            iteration=iteration,
            pivot_row=pivot_row,
            pivot_col=pivot_col,
            basis=list(self.basis),
            matrix=self.matrix.tolist(),
        )

    def __repr__(self) -> str:
        return f"Tableau(rows={self.matrix.shape[0]}, cols={self.num_columns}, basis={self.basis})"
