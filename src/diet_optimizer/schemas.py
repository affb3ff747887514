from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Status = Literal[
    "optimal", "infeasible", "unbounded", "iteration_limit", "invalid_input", "solver_error"
]


class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    unit_cost: float
    nutrients: List[float] = Field(default_factory=list)


class RequirementSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    minimums: List[float]
    names: List[str] | None = None

    def nutrient_names(self) -> List[str]:
        if self.names:
            return list(self.names)
        return [f"nutrient_{idx}" for idx in range(len(self.minimums))]


class SolveOptions(BaseModel):
    max_iters: int = Field(100, ge=1)
    tol: float = Field(1e-6, gt=0)
    record_snapshots: bool = True


class TableauSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    iteration: int
    pivot_row: Optional[int] = None
    pivot_col: Optional[int] = None
    basis: List[int]
    matrix: List[List[float]]


class DietSolution(BaseModel):
    status: Status
    feasible: bool
    amounts: List[float] | None
    total_cost: Optional[float]
    shadow_prices: Dict[int, float] | None
    item_names: List[str] = Field(default_factory=list)
    iterations: int = 0
    snapshots: List[TableauSnapshot] = Field(default_factory=list)
    message: str = ""


class SweepPoint(BaseModel):
    pct_change: int
    new_cost: float
    cost_impact: float


class ItemSensitivity(BaseModel):
    item_name: str
    current_cost: float
    quantity: float
    sweep: List[SweepPoint]


class NutrientAdequacy(BaseModel):
    nutrient: str
    required: float
    provided: float
    adequacy_pct: Optional[float]


class DualInterpretation(BaseModel):
    nutrient: str
    shadow_price: float
    meaning: str
