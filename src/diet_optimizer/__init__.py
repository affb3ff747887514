"""Diet Optimizer: minimum-cost diets via a tableau simplex."""

from .lp import analyze_infeasibility, interpret_duals, nutrient_adequacy, sensitivity, solve
from .schemas import DietSolution, Item, ItemSensitivity, RequirementSet, SolveOptions

__all__ = [
    "solve",
    "sensitivity",
    "analyze_infeasibility",
    "interpret_duals",
    "nutrient_adequacy",
    "DietSolution",
    "Item",
    "ItemSensitivity",
    "RequirementSet",
    "SolveOptions",
]
