"""Tableau simplex engine for minimum-cost diet problems."""

from .simplex import EngineState, SimplexEngine, solve
from .sensitivity import SensitivityAnalyzer, sensitivity
from .utils import analyze_infeasibility, interpret_duals, nutrient_adequacy

__all__ = [
    "EngineState",
    "SimplexEngine",
    "solve",
    "SensitivityAnalyzer",
    "sensitivity",
    "analyze_infeasibility",
    "interpret_duals",
    "nutrient_adequacy",
]
