from __future__ import annotations

import math
from typing import Any, Dict, List, Sequence

import numpy as np

from ..schemas import DietSolution, DualInterpretation, Item, NutrientAdequacy, RequirementSet
from .tableau import Tableau


def as_requirement_set(requirements: RequirementSet | Sequence[float]) -> RequirementSet:
    if isinstance(requirements, RequirementSet):
        return requirements
    return RequirementSet(minimums=[float(value) for value in requirements])


def validate_inputs(items: Sequence[Item], requirements: RequirementSet) -> None:
    """Reject malformed problems before any tableau is built."""

    if len(items) == 0:
        raise ValueError("At least one item is required.")

    m = len(requirements.minimums)
    if requirements.names is not None and len(requirements.names) != m:
        raise ValueError(
            f"Requirement set has {m} minimums but {len(requirements.names)} names."
        )
    for idx, value in enumerate(requirements.minimums):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"Requirement {idx} must be a finite non-negative number, got {value}.")

    for item in items:
        if not math.isfinite(item.unit_cost) or item.unit_cost < 0:
            raise ValueError(
                f"Item '{item.name}' has invalid unit cost {item.unit_cost}; expected finite >= 0."
            )
        if len(item.nutrients) != m:
            raise ValueError(
                f"Item '{item.name}' has {len(item.nutrients)} nutrient values, expected {m}."
            )
        for idx, value in enumerate(item.nutrients):
            if not math.isfinite(value) or value < 0:
                raise ValueError(
                    f"Item '{item.name}' nutrient {idx} must be finite and >= 0, got {value}."
                )


def build_tableau(items: Sequence[Item], requirements: RequirementSet) -> Tableau:
    return Tableau.from_items(items, requirements.minimums)


def nutrient_totals(amounts: Sequence[float], items: Sequence[Item]) -> np.ndarray:
    if not items:
        return np.zeros(0)
    N = np.array([item.nutrients for item in items], dtype=float)
    return np.asarray(amounts, dtype=float) @ N


def meets_requirements(
    amounts: Sequence[float], items: Sequence[Item], minimums: Sequence[float], tol: float
) -> bool:
    totals = nutrient_totals(amounts, items)
    return all(total >= minimum - tol for total, minimum in zip(totals, minimums))


def nutrient_adequacy(
    solution: DietSolution, items: Sequence[Item], requirements: RequirementSet | Sequence[float]
) -> List[NutrientAdequacy]:
    """How much of each minimum the solution provides, as a percentage."""

    if solution.amounts is None:
        raise ValueError(f"Solution with status '{solution.status}' carries no amounts.")
    reqs = as_requirement_set(requirements)
    totals = nutrient_totals(solution.amounts, items)
    report: List[NutrientAdequacy] = []
    for name, required, provided in zip(reqs.nutrient_names(), reqs.minimums, totals):
        pct = round(float(provided) / required * 100.0, 2) if required > 0 else None
        report.append(
            NutrientAdequacy(
                nutrient=name,
                required=float(required),
                provided=float(provided),
                adequacy_pct=pct,
            )
        )
    return report


def interpret_duals(
    solution: DietSolution, requirements: RequirementSet | Sequence[float]
) -> List[DualInterpretation]:
    if solution.shadow_prices is None:
        raise ValueError(f"Solution with status '{solution.status}' carries no shadow prices.")
    reqs = as_requirement_set(requirements)
    result: List[DualInterpretation] = []
    for idx, name in enumerate(reqs.nutrient_names()):
        price = solution.shadow_prices.get(idx, 0.0)
        result.append(
            DualInterpretation(
                nutrient=name,
                shadow_price=price,
                meaning=(
                    f"Increasing the {name} minimum by 1 unit would increase "
                    f"the minimum cost by ${price:.6f}"
                ),
            )
        )
    return result


def analyze_infeasibility(
    items: Sequence[Item], requirements: RequirementSet | Sequence[float]
) -> Dict[str, Any]:
    """Name unsupplied nutrients, then drop each requirement and re-solve."""

    from .simplex import solve  # local import to avoid cycle

    try:
        reqs = as_requirement_set(requirements)
        validate_inputs(items, reqs)
    except ValueError as exc:
        return {
            "status": "invalid_input",
            "message": str(exc),
            "unsupplied_nutrients": [],
            "conflicting_requirements": [],
        }

    names = reqs.nutrient_names()
    unsupplied = [
        names[idx]
        for idx, minimum in enumerate(reqs.minimums)
        if minimum > 0 and all(item.nutrients[idx] <= 0 for item in items)
    ]

    solution = solve(items, reqs)
    if solution.status != "infeasible":
        return {
            "status": solution.status,
            "message": solution.message or "Requirements can be met.",
            "unsupplied_nutrients": unsupplied,
            "conflicting_requirements": [],
        }

    conflicts: List[str] = []
    for idx, name in enumerate(names):
        relaxed = list(reqs.minimums)
        relaxed[idx] = 0.0
        sub_solution = solve(items, RequirementSet(minimums=relaxed, names=names))
        if sub_solution.status != "infeasible":
            conflicts.append(name)

    return {
        "status": "infeasible",
        "message": "No combination of items meets every requirement.",
        "unsupplied_nutrients": unsupplied,
        "conflicting_requirements": conflicts,
    }
