from __future__ import annotations

from typing import Dict, Sequence

import numpy as np
from scipy.optimize import linprog

from ..schemas import DietSolution, Item, RequirementSet
from .utils import as_requirement_set, meets_requirements, validate_inputs


def solve_with_highs(
    items: Sequence[Item], requirements: RequirementSet | Sequence[float]
) -> DietSolution:
    """Solve the same diet problem with SciPy's HiGHS backend, for cross-checking."""

    try:
        reqs = as_requirement_set(requirements)
        validate_inputs(items, reqs)
    except ValueError as exc:
        return DietSolution(
            status="invalid_input",
            feasible=False,
            amounts=None,
            total_cost=None,
            shadow_prices=None,
            item_names=[item.name for item in items],
            message=str(exc),
        )

    c = np.array([item.unit_cost for item in items], dtype=float)
    N = np.array([item.nutrients for item in items], dtype=float).T
    b = np.array(reqs.minimums, dtype=float)

    res = linprog(
        c,
        A_ub=-N if N.size else None,
        b_ub=-b if b.size else None,
        bounds=[(0.0, None)] * len(items),
        method="highs",
    )

    if not res.success:
        return DietSolution(
            status=_map_status(res.status),
            feasible=False,
            amounts=None,
            total_cost=None,
            shadow_prices=None,
            item_names=[item.name for item in items],
            iterations=int(res.nit),
            message=res.message,
        )

    amounts = [max(0.0, float(value)) for value in res.x]
    return DietSolution(
        status="optimal",
        feasible=meets_requirements(amounts, items, reqs.minimums, 1e-6),
        amounts=amounts,
        total_cost=float(sum(a * item.unit_cost for a, item in zip(amounts, items))),
        shadow_prices=_extract_duals(res, len(reqs.minimums)),
        item_names=[item.name for item in items],
        iterations=int(res.nit),
        message=res.message or "",
    )


def _extract_duals(res, num_constraints: int) -> Dict[int, float]:
    marginals = getattr(res, "ineqlin", None)
    if marginals is None or num_constraints == 0:
        return {}
    # A_ub rows are negated ">=" rows, so HiGHS reports non-positive marginals.
    return {idx: abs(float(value)) for idx, value in enumerate(marginals.marginals)}


def _map_status(code: int) -> str:
    mapping = {
        0: "optimal",
        1: "iteration_limit",
        2: "infeasible",
        3: "unbounded",
    }
    # 4 is "numerical difficulties"; the HiGHS message says what went wrong.
    return mapping.get(code, "solver_error")
