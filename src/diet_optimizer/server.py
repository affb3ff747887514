from __future__ import annotations

import os
from typing import List

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .data import REFERENCE_FOODS, REQUIREMENT_PRESETS, item_to_row, parse_food_table
from .lp.sensitivity import sensitivity
from .lp.simplex import solve
from .lp.utils import analyze_infeasibility, interpret_duals, nutrient_adequacy
from .schemas import DietSolution, Item, RequirementSet, SolveOptions

app = FastMCP("Diet Optimizer")


def _requirements(preset: str, requirements: RequirementSet | None) -> RequirementSet:
    if requirements is not None:
        return requirements
    if preset not in REQUIREMENT_PRESETS:
        raise ValueError(
            f"Unknown preset '{preset}'; choose one of {', '.join(REQUIREMENT_PRESETS)}."
        )
    return REQUIREMENT_PRESETS[preset]


@app.tool()
def optimize_diet(
    foods: List[Item] | None = None,
    preset: str = "standard-adult",
    requirements: RequirementSet | None = None,
    options: SolveOptions | None = None,
) -> dict:
    """Solve the minimum-cost diet problem and return the solution as JSON."""
    try:
        reqs = _requirements(preset, requirements)
    except ValueError as e:
        return {"error": str(e), "solution": None}

    items = REFERENCE_FOODS if foods is None else foods
    solution = solve(items, reqs, options or SolveOptions())
    result = {"solution": solution.model_dump()}
    if solution.amounts is not None:
        result["adequacy"] = [row.model_dump() for row in nutrient_adequacy(solution, items, reqs)]
    return result


@app.tool()
def optimize_diet_from_table(
    file_content: str,
    file_format: str = "auto",
    preset: str = "standard-adult",
    is_base64: bool = False,
    options: SolveOptions | None = None,
) -> dict:
    """
    Solve the diet problem for foods given as a CSV or JSON table.

    Args:
        file_content: Table with columns name,cost,protein,carbs,fat,fiber,vitamins.
        file_format: 'csv', 'tsv', 'json' or 'auto'.
        preset: Requirement preset name (see list_presets).
        is_base64: Whether file_content is base64 encoded.
        options: Optional solver options.
    """
    try:
        items = parse_food_table(file_content, file_format=file_format, is_base64=is_base64)
    except ValueError as e:
        return {"error": f"Failed to parse food table: {e}", "foods": None, "solution": None}
    result = optimize_diet(foods=items, preset=preset, options=options)
    result["foods"] = [item_to_row(item) for item in items]
    return result


@app.tool()
def analyze_sensitivity(solution: DietSolution, foods: List[Item] | None = None) -> dict:
    """Linear cost-impact sweep (-50%..+50%) for every food the solution uses."""
    try:
        report = sensitivity(solution, REFERENCE_FOODS if foods is None else foods)
    except ValueError as e:
        return {"error": str(e), "sensitivity": None}
    return {"sensitivity": [entry.model_dump() for entry in report]}


@app.tool()
def dual_problem(
    foods: List[Item] | None = None,
    preset: str = "standard-adult",
    requirements: RequirementSet | None = None,
) -> dict:
    """Describe the primal/dual pair and interpret each shadow price."""
    try:
        reqs = _requirements(preset, requirements)
    except ValueError as e:
        return {"error": str(e)}

    items = REFERENCE_FOODS if foods is None else foods
    solution = solve(items, reqs, SolveOptions(record_snapshots=False))
    if solution.shadow_prices is None:
        return {"error": solution.message, "status": solution.status}

    return {
        "primal": {
            "objective": "Minimize cost",
            "constraints": "Meet nutritional requirements",
            "variables": [item.name for item in items],
        },
        "dual": {
            "objective": "Maximize nutritional value",
            "constraints": "Stay within budget",
            "variables": reqs.nutrient_names(),
            "shadow_prices": solution.shadow_prices,
        },
        "interpretation": [row.model_dump() for row in interpret_duals(solution, reqs)],
    }


@app.tool()
def diagnose_infeasibility(
    foods: List[Item] | None = None,
    preset: str = "standard-adult",
    requirements: RequirementSet | None = None,
) -> dict:
    """Report nutrients no food supplies and requirements that block a solution."""
    try:
        reqs = _requirements(preset, requirements)
    except ValueError as e:
        return {"status": "invalid_input", "message": str(e)}
    return analyze_infeasibility(REFERENCE_FOODS if foods is None else foods, reqs)


@app.tool()
def list_presets() -> dict:
    """Return the built-in requirement presets and reference foods."""
    return {
        "presets": {name: reqs.model_dump() for name, reqs in REQUIREMENT_PRESETS.items()},
        "foods": [item_to_row(item) for item in REFERENCE_FOODS],
    }


if __name__ == "__main__":
    import sys

    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio" or "--stdio" in sys.argv:
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")
