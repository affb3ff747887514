import pytest

from diet_optimizer.data import NUTRIENT_NAMES, REFERENCE_FOODS, REQUIREMENT_PRESETS
from diet_optimizer.lp.simplex import solve
from diet_optimizer.lp.utils import (
    analyze_infeasibility,
    as_requirement_set,
    interpret_duals,
    nutrient_adequacy,
)
from diet_optimizer.schemas import Item, RequirementSet


def test_as_requirement_set_accepts_plain_sequences():
    reqs = as_requirement_set([1, 2.5])
    assert reqs.minimums == [1.0, 2.5]
    assert reqs.nutrient_names() == ["nutrient_0", "nutrient_1"]

    preset = REQUIREMENT_PRESETS["balanced"]
    assert as_requirement_set(preset) is preset


def test_nutrient_adequacy_reports_every_nutrient():
    reqs = REQUIREMENT_PRESETS["standard-adult"]
    solution = solve(REFERENCE_FOODS, reqs)
    report = nutrient_adequacy(solution, REFERENCE_FOODS, reqs)

    assert [row.nutrient for row in report] == NUTRIENT_NAMES
    for row in report:
        assert row.provided >= row.required - 1e-6
        assert row.adequacy_pct >= 100.0 - 1e-4


def test_nutrient_adequacy_handles_zero_minimum():
    items = [Item(name="a", unit_cost=1.0, nutrients=[2.0, 1.0])]
    solution = solve(items, [4.0, 0.0])
    report = nutrient_adequacy(solution, items, [4.0, 0.0])

    assert report[0].adequacy_pct == pytest.approx(100.0)
    assert report[1].adequacy_pct is None
    assert report[1].provided == pytest.approx(2.0)


def test_interpret_duals_mentions_price():
    reqs = RequirementSet(minimums=[50.0, 130.0, 44.0, 25.0, 100.0], names=NUTRIENT_NAMES)
    solution = solve(REFERENCE_FOODS[:5], reqs)
    rows = interpret_duals(solution, reqs)

    fat = rows[2]
    assert fat.nutrient == "Fat (g)"
    assert fat.shadow_price == pytest.approx(0.5 / 3.0)
    assert "$0.166667" in fat.meaning


def test_analysis_helpers_reject_failed_solutions():
    items = [Item(name="a", unit_cost=1.0, nutrients=[0.0])]
    solution = solve(items, [1.0])
    assert solution.status == "infeasible"
    with pytest.raises(ValueError):
        nutrient_adequacy(solution, items, [1.0])
    with pytest.raises(ValueError):
        interpret_duals(solution, [1.0])


def test_analyze_infeasibility_names_unsupplied_requirement():
    items = [
        Item(name="Rice", unit_cost=0.3, nutrients=[2.6, 23.0, 0.0]),
        Item(name="Chicken", unit_cost=3.0, nutrients=[31.0, 0.0, 0.0]),
    ]
    reqs = RequirementSet(minimums=[50.0, 100.0, 10.0], names=["protein", "carbs", "vitamin c"])
    report = analyze_infeasibility(items, reqs)

    assert report["status"] == "infeasible"
    assert report["unsupplied_nutrients"] == ["vitamin c"]
    assert report["conflicting_requirements"] == ["vitamin c"]


def test_analyze_infeasibility_on_feasible_problem():
    report = analyze_infeasibility(REFERENCE_FOODS, REQUIREMENT_PRESETS["low-carb"])
    assert report["status"] == "optimal"
    assert report["conflicting_requirements"] == []


def test_analyze_infeasibility_on_invalid_input():
    report = analyze_infeasibility([], [1.0])
    assert report["status"] == "invalid_input"
