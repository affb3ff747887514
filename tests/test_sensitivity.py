import pytest

from diet_optimizer.lp.sensitivity import PRICE_STEPS, SensitivityAnalyzer, sensitivity
from diet_optimizer.lp.simplex import solve
from diet_optimizer.schemas import DietSolution, Item

FOODS = [
    Item(name="Oatmeal", unit_cost=0.50, nutrients=[5.0, 27.0, 3.0, 4.0, 15.0]),
    Item(name="Chicken Breast", unit_cost=3.00, nutrients=[31.0, 0.0, 3.6, 0.0, 10.0]),
    Item(name="Brown Rice", unit_cost=0.30, nutrients=[2.6, 23.0, 0.9, 1.8, 5.0]),
    Item(name="Broccoli", unit_cost=1.50, nutrients=[2.8, 7.0, 0.4, 2.6, 135.0]),
    Item(name="Banana", unit_cost=0.25, nutrients=[1.3, 27.0, 0.3, 3.1, 17.0]),
]


def make_solution(amounts) -> DietSolution:
    return DietSolution(
        status="optimal",
        feasible=True,
        amounts=amounts,
        total_cost=sum(a * item.unit_cost for a, item in zip(amounts, FOODS)),
        shadow_prices={},
    )


def test_only_used_items_are_reported():
    solution = solve(FOODS, [50.0, 130.0, 44.0, 25.0, 100.0])
    report = sensitivity(solution, FOODS)

    assert [entry.item_name for entry in report] == ["Oatmeal"]
    assert report[0].quantity == pytest.approx(44.0 / 3.0)
    assert report[0].current_cost == 0.50


def test_sweep_covers_minus_fifty_to_plus_fifty():
    report = sensitivity(make_solution([2.0, 0.0, 0.0, 1.0, 0.0]), FOODS)

    assert [entry.item_name for entry in report] == ["Oatmeal", "Broccoli"]
    for entry in report:
        assert [point.pct_change for point in entry.sweep] == list(PRICE_STEPS)
        assert len(entry.sweep) == 11


def test_zero_change_has_exactly_zero_impact():
    report = sensitivity(make_solution([3.7, 1.1, 0.0, 0.9, 12.345]), FOODS)
    for entry in report:
        zero = next(point for point in entry.sweep if point.pct_change == 0)
        assert zero.cost_impact == 0.0
        assert zero.new_cost == entry.current_cost


def test_impact_is_linear_in_price_change():
    report = sensitivity(make_solution([2.0, 0.0, 0.0, 0.0, 4.0]), FOODS)
    banana = report[1]
    for point in banana.sweep:
        assert point.new_cost == pytest.approx(0.25 * (1 + point.pct_change / 100))
        assert point.cost_impact == pytest.approx(4.0 * 0.25 * point.pct_change / 100)


@pytest.mark.parametrize("amount, reported", [(1e-7, False), (1e-6, False), (2e-6, True)])
def test_usage_threshold_near_epsilon(amount, reported):
    report = sensitivity(make_solution([amount, 0.0, 0.0, 0.0, 0.0]), FOODS)
    assert bool(report) is reported


def test_custom_steps():
    analyzer = SensitivityAnalyzer(steps=(-10, 0, 10))
    report = analyzer.analyze(make_solution([1.0, 0.0, 0.0, 0.0, 0.0]), FOODS)
    assert [p.pct_change for p in report[0].sweep] == [-10, 0, 10]


def test_rejects_solution_without_amounts():
    solution = DietSolution(
        status="unbounded", feasible=False, amounts=None, total_cost=None, shadow_prices=None
    )
    with pytest.raises(ValueError, match="no amounts"):
        sensitivity(solution, FOODS)


def test_rejects_mismatched_item_count():
    with pytest.raises(ValueError, match="5 amounts but 2 items"):
        sensitivity(make_solution([1.0, 0.0, 0.0, 0.0, 0.0]), FOODS[:2])
