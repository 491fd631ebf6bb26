"""Unit tests for the rent vs buy calculator"""

from dataclasses import replace
import pytest
from copilot_engine.domain.exceptions import InvalidInputError
from copilot_engine.domain.rent_vs_buy import calculate_rent_vs_buy, find_break_even_year


def test_short_horizon_favors_renting(rent_vs_buy_inputs):
    """Test closing costs and front-loaded interest make buying dearer over 5 years"""
    results = calculate_rent_vs_buy(rent_vs_buy_inputs)

    assert results.buy_scenario.net_cost > results.rent_scenario.total_cost
    assert results.comparison.buying_is_better is False
    assert results.comparison.cost_difference > 0
    assert results.recommendation.startswith("Renting appears to be more cost-effective")
    assert "Factor in the flexibility benefits of renting" in results.next_steps


def test_monthly_payment_breakdown(rent_vs_buy_inputs):
    """Test PITI + maintenance: 1438.92 + 300 + 100 + 250"""
    results = calculate_rent_vs_buy(rent_vs_buy_inputs)

    assert results.buy_scenario.monthly_payment == 208_892
    assert results.comparison.monthly_difference == 58_892


def test_rent_total_steps_up_yearly(rent_vs_buy_inputs):
    """Test rent increases are applied after every 12th month and rounded"""
    results = calculate_rent_vs_buy(rent_vs_buy_inputs)

    # 1500.00, 1545.00, 1591.35, 1639.09, 1688.26 per month in years 1-5
    assert results.rent_scenario.total_rent_paid == 9_556_440
    assert results.rent_scenario.average_monthly_rent == 159_274
    assert results.rent_scenario.total_cost == results.rent_scenario.total_rent_paid


def test_buy_scenario_components(rent_vs_buy_inputs):
    results = calculate_rent_vs_buy(rent_vs_buy_inputs)
    buy = results.buy_scenario

    # 60 payments of $1,438.92
    assert buy.total_interest + buy.total_principal == 143_892 * 60
    assert 1_660_000 < buy.total_principal < 1_672_000
    assert buy.total_insurance == 600_000
    assert buy.total_hoa == 0
    assert buy.home_value > rent_vs_buy_inputs.property_price
    assert buy.equity == buy.home_value - (24_000_000 - buy.total_principal)
    assert buy.net_cost == buy.total_cost - buy.equity
    assert buy.total_cost == (
        6_000_000
        + 900_000
        + buy.total_interest
        + buy.total_principal
        + buy.total_taxes
        + buy.total_insurance
        + buy.total_maintenance
    )


def test_taxes_follow_appreciating_value(rent_vs_buy_inputs):
    """Test property tax is charged on the appreciated value, not the purchase price"""
    results = calculate_rent_vs_buy(rent_vs_buy_inputs)
    flat_tax = round(30_000_000 * 0.012) * 5
    assert results.buy_scenario.total_taxes > flat_tax


def test_down_payment_invested(rent_vs_buy_inputs):
    results = calculate_rent_vs_buy(rent_vs_buy_inputs)
    # (60,000 + 9,000) at 7% for 5 years
    assert 9_677_000 < results.rent_scenario.down_payment_invested < 9_678_000


def test_long_horizon_favors_buying(rent_vs_buy_inputs):
    inputs = replace(rent_vs_buy_inputs, home_appreciation_rate=0.04, time_horizon_years=10)
    results = calculate_rent_vs_buy(inputs)

    assert results.comparison.buying_is_better is True
    assert results.comparison.cost_difference < 0
    assert results.recommendation.startswith("Buying appears to be the better choice")
    assert results.comparison.break_even_years is not None
    assert results.comparison.break_even_years <= 10


def test_break_even_after_short_horizon(rent_vs_buy_inputs):
    """Test crossover, if any, lies beyond a horizon where renting still wins"""
    break_even = find_break_even_year(rent_vs_buy_inputs)
    assert break_even is None or break_even > 5


def test_break_even_none_when_buying_never_catches_up(rent_vs_buy_inputs):
    inputs = replace(rent_vs_buy_inputs, monthly_rent=10_000, rent_increase_rate=0.0)
    assert find_break_even_year(inputs) is None


def test_total_cost_increases_with_horizon(rent_vs_buy_inputs):
    """Test total ownership cost strictly increases as the horizon grows"""
    costs = [
        calculate_rent_vs_buy(replace(rent_vs_buy_inputs, time_horizon_years=years)).buy_scenario.total_cost
        for years in range(1, 41)
    ]
    assert all(later > earlier for earlier, later in zip(costs, costs[1:]))


def test_horizon_beyond_mortgage_term(rent_vs_buy_inputs):
    """Test a paid-off mortgage leaves full equity"""
    inputs = replace(rent_vs_buy_inputs, mortgage_term_years=10, time_horizon_years=15)
    buy = calculate_rent_vs_buy(inputs).buy_scenario

    assert buy.total_principal == 24_000_000
    assert buy.equity == buy.home_value


def test_zero_rate_mortgage(rent_vs_buy_inputs):
    inputs = replace(rent_vs_buy_inputs, mortgage_rate=0.0)
    buy = calculate_rent_vs_buy(inputs).buy_scenario

    assert buy.total_interest == 0
    assert buy.total_principal == round(24_000_000 / 360) * 60


def test_warnings(rent_vs_buy_inputs):
    inputs = replace(
        rent_vs_buy_inputs,
        down_payment_percent=0.1,
        home_appreciation_rate=0.06,
        monthly_income=500_000,
    )
    warnings = calculate_rent_vs_buy(inputs).warnings

    assert "Housing payment would exceed 28% of income - consider a less expensive property" in warnings
    assert "Down payment below 20% typically requires PMI, increasing monthly costs" in warnings
    assert "Buying costs significantly more monthly - ensure you can afford the payment" in warnings
    assert "Home appreciation rate above 5% may be optimistic for long-term planning" in warnings


def test_no_warnings_for_conservative_inputs(rent_vs_buy_inputs):
    assert calculate_rent_vs_buy(rent_vs_buy_inputs).warnings == []


def test_assumptions_listed(rent_vs_buy_inputs):
    assumptions = calculate_rent_vs_buy(rent_vs_buy_inputs).assumptions
    assert "Home appreciates at 1.0% annually" in assumptions
    assert "Property tax rate: 1.20%" in assumptions


def test_invalid_horizon_raises(rent_vs_buy_inputs):
    with pytest.raises(InvalidInputError):
        calculate_rent_vs_buy(replace(rent_vs_buy_inputs, time_horizon_years=0))
