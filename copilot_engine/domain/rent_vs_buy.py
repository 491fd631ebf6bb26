"""Rent vs buy calculator - projects ownership costs against renting over a horizon"""

from dataclasses import dataclass
from typing import List, Optional

from copilot_engine.domain.amortization import compound_growth, monthly_payment, remaining_balance
from copilot_engine.domain.exceptions import InvalidInputError
from copilot_engine.domain.models import (
    BuyScenario,
    RentScenario,
    RentVsBuyComparison,
    RentVsBuyInputs,
    RentVsBuyResults,
)
from copilot_engine.utils.money import format_cents, format_percent, round_cents

MAX_HOUSING_TO_INCOME = 0.28
PMI_DOWN_PAYMENT = 0.2
OPTIMISTIC_APPRECIATION = 0.05

# Years searched for a buy/rent crossover
BREAK_EVEN_SEARCH_YEARS = 50


@dataclass
class _BuyProjection:
    """Cumulative ownership figures after a number of years"""

    total_interest: int
    total_principal: int
    total_taxes: int
    total_insurance: int
    total_maintenance: int
    total_hoa: int
    home_value: int
    equity: int
    total_cost: int
    net_cost: int


def _project_buy(inputs: RentVsBuyInputs, years: int) -> _BuyProjection:
    down_payment = round_cents(inputs.property_price * inputs.down_payment_percent)
    loan_amount = inputs.property_price - down_payment
    mortgage_months = inputs.mortgage_term_years * 12
    payment = monthly_payment(loan_amount, inputs.mortgage_rate, mortgage_months)

    payments_made = min(years * 12, mortgage_months)
    balance = remaining_balance(loan_amount, payment, inputs.mortgage_rate, payments_made)
    if payments_made == mortgage_months:
        balance = 0
    principal_paid = loan_amount - balance
    # Never negative: the final payment can exceed the balance by a few cents of PMT rounding
    interest_paid = max(0, payment * payments_made - principal_paid)

    total_taxes = 0
    total_maintenance = 0
    for year in range(1, years + 1):
        value = compound_growth(inputs.property_price, inputs.home_appreciation_rate, year)
        total_taxes += round_cents(value * inputs.property_tax_rate)
        total_maintenance += round_cents(value * inputs.maintenance_rate)

    total_insurance = inputs.home_insurance * years
    total_hoa = inputs.hoa_fees * 12 * years

    home_value = compound_growth(inputs.property_price, inputs.home_appreciation_rate, years)
    equity = home_value - balance

    total_cost = (
        down_payment
        + inputs.closing_costs
        + interest_paid
        + principal_paid
        + total_taxes
        + total_insurance
        + total_maintenance
        + total_hoa
    )

    return _BuyProjection(
        total_interest=interest_paid,
        total_principal=principal_paid,
        total_taxes=total_taxes,
        total_insurance=total_insurance,
        total_maintenance=total_maintenance,
        total_hoa=total_hoa,
        home_value=home_value,
        equity=equity,
        total_cost=total_cost,
        net_cost=total_cost - equity,
    )


def _total_rent(monthly_rent: int, rent_increase_rate: float, years: int) -> int:
    """Rent paid over the horizon; rent steps up after every 12th month"""
    total = 0
    rent = monthly_rent
    for month in range(1, years * 12 + 1):
        total += rent
        if month % 12 == 0:
            rent = round_cents(rent * (1 + rent_increase_rate))
    return total


def find_break_even_year(inputs: RentVsBuyInputs, max_years: int = BREAK_EVEN_SEARCH_YEARS) -> Optional[int]:
    """
    First year in which buying's net cost is no higher than cumulative rent.

    Walks the projection year by year under the same constant-rate assumptions as
    the main comparison, so it is an estimate, not a forecast. Returns None when no
    crossover happens within max_years.
    """
    for year in range(1, max_years + 1):
        buy = _project_buy(inputs, year)
        rent = _total_rent(inputs.monthly_rent, inputs.rent_increase_rate, year)
        if buy.net_cost <= rent:
            return year
    return None


def calculate_rent_vs_buy(inputs: RentVsBuyInputs) -> RentVsBuyResults:
    """Compare owning against renting over inputs.time_horizon_years"""
    if inputs.time_horizon_years < 1 or inputs.mortgage_term_years < 1:
        raise InvalidInputError("Time horizon and mortgage term must be at least one year")

    years = inputs.time_horizon_years
    down_payment = round_cents(inputs.property_price * inputs.down_payment_percent)
    loan_amount = inputs.property_price - down_payment
    mortgage_payment = monthly_payment(loan_amount, inputs.mortgage_rate, inputs.mortgage_term_years * 12)

    monthly_tax = round_cents(inputs.property_price * inputs.property_tax_rate / 12)
    monthly_insurance = round_cents(inputs.home_insurance / 12)
    monthly_maintenance = round_cents(inputs.property_price * inputs.maintenance_rate / 12)
    total_monthly_payment = (
        mortgage_payment + monthly_tax + monthly_insurance + monthly_maintenance + inputs.hoa_fees
    )

    buy = _project_buy(inputs, years)
    total_rent_paid = _total_rent(inputs.monthly_rent, inputs.rent_increase_rate, years)

    rent_scenario = RentScenario(
        total_rent_paid=total_rent_paid,
        average_monthly_rent=round_cents(total_rent_paid / (years * 12)),
        down_payment_invested=compound_growth(
            down_payment + inputs.closing_costs, inputs.investment_return_rate, years
        ),
        # Opportunity cost is reported alongside, not folded into the comparison
        total_cost=total_rent_paid,
    )

    buying_is_better = buy.net_cost < rent_scenario.total_cost
    cost_difference = buy.net_cost - rent_scenario.total_cost
    monthly_difference = total_monthly_payment - inputs.monthly_rent

    next_steps: List[str] = []
    warnings: List[str] = []

    if buying_is_better:
        recommendation = (
            f"Buying appears to be the better choice, potentially saving you "
            f"{format_cents(abs(cost_difference))} over {years} years."
        )
        next_steps.append("Get pre-approved for a mortgage to understand your actual rate")
        next_steps.append("Factor in your specific tax situation (mortgage interest deduction)")
        next_steps.append("Consider your job stability and likelihood of moving")
    else:
        recommendation = (
            f"Renting appears to be more cost-effective, saving you "
            f"{format_cents(abs(cost_difference))} over {years} years."
        )
        next_steps.append("Consider investing the down payment in index funds or other investments")
        next_steps.append("Re-evaluate when rent increases or if home prices change significantly")
        next_steps.append("Factor in the flexibility benefits of renting")

    if inputs.monthly_income and total_monthly_payment / inputs.monthly_income > MAX_HOUSING_TO_INCOME:
        warnings.append("Housing payment would exceed 28% of income - consider a less expensive property")

    if inputs.down_payment_percent < PMI_DOWN_PAYMENT:
        warnings.append("Down payment below 20% typically requires PMI, increasing monthly costs")

    if monthly_difference > inputs.monthly_rent * 0.5:
        warnings.append("Buying costs significantly more monthly - ensure you can afford the payment")

    if inputs.home_appreciation_rate > OPTIMISTIC_APPRECIATION:
        warnings.append("Home appreciation rate above 5% may be optimistic for long-term planning")

    assumptions = [
        f"Home appreciates at {format_percent(inputs.home_appreciation_rate)} annually",
        f"Rent increases at {format_percent(inputs.rent_increase_rate)} annually",
        f"Investment return rate: {format_percent(inputs.investment_return_rate)}",
        f"Property tax rate: {format_percent(inputs.property_tax_rate, 2)}",
        f"Maintenance costs: {format_percent(inputs.maintenance_rate)} of home value annually",
        "Break-even year is an estimate under constant rates",
    ]

    return RentVsBuyResults(
        buy_scenario=BuyScenario(
            total_cost=buy.total_cost,
            monthly_payment=total_monthly_payment,
            total_interest=buy.total_interest,
            total_principal=buy.total_principal,
            total_maintenance=buy.total_maintenance,
            total_taxes=buy.total_taxes,
            total_insurance=buy.total_insurance,
            total_hoa=buy.total_hoa,
            home_value=buy.home_value,
            equity=buy.equity,
            net_cost=buy.net_cost,
        ),
        rent_scenario=rent_scenario,
        comparison=RentVsBuyComparison(
            buying_is_better=buying_is_better,
            cost_difference=cost_difference,
            break_even_years=find_break_even_year(inputs, max(years, BREAK_EVEN_SEARCH_YEARS)),
            monthly_difference=monthly_difference,
        ),
        recommendation=recommendation,
        next_steps=next_steps,
        warnings=warnings,
        assumptions=assumptions,
    )
