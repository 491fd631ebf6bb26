"""Household financial health ratios"""

import math

from copilot_engine.utils.money import round_cents


def debt_to_income_ratio(monthly_debt: int, monthly_income: int) -> float:
    """Monthly debt payments / monthly income (0.0 when there is no income)"""
    if monthly_income == 0:
        return 0.0
    return monthly_debt / monthly_income


def savings_rate(monthly_income: int, monthly_expenses: int, monthly_debt: int) -> float:
    """Share of income left after expenses and debt, never below zero"""
    if monthly_income == 0:
        return 0.0
    savings = monthly_income - (monthly_expenses + monthly_debt)
    return max(0.0, savings / monthly_income)


def emergency_fund_months(current_savings: int, monthly_expenses: int, monthly_debt: int) -> float:
    """Months of expenses and debt covered by savings; infinite when nothing is owed"""
    monthly_needs = monthly_expenses + monthly_debt
    if monthly_needs == 0:
        return math.inf
    return current_savings / monthly_needs


def annual_to_monthly(annual_amount: int) -> int:
    return round_cents(annual_amount / 12)


def monthly_to_annual(monthly_amount: int) -> int:
    return monthly_amount * 12
