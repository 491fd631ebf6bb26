"""POST /v1/financial-ratios - household health ratios"""

import math
from fastapi import APIRouter

from copilot_engine.api.v1.schemas import FinancialRatiosRequest, FinancialRatiosResponse
from copilot_engine.domain.ratios import (
    annual_to_monthly,
    debt_to_income_ratio,
    emergency_fund_months,
    monthly_to_annual,
    savings_rate,
)

router = APIRouter()


@router.post("/financial-ratios", response_model=FinancialRatiosResponse)
def get_financial_ratios(request_body: FinancialRatiosRequest):
    """
    Debt-to-income, savings rate and emergency fund coverage.

    Yearly bills are folded into monthly expenses before any ratio is taken.
    """
    income = request_body.monthly_income
    debt = request_body.monthly_debt
    expenses = request_body.monthly_expenses + annual_to_monthly(request_body.annual_expenses)

    months = emergency_fund_months(request_body.current_savings, expenses, debt)

    return FinancialRatiosResponse(
        debt_to_income_ratio=debt_to_income_ratio(debt, income),
        savings_rate=savings_rate(income, expenses, debt),
        emergency_fund_months=None if math.isinf(months) else round(months, 2),
        monthly_expenses=expenses,
        annual_debt_payments=monthly_to_annual(debt),
    )
