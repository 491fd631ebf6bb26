"""Pydantic schemas for API request/response validation"""

import math
from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, Field

from copilot_engine.config import settings
from copilot_engine.domain.models import (
    ConsolidationOption,
    ConsolidationType,
    Debt,
    DebtConsolidationInputs,
    DebtPayoffInputs,
    RentVsBuyInputs,
)


def _finite_or_none(value):
    """JSON has no infinity: months or interest of a never-ending payoff are sent as null"""
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


Months = Annotated[Optional[int], BeforeValidator(_finite_or_none)]
LifetimeCents = Annotated[Optional[int], BeforeValidator(_finite_or_none)]
Rate = Annotated[float, Field(ge=0.0, le=1.0)]


# Requests


class DebtSchema(BaseModel):
    """Existing debt in cents with an annual decimal rate"""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    balance: int = Field(..., ge=0, description="Outstanding principal in cents")
    monthly_payment: int = Field(..., gt=0, description="Scheduled payment in cents")
    interest_rate: float = Field(..., ge=0.0, le=0.5, description="Annual rate as decimal")

    def to_domain(self) -> Debt:
        return Debt(**self.model_dump())


class ConsolidationOptionSchema(BaseModel):
    type: ConsolidationType
    rate: float = Field(..., ge=0.0, le=0.5)
    term: int = Field(..., ge=1, le=360, description="Term in months")
    fees: int = Field(0, ge=0, description="Upfront fees in cents")
    max_amount: Optional[int] = Field(None, ge=0, description="Maximum loan amount in cents")

    def to_domain(self) -> ConsolidationOption:
        return ConsolidationOption(**self.model_dump())


class DebtConsolidationRequest(BaseModel):
    """Request body for POST /v1/debt-consolidation"""

    existing_debts: List[DebtSchema] = Field(..., min_length=1, max_length=settings.max_debts)
    consolidation_options: Optional[List[ConsolidationOptionSchema]] = Field(
        None, description="Defaults to the standard personal loan, balance transfer and HELOC offers"
    )
    monthly_income: int = Field(..., ge=0)
    credit_score: Optional[int] = Field(None, ge=300, le=850)

    def to_domain(self, default_options: List[ConsolidationOption]) -> DebtConsolidationInputs:
        options = (
            [o.to_domain() for o in self.consolidation_options]
            if self.consolidation_options
            else list(default_options)
        )
        return DebtConsolidationInputs(
            existing_debts=[d.to_domain() for d in self.existing_debts],
            consolidation_options=options,
            monthly_income=self.monthly_income,
            credit_score=self.credit_score,
        )


class DebtPayoffRequest(BaseModel):
    """Request body for POST /v1/debt-payoff"""

    debts: List[DebtSchema] = Field(..., min_length=1, max_length=settings.max_debts)
    extra_monthly_payment: int = Field(0, ge=0)
    monthly_income: Optional[int] = Field(None, ge=0)

    def to_domain(self) -> DebtPayoffInputs:
        return DebtPayoffInputs(
            debts=[d.to_domain() for d in self.debts],
            extra_monthly_payment=self.extra_monthly_payment,
            monthly_income=self.monthly_income,
        )


class RentVsBuyRequest(BaseModel):
    """Request body for POST /v1/rent-vs-buy"""

    property_price: int = Field(..., gt=0)
    down_payment_percent: Rate
    mortgage_rate: Rate
    mortgage_term_years: int = Field(..., ge=1, le=50)
    monthly_rent: int = Field(..., gt=0)
    rent_increase_rate: Rate
    property_tax_rate: Rate
    home_insurance: int = Field(..., ge=0, description="Annual premium in cents")
    maintenance_rate: Rate
    home_appreciation_rate: Rate
    investment_return_rate: Rate
    time_horizon_years: int = Field(..., ge=1, le=50)
    hoa_fees: int = Field(0, ge=0, description="Monthly HOA dues in cents")
    closing_costs: int = Field(0, ge=0)
    monthly_income: Optional[int] = Field(None, ge=0)

    def to_domain(self) -> RentVsBuyInputs:
        return RentVsBuyInputs(**self.model_dump())


class FinancialRatiosRequest(BaseModel):
    """Request body for POST /v1/financial-ratios"""

    monthly_income: int = Field(..., ge=0)
    monthly_expenses: int = Field(0, ge=0)
    monthly_debt: int = Field(0, ge=0)
    annual_expenses: int = Field(0, ge=0, description="Bills paid once a year, spread over 12 months")
    current_savings: int = Field(0, ge=0)


# Responses


class ConsolidationComparisonSchema(BaseModel):
    type: ConsolidationType
    eligible: bool
    new_monthly_payment: int
    total_interest: int
    months_saved: Months
    total_savings: int
    rate: float
    term: int
    fees: int


class DebtConsolidationResponse(BaseModel):
    total_current_debt: int
    total_current_payment: int
    total_current_interest: LifetimeCents
    consolidation_comparison: List[ConsolidationComparisonSchema]
    recommendation: str
    next_steps: List[str]
    warnings: List[str]


class PayoffStepSchema(BaseModel):
    name: str
    months: Months
    interest_paid: int


class PayoffStrategySchema(BaseModel):
    strategy_name: str
    description: str
    total_months: Months
    total_interest: int
    total_principal: int
    total_amount: int
    monthly_payment: int
    interest_saved: int
    converges: bool
    payoff_order: List[PayoffStepSchema]


class DebtPayoffSummarySchema(BaseModel):
    total_debt: int
    current_monthly_payment: int
    proposed_monthly_payment: int
    max_interest_savings: int
    max_time_savings: Months


class DebtPayoffResponse(BaseModel):
    strategies: List[PayoffStrategySchema]
    recommended_strategy: Optional[str] = None
    recommendation: str
    next_steps: List[str]
    warnings: List[str]
    summary: DebtPayoffSummarySchema


class BuyScenarioSchema(BaseModel):
    total_cost: int
    monthly_payment: int
    total_interest: int
    total_principal: int
    total_maintenance: int
    total_taxes: int
    total_insurance: int
    total_hoa: int
    home_value: int
    equity: int
    net_cost: int


class RentScenarioSchema(BaseModel):
    total_rent_paid: int
    average_monthly_rent: int
    down_payment_invested: int
    total_cost: int


class RentVsBuyComparisonSchema(BaseModel):
    buying_is_better: bool
    cost_difference: int
    break_even_years: Optional[int] = None
    monthly_difference: int


class RentVsBuyResponse(BaseModel):
    buy_scenario: BuyScenarioSchema
    rent_scenario: RentScenarioSchema
    comparison: RentVsBuyComparisonSchema
    recommendation: str
    next_steps: List[str]
    warnings: List[str]
    assumptions: List[str]


class FinancialRatiosResponse(BaseModel):
    debt_to_income_ratio: float
    savings_rate: float
    emergency_fund_months: Optional[float] = None  # null when nothing is owed
    monthly_expenses: int
    annual_debt_payments: int
