"""Domain models - pure Python dataclasses representing calculator inputs and results"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ConsolidationType(str, Enum):
    """Kinds of consolidation loan the engine can compare"""

    PERSONAL_LOAN = "personal_loan"
    BALANCE_TRANSFER = "balance_transfer"
    HELOC = "heloc"


@dataclass
class Debt:
    """Existing obligation supplied by the caller"""

    id: str
    name: str
    balance: int  # cents
    monthly_payment: int  # cents
    interest_rate: float  # annual, decimal


@dataclass
class AmortizationRow:
    """Single month of an amortization schedule"""

    month: int
    payment: int
    interest: int
    principal: int
    balance: int


# Debt consolidation


@dataclass
class ConsolidationOption:
    """Candidate consolidation loan"""

    type: ConsolidationType
    rate: float
    term: int  # months
    fees: int  # cents, upfront
    max_amount: Optional[int] = None  # cents


@dataclass
class DebtConsolidationInputs:
    existing_debts: List[Debt]
    consolidation_options: List[ConsolidationOption]
    monthly_income: int
    credit_score: Optional[int] = None


@dataclass
class ConsolidationComparison:
    """Outcome of one consolidation option against the current debts"""

    type: ConsolidationType
    eligible: bool
    new_monthly_payment: int
    total_interest: int
    months_saved: int | float  # inf when a current debt never pays off
    total_savings: int
    rate: float
    term: int
    fees: int


@dataclass
class DebtConsolidationResults:
    total_current_debt: int
    total_current_payment: int
    total_current_interest: int | float  # inf when a current debt never pays off
    consolidation_comparison: List[ConsolidationComparison]
    recommendation: str
    next_steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


# Debt payoff strategy


@dataclass
class PayoffStep:
    """A debt reaching zero balance within a strategy"""

    name: str
    months: int | float
    interest_paid: int


@dataclass
class PayoffStrategy:
    strategy_name: str
    description: str
    total_months: int | float
    total_interest: int
    total_principal: int
    payoff_order: List[PayoffStep]
    monthly_payment: int
    interest_saved: int = 0
    converges: bool = True

    @property
    def total_amount(self) -> int:
        return self.total_principal + self.total_interest


@dataclass
class DebtPayoffInputs:
    debts: List[Debt]
    extra_monthly_payment: int = 0
    monthly_income: Optional[int] = None


@dataclass
class DebtPayoffSummary:
    total_debt: int
    current_monthly_payment: int
    proposed_monthly_payment: int
    max_interest_savings: int
    max_time_savings: int | float


@dataclass
class DebtPayoffResults:
    current: PayoffStrategy
    avalanche: PayoffStrategy
    snowball: PayoffStrategy
    recommended_strategy: Optional[str]  # None until an extra payment is planned
    recommendation: str
    summary: DebtPayoffSummary
    next_steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def strategies(self) -> List[PayoffStrategy]:
        return [self.current, self.avalanche, self.snowball]


# Rent vs buy


@dataclass
class RentVsBuyInputs:
    property_price: int
    down_payment_percent: float
    mortgage_rate: float
    mortgage_term_years: int
    monthly_rent: int
    rent_increase_rate: float
    property_tax_rate: float
    home_insurance: int  # annual, cents
    maintenance_rate: float  # annual share of home value
    home_appreciation_rate: float
    investment_return_rate: float
    time_horizon_years: int
    hoa_fees: int = 0  # monthly, cents
    closing_costs: int = 0
    monthly_income: Optional[int] = None


@dataclass
class BuyScenario:
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


@dataclass
class RentScenario:
    total_rent_paid: int
    average_monthly_rent: int
    down_payment_invested: int
    total_cost: int


@dataclass
class RentVsBuyComparison:
    buying_is_better: bool
    cost_difference: int  # positive = buying costs more
    break_even_years: Optional[int]  # approximate; None when no crossover found
    monthly_difference: int


@dataclass
class RentVsBuyResults:
    buy_scenario: BuyScenario
    rent_scenario: RentScenario
    comparison: RentVsBuyComparison
    recommendation: str
    next_steps: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    assumptions: List[str] = field(default_factory=list)
