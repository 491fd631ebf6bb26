"""Debt consolidation calculator - compares existing debts against consolidation loans"""

from typing import Dict, List, Optional

from copilot_engine.domain.amortization import (
    NEVER_PAID_OFF,
    lifetime_interest,
    monthly_payment,
    payoff_months,
    total_interest,
)
from copilot_engine.domain.models import (
    ConsolidationComparison,
    ConsolidationOption,
    ConsolidationType,
    DebtConsolidationInputs,
    DebtConsolidationResults,
)
from copilot_engine.utils.money import format_cents

# Max share of annual income a consolidated loan may represent
DTI_CEILING = 0.36

MIN_CREDIT_SCORE: Dict[ConsolidationType, int] = {
    ConsolidationType.PERSONAL_LOAN: 600,
    ConsolidationType.BALANCE_TRANSFER: 650,
    ConsolidationType.HELOC: 680,
}

HIGH_PAYMENT_BURDEN = 0.4

# Seed options used when the caller has no specific offers; not lender data
DEFAULT_CONSOLIDATION_OPTIONS: List[ConsolidationOption] = [
    ConsolidationOption(type=ConsolidationType.PERSONAL_LOAN, rate=0.12, term=60, fees=0),
    ConsolidationOption(type=ConsolidationType.BALANCE_TRANSFER, rate=0.18, term=36, fees=30_000),
    ConsolidationOption(type=ConsolidationType.HELOC, rate=0.08, term=120, fees=50_000),
]


def check_eligibility(
    option: ConsolidationOption,
    total_debt: int,
    monthly_income: int,
    credit_score: Optional[int] = None,
) -> bool:
    """
    Decide whether the user could plausibly qualify for an option.

    All checks must pass:
    - total debt within 36% of annual income
    - credit score at or above the option's threshold (only if a score is known)
    - total debt within the option's max amount (if the option has one)
    """
    max_loan_amount = monthly_income * DTI_CEILING * 12
    if total_debt > max_loan_amount:
        return False

    if credit_score is not None and credit_score < MIN_CREDIT_SCORE[option.type]:
        return False

    if option.max_amount is not None and total_debt > option.max_amount:
        return False

    return True


def _ineligible(option: ConsolidationOption) -> ConsolidationComparison:
    return ConsolidationComparison(
        type=option.type,
        eligible=False,
        new_monthly_payment=0,
        total_interest=0,
        months_saved=0,
        total_savings=0,
        rate=option.rate,
        term=option.term,
        fees=option.fees,
    )


def _option_label(option_type: ConsolidationType) -> str:
    return option_type.value.replace("_", " ")


def calculate_debt_consolidation(inputs: DebtConsolidationInputs) -> DebtConsolidationResults:
    """
    Compare current debts against each consolidation option.

    Ineligible options are returned with eligible=False and zeroed numbers;
    the best eligible option is the one with the highest total savings.
    """
    debts = inputs.existing_debts
    total_current_debt = sum(d.balance for d in debts)
    total_current_payment = sum(d.monthly_payment for d in debts)

    current_months = [payoff_months(d.balance, d.monthly_payment, d.interest_rate) for d in debts]
    total_current_interest = sum(
        lifetime_interest(d.balance, d.monthly_payment, d.interest_rate) for d in debts
    )
    current_max_months = max(current_months, default=0)
    # Savings against a balance that never clears are not meaningful
    never_paid_off = current_max_months == NEVER_PAID_OFF

    comparisons: List[ConsolidationComparison] = []
    for option in inputs.consolidation_options:
        if not check_eligibility(option, total_current_debt, inputs.monthly_income, inputs.credit_score):
            comparisons.append(_ineligible(option))
            continue

        new_payment = monthly_payment(total_current_debt, option.rate, option.term)
        new_interest = max(0, total_interest(new_payment, option.term, total_current_debt))
        savings = 0 if never_paid_off else max(0, total_current_interest - new_interest - option.fees)

        comparisons.append(
            ConsolidationComparison(
                type=option.type,
                eligible=True,
                new_monthly_payment=new_payment,
                total_interest=new_interest,
                months_saved=max(0, current_max_months - option.term),
                total_savings=savings,
                rate=option.rate,
                term=option.term,
                fees=option.fees,
            )
        )

    eligible = [c for c in comparisons if c.eligible]
    next_steps: List[str] = []
    warnings: List[str] = []

    if not eligible:
        recommendation = (
            "Based on your current situation, debt consolidation may not be the best option right now."
        )
        next_steps.append("Focus on paying down existing debt to improve your debt-to-income ratio")
        next_steps.append("Consider increasing your income or reducing other expenses")
        if inputs.credit_score is not None and inputs.credit_score < 650:
            next_steps.append("Work on improving your credit score")
    elif never_paid_off:
        recommendation = (
            "At least one of your current payments does not cover its interest, so your debt will never "
            "be paid off as things stand. Raise those payments before comparing consolidation savings."
        )
        next_steps.append("Increase each flagged payment above the monthly interest it accrues")
        next_steps.append("Compare consolidation offers again once every debt is shrinking")
    else:
        # First option wins ties, matching the order the caller listed them
        best = max(eligible, key=lambda c: c.total_savings)
        if best.total_savings > 0:
            recommendation = (
                f"A {_option_label(best.type)} appears to be your best consolidation option, "
                f"potentially saving you {format_cents(best.total_savings)} over the life of the loan."
            )
            next_steps.append("Shop around with multiple lenders for the best rates")
            next_steps.append("Check for any prepayment penalties on existing debts")
            next_steps.append("Calculate the break-even point including all fees")
        else:
            recommendation = (
                "While you may qualify for consolidation, the savings would be minimal with current rates."
            )
            next_steps.append("Consider focusing on the debt avalanche method instead")
            next_steps.append("Look for promotional rates or better terms")

    if inputs.monthly_income > 0 and total_current_payment / inputs.monthly_income > HIGH_PAYMENT_BURDEN:
        warnings.append("Your current debt payments are high relative to your income")

    if any(c.new_monthly_payment > total_current_payment for c in eligible):
        warnings.append("Some consolidation options would increase your monthly payment")

    for debt, months in zip(debts, current_months):
        if months == NEVER_PAID_OFF:
            warnings.append(
                f"The current payment on {debt.name} does not cover its interest and will never pay it off"
            )

    return DebtConsolidationResults(
        total_current_debt=total_current_debt,
        total_current_payment=total_current_payment,
        total_current_interest=total_current_interest,
        consolidation_comparison=comparisons,
        recommendation=recommendation,
        next_steps=next_steps,
        warnings=warnings,
    )
