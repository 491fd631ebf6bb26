"""Amortization primitives shared by every calculator.

All amounts are integer cents, rates are annual decimals and terms are months.
"""

import math
from typing import List, Tuple

from copilot_engine.domain.models import AmortizationRow
from copilot_engine.utils.money import round_cents

# Sentinel for a payment that never clears its balance
NEVER_PAID_OFF = math.inf

# Ceiling on simulated months (100 years); a plan still open here is reported as never paid off
MAX_PAYOFF_MONTHS = 1200


def monthly_payment(principal: int, annual_rate: float, term_months: int) -> int:
    """
    Level monthly payment (PMT) for a fully amortizing loan.

    PMT = P * r(1+r)^n / ((1+r)^n - 1), with r the monthly rate.
    A zero rate degrades to straight-line principal / n.

    Returns 0 for a non-positive principal or term instead of raising.

    Example:
        monthly_payment(120000, 0, 12) -> 10000
    """
    if principal <= 0 or term_months <= 0:
        return 0

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return round_cents(principal / term_months)

    growth = (1 + monthly_rate) ** term_months
    payment = principal * (monthly_rate * growth) / (growth - 1)
    return round_cents(payment)


def total_interest(payment: int, months: int, principal: int) -> int:
    """Interest paid over a fixed schedule: payment * months - principal"""
    return payment * months - principal


def payoff_months(balance: int, payment: int, annual_rate: float) -> int | float:
    """
    Months needed to clear a balance with a fixed monthly payment.

    Solves n = -ln(1 - B*r/PMT) / ln(1+r). When the payment does not exceed the
    first month's interest the log argument is <= 0, so that case is detected
    up front and NEVER_PAID_OFF is returned.
    """
    if balance <= 0:
        return 0
    if payment <= 0:
        return NEVER_PAID_OFF

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return math.ceil(balance / payment)

    if payment <= balance * monthly_rate:
        return NEVER_PAID_OFF

    months = -math.log(1 - (balance * monthly_rate) / payment) / math.log(1 + monthly_rate)
    # Trim float noise so an exact term does not ceil to term + 1
    return math.ceil(round(months, 9))


def remaining_balance(principal: int, payment: int, annual_rate: float, months_paid: int) -> int:
    """
    Outstanding balance after months_paid level payments.

    B_k = P(1+r)^k - PMT((1+r)^k - 1)/r, clamped at zero once the loan is repaid.
    """
    if months_paid <= 0:
        return max(0, principal)

    monthly_rate = annual_rate / 12
    if monthly_rate == 0:
        return max(0, principal - payment * months_paid)

    growth = (1 + monthly_rate) ** months_paid
    balance = principal * growth - payment * (growth - 1) / monthly_rate
    return max(0, round_cents(balance))


def split_payment(balance: int, payment: int, annual_rate: float) -> Tuple[int, int]:
    """
    Split one month's payment into (interest, principal).

    Interest is rounded to the cent before the split. The amount applied never
    exceeds balance + interest; principal is negative when the payment does not
    cover the interest (the shortfall is capitalised).
    """
    interest = round_cents(balance * annual_rate / 12)
    applied = min(payment, balance + interest)
    return interest, applied - interest


def amortization_schedule(
    principal: int,
    payment: int,
    annual_rate: float,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> List[AmortizationRow]:
    """
    Month-by-month schedule until the balance reaches zero or max_months elapse.

    With a fixed payment the interest only grows once a month fails to reduce
    the balance, so the schedule stops at that month. A schedule whose last row
    still carries a balance never pays off.
    """
    rows: List[AmortizationRow] = []
    balance = principal
    month = 0

    while balance > 0 and month < max_months:
        month += 1
        interest, principal_paid = split_payment(balance, payment, annual_rate)
        balance -= principal_paid
        rows.append(
            AmortizationRow(
                month=month,
                payment=interest + principal_paid,
                interest=interest,
                principal=principal_paid,
                balance=balance,
            )
        )
        if principal_paid <= 0:
            break

    return rows


def schedule_months(schedule: List[AmortizationRow]) -> int | float:
    """Length of a schedule that clears its balance, NEVER_PAID_OFF otherwise"""
    if schedule and schedule[-1].balance > 0:
        return NEVER_PAID_OFF
    return len(schedule)


def lifetime_interest(balance: int, payment: int, annual_rate: float) -> int | float:
    """
    Interest paid over the life of a debt at its current payment.

    Uses the closed-form payoff time. A debt that never pays off has no
    lifetime interest and reports NEVER_PAID_OFF.
    """
    months = payoff_months(balance, payment, annual_rate)
    if months == NEVER_PAID_OFF:
        return NEVER_PAID_OFF

    return max(0, total_interest(payment, months, balance))


def compound_growth(amount: int, annual_rate: float, years: int) -> int:
    """Amount compounded annually for the given number of years"""
    return round_cents(amount * (1 + annual_rate) ** years)
