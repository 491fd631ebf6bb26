"""Debt payoff strategy calculator - current plan vs avalanche vs snowball"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Tuple

from copilot_engine.domain.amortization import (
    MAX_PAYOFF_MONTHS,
    NEVER_PAID_OFF,
    amortization_schedule,
    payoff_months,
    schedule_months,
)
from copilot_engine.domain.exceptions import EmptyDebtListError, InvalidInputError
from copilot_engine.domain.models import (
    Debt,
    DebtPayoffInputs,
    DebtPayoffResults,
    DebtPayoffSummary,
    PayoffStep,
    PayoffStrategy,
)
from copilot_engine.utils.money import format_cents, round_cents

logger = logging.getLogger(__name__)

AVALANCHE = "Debt Avalanche"
SNOWBALL = "Debt Snowball"
CURRENT = "Current Plan"

HIGH_PAYMENT_BURDEN = 0.4
HIGH_INTEREST_RATE = 0.2

# Consecutive months without a drop in total balance before giving up
STALL_LIMIT = 12


@dataclass(frozen=True)
class DebtBalance:
    """Running state of one debt inside a payoff simulation"""

    name: str
    balance: int
    monthly_payment: int
    interest_rate: float
    interest_paid: int = 0
    cleared_month: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.balance > 0


@dataclass(frozen=True)
class PayoffState:
    """Snapshot of every debt after `month` simulated months"""

    debts: Tuple[DebtBalance, ...]
    month: int = 0
    target: Optional[int] = None

    @property
    def total_balance(self) -> int:
        return sum(d.balance for d in self.debts)

    @property
    def is_settled(self) -> bool:
        return not any(d.is_open for d in self.debts)


PriorityKey = Callable[[DebtBalance], tuple]


def avalanche_priority(debt: DebtBalance) -> tuple:
    """Highest rate first; smaller balance breaks ties"""
    return (-debt.interest_rate, debt.balance)


def snowball_priority(debt: DebtBalance) -> tuple:
    """Smallest balance first; higher rate breaks ties"""
    return (debt.balance, -debt.interest_rate)


def initial_state(debts: List[Debt]) -> PayoffState:
    return PayoffState(
        debts=tuple(
            DebtBalance(
                name=d.name,
                balance=d.balance,
                monthly_payment=d.monthly_payment,
                interest_rate=d.interest_rate,
                cleared_month=0 if d.balance <= 0 else None,
            )
            for d in debts
        )
    )


def select_target(state: PayoffState, priority: PriorityKey) -> Optional[int]:
    """Keep the current target while it is open, otherwise pick the next by priority"""
    if state.target is not None and state.debts[state.target].is_open:
        return state.target

    open_indexes = [i for i, d in enumerate(state.debts) if d.is_open]
    if not open_indexes:
        return None
    return min(open_indexes, key=lambda i: priority(state.debts[i]))


def advance_month(state: PayoffState, budget: int, priority: PriorityKey) -> PayoffState:
    """
    Simulate one month and return the next state.

    1. Every open debt accrues interest, rounded to the cent.
    2. Every open debt receives its own scheduled payment.
    3. Whatever is left of the budget (extra payment, payments freed by cleared
       debts, overpayment on a debt that just cleared) goes to the target, then
       to the next open debts in priority order.
    """
    month = state.month + 1
    target = select_target(state, priority)

    balances = []
    interest_paid = []
    for debt in state.debts:
        interest = round_cents(debt.balance * debt.interest_rate / 12) if debt.is_open else 0
        balances.append(debt.balance + interest)
        interest_paid.append(debt.interest_paid + interest)

    pool = budget
    for i, debt in enumerate(state.debts):
        if debt.is_open:
            paid = min(debt.monthly_payment, balances[i], pool)
            balances[i] -= paid
            pool -= paid

    open_indexes = [i for i, d in enumerate(state.debts) if d.is_open and balances[i] > 0]
    rest = sorted((i for i in open_indexes if i != target), key=lambda i: priority(state.debts[i]))
    order = ([target] if target in open_indexes else []) + rest
    for i in order:
        if pool <= 0:
            break
        paid = min(pool, balances[i])
        balances[i] -= paid
        pool -= paid

    debts = tuple(
        replace(
            debt,
            balance=balances[i],
            interest_paid=interest_paid[i],
            cleared_month=month if debt.is_open and balances[i] <= 0 else debt.cleared_month,
        )
        for i, debt in enumerate(state.debts)
    )
    return PayoffState(debts=debts, month=month, target=target)


def simulate_payoff(
    debts: List[Debt],
    extra_payment: int,
    priority: PriorityKey,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> PayoffState:
    """Fold advance_month until every debt is cleared or the plan stalls"""
    budget = sum(d.monthly_payment for d in debts) + extra_payment
    state = initial_state(debts)
    stalled = 0

    while not state.is_settled and state.month < max_months:
        next_state = advance_month(state, budget, priority)
        stalled = stalled + 1 if next_state.total_balance >= state.total_balance else 0
        state = next_state
        if stalled >= STALL_LIMIT:
            break

    return state


def _strategy_from_state(
    name: str,
    description: str,
    state: PayoffState,
    total_principal: int,
    monthly_payment: int,
) -> PayoffStrategy:
    converges = state.is_settled
    if not converges:
        logger.debug("%s did not converge after %d months", name, state.month)

    cleared = sorted(
        enumerate(state.debts),
        key=lambda item: (
            item[1].cleared_month if item[1].cleared_month is not None else NEVER_PAID_OFF,
            item[0],
        ),
    )
    payoff_order = [
        PayoffStep(
            name=debt.name,
            months=debt.cleared_month if debt.cleared_month is not None else NEVER_PAID_OFF,
            interest_paid=debt.interest_paid,
        )
        for _, debt in cleared
    ]

    return PayoffStrategy(
        strategy_name=name,
        description=description,
        total_months=state.month if converges else NEVER_PAID_OFF,
        total_interest=sum(d.interest_paid for d in state.debts),
        total_principal=total_principal,
        payoff_order=payoff_order,
        monthly_payment=monthly_payment,
        converges=converges,
    )


def calculate_current_strategy(debts: List[Debt]) -> PayoffStrategy:
    """
    Each debt paid independently at its own payment, no rollover.

    Months and interest both come from the cent-rounded schedule, so a single
    debt matches what the avalanche and snowball simulations report for it.
    """
    steps = []
    for debt in debts:
        schedule = amortization_schedule(debt.balance, debt.monthly_payment, debt.interest_rate)
        steps.append(
            PayoffStep(
                name=debt.name,
                months=schedule_months(schedule),
                interest_paid=sum(r.interest for r in schedule),
            )
        )

    total_months = max((s.months for s in steps), default=0)
    return PayoffStrategy(
        strategy_name=CURRENT,
        description="Continue making current minimum payments on all debts",
        total_months=total_months,
        total_interest=sum(s.interest_paid for s in steps),
        total_principal=sum(d.balance for d in debts),
        payoff_order=sorted(steps, key=lambda s: s.months),
        monthly_payment=sum(d.monthly_payment for d in debts),
        converges=total_months != NEVER_PAID_OFF,
    )


def calculate_avalanche_strategy(debts: List[Debt], extra_payment: int = 0) -> PayoffStrategy:
    """Minimums on everything, surplus to the highest interest rate"""
    state = simulate_payoff(debts, extra_payment, avalanche_priority)
    return _strategy_from_state(
        AVALANCHE,
        "Pay minimums on all debts, then put extra money toward the debt with the highest interest rate",
        state,
        total_principal=sum(d.balance for d in debts),
        monthly_payment=sum(d.monthly_payment for d in debts) + extra_payment,
    )


def calculate_snowball_strategy(debts: List[Debt], extra_payment: int = 0) -> PayoffStrategy:
    """Minimums on everything, surplus to the smallest balance"""
    state = simulate_payoff(debts, extra_payment, snowball_priority)
    return _strategy_from_state(
        SNOWBALL,
        "Pay minimums on all debts, then put extra money toward the debt with the smallest balance",
        state,
        total_principal=sum(d.balance for d in debts),
        monthly_payment=sum(d.monthly_payment for d in debts) + extra_payment,
    )


def _months_saved(current: PayoffStrategy, strategy: PayoffStrategy) -> int:
    if not (current.converges and strategy.converges):
        return 0
    return max(0, current.total_months - strategy.total_months)


def _interest_saved(current: PayoffStrategy, strategy: PayoffStrategy) -> int:
    """Savings only exist between two plans that both reach a zero balance"""
    if not (current.converges and strategy.converges):
        return 0
    return max(0, current.total_interest - strategy.total_interest)


def _is_close(gap: int, reference: int) -> bool:
    """Gap small enough that motivation may matter more than cost"""
    return gap <= max(10_000, reference // 10)


def calculate_debt_payoff_strategy(inputs: DebtPayoffInputs) -> DebtPayoffResults:
    """
    Compute current, avalanche and snowball plans and recommend one.

    Raises:
        EmptyDebtListError: no debts supplied
        InvalidInputError: negative extra payment
    """
    debts = inputs.debts
    if not debts:
        raise EmptyDebtListError("At least one debt is required for payoff strategy analysis")

    extra = inputs.extra_monthly_payment or 0
    if extra < 0:
        raise InvalidInputError("Extra monthly payment cannot be negative")

    current = calculate_current_strategy(debts)
    avalanche = calculate_avalanche_strategy(debts, extra)
    snowball = calculate_snowball_strategy(debts, extra)

    avalanche.interest_saved = _interest_saved(current, avalanche)
    snowball.interest_saved = _interest_saved(current, snowball)

    next_steps: List[str] = []
    warnings: List[str] = []
    recommended: Optional[str] = None

    if extra == 0:
        recommendation = "Consider adding extra monthly payments to accelerate debt payoff and save on interest."
        next_steps.append("Determine how much extra you can afford to pay monthly")
        next_steps.append("Choose between avalanche (save more interest) or snowball (build momentum)")
    elif not (avalanche.converges and snowball.converges):
        recommendation = (
            "Even with the extra payment your debts do not reach a zero balance, so the strategies "
            "cannot be compared. Increase your payments before choosing a method."
        )
        next_steps.append("Find room in your budget for a larger extra payment")
    else:
        if avalanche.total_interest < snowball.total_interest:
            recommended = AVALANCHE
            gap = snowball.total_interest - avalanche.total_interest
            recommendation = (
                f"The Debt Avalanche method will save you {format_cents(gap)} in interest "
                "compared to the Snowball method."
            )
            if _is_close(gap, avalanche.total_interest):
                recommendation += (
                    f" The Debt Snowball method costs only {format_cents(gap)} more "
                    "but may provide better psychological motivation."
                )
        elif snowball.total_interest < avalanche.total_interest:
            recommended = SNOWBALL
            gap = avalanche.total_interest - snowball.total_interest
            recommendation = (
                f"The Debt Snowball method will save you {format_cents(gap)} in interest "
                "and clears your smallest balances first."
            )
        else:
            recommended = "Either method"
            recommendation = (
                "Both avalanche and snowball methods result in similar total interest. "
                "Choose based on your preference for motivation vs optimization."
            )

        next_steps.append("Set up automatic payments for the extra amount")
        next_steps.append("Track progress monthly and adjust if needed")
        next_steps.append("Avoid taking on new debt during payoff period")

    proposed_payment = current.monthly_payment + extra
    if inputs.monthly_income and proposed_payment / inputs.monthly_income > HIGH_PAYMENT_BURDEN:
        warnings.append(
            "Your debt payments are high relative to income - consider increasing income or reducing expenses"
        )

    if any(d.interest_rate > HIGH_INTEREST_RATE for d in debts):
        warnings.append("Some debts have very high interest rates - consider debt consolidation options")

    uncovered = [
        d.name
        for d in debts
        if payoff_months(d.balance, d.monthly_payment, d.interest_rate) == NEVER_PAID_OFF
    ]
    for name in uncovered:
        warnings.append(f"The current payment on {name} does not cover its interest")
    if uncovered:
        next_steps.append("Raise every payment above the monthly interest its debt accrues")

    if not (avalanche.converges and snowball.converges):
        if uncovered:
            warnings.append("At this payment level your debts will never be fully paid off")
        else:
            years = MAX_PAYOFF_MONTHS // 12
            warnings.append(f"At this payment level your debts will take more than {years} years to pay off")

    summary = DebtPayoffSummary(
        total_debt=current.total_principal,
        current_monthly_payment=current.monthly_payment,
        proposed_monthly_payment=proposed_payment,
        max_interest_savings=max(avalanche.interest_saved, snowball.interest_saved),
        max_time_savings=max(_months_saved(current, avalanche), _months_saved(current, snowball)),
    )

    return DebtPayoffResults(
        current=current,
        avalanche=avalanche,
        snowball=snowball,
        recommended_strategy=recommended,
        recommendation=recommendation,
        summary=summary,
        next_steps=next_steps,
        warnings=warnings,
    )
