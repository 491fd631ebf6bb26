"""POST /v1/debt-payoff - compare current plan, avalanche and snowball"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Request

from copilot_engine.api.v1.schemas import (
    DebtPayoffRequest,
    DebtPayoffResponse,
    DebtPayoffSummarySchema,
    PayoffStrategySchema,
)
from copilot_engine.api.dependencies import get_request_id
from copilot_engine.domain.payoff_strategy import calculate_debt_payoff_strategy
from copilot_engine.domain.exceptions import DomainException
from copilot_engine.infrastructure.observability.metrics import record_calculation
from copilot_engine.infrastructure.observability.logging import log_calculation

router = APIRouter()

CALCULATOR = "debt_payoff"

OUTCOME_LABELS = {
    "Debt Avalanche": "avalanche",
    "Debt Snowball": "snowball",
    "Either method": "either",
    None: "no_extra_payment",
}


@router.post("/debt-payoff", response_model=DebtPayoffResponse)
def create_payoff_strategy(request_body: DebtPayoffRequest, request: Request):
    """
    Simulate payoff plans for a set of debts.

    Returns current, avalanche and snowball strategies (in that order) with
    interest saved against the current plan. Months are null when a plan never
    reaches a zero balance.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        results = calculate_debt_payoff_strategy(request_body.to_domain())

        duration = time.time() - start_time
        converges = all(s.converges for s in results.strategies)
        if results.avalanche.converges and results.snowball.converges:
            outcome = OUTCOME_LABELS.get(results.recommended_strategy, "unknown")
        else:
            outcome = "never_paid_off"
        record_calculation(CALCULATOR, outcome, duration, converges=converges)
        log_calculation(
            request_id,
            CALCULATOR,
            outcome,
            duration * 1000,
            debt_count=len(request_body.debts),
            extra_payment_cents=request_body.extra_monthly_payment,
        )

        return DebtPayoffResponse(
            strategies=[
                PayoffStrategySchema(**asdict(s), total_amount=s.total_amount)
                for s in results.strategies
            ],
            recommended_strategy=results.recommended_strategy,
            recommendation=results.recommendation,
            next_steps=results.next_steps,
            warnings=results.warnings,
            summary=DebtPayoffSummarySchema.model_validate(asdict(results.summary)),
        )

    except DomainException as e:
        logging.warning(f"Invalid payoff input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
