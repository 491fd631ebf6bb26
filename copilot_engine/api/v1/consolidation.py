"""POST /v1/debt-consolidation - compare debts against consolidation loans"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, Depends, HTTPException, Request

from copilot_engine.api.v1.schemas import DebtConsolidationRequest, DebtConsolidationResponse
from copilot_engine.api.dependencies import get_default_consolidation_options, get_request_id
from copilot_engine.domain.amortization import NEVER_PAID_OFF
from copilot_engine.domain.consolidation import calculate_debt_consolidation
from copilot_engine.domain.exceptions import DomainException
from copilot_engine.domain.models import ConsolidationOption, DebtConsolidationResults
from copilot_engine.infrastructure.observability.metrics import record_calculation
from copilot_engine.infrastructure.observability.logging import log_calculation

router = APIRouter()

CALCULATOR = "debt_consolidation"


def _outcome(results: DebtConsolidationResults) -> str:
    eligible = [c for c in results.consolidation_comparison if c.eligible]
    if not eligible:
        return "ineligible"
    if results.total_current_interest == NEVER_PAID_OFF:
        return "never_paid_off"
    if max(c.total_savings for c in eligible) > 0:
        return "recommended"
    return "minimal_savings"


@router.post("/debt-consolidation", response_model=DebtConsolidationResponse)
def create_consolidation_analysis(
    request_body: DebtConsolidationRequest,
    request: Request,
    default_options: list[ConsolidationOption] = Depends(get_default_consolidation_options),
):
    """
    Compare current debts against consolidation offers.

    Flow:
    1. Fall back to default offers when none are supplied
    2. Check eligibility (DTI, credit score, max amount) per offer
    3. Price eligible offers and rank them by total savings
    4. Return comparison with recommendation, next steps and warnings
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        results = calculate_debt_consolidation(request_body.to_domain(default_options))

        duration = time.time() - start_time
        outcome = _outcome(results)
        converges = results.total_current_interest != NEVER_PAID_OFF
        record_calculation(CALCULATOR, outcome, duration, converges=converges)
        log_calculation(
            request_id,
            CALCULATOR,
            outcome,
            duration * 1000,
            debt_count=len(request_body.existing_debts),
            total_debt_cents=results.total_current_debt,
        )

        return DebtConsolidationResponse.model_validate(asdict(results))

    except DomainException as e:
        logging.warning(f"Invalid consolidation input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
