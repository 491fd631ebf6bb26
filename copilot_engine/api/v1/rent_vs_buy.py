"""POST /v1/rent-vs-buy - project owning against renting"""

import time
import logging
from dataclasses import asdict
from fastapi import APIRouter, HTTPException, Request

from copilot_engine.api.v1.schemas import RentVsBuyRequest, RentVsBuyResponse
from copilot_engine.api.dependencies import get_request_id
from copilot_engine.domain.rent_vs_buy import calculate_rent_vs_buy
from copilot_engine.domain.exceptions import DomainException
from copilot_engine.infrastructure.observability.metrics import record_calculation
from copilot_engine.infrastructure.observability.logging import log_calculation

router = APIRouter()

CALCULATOR = "rent_vs_buy"


@router.post("/rent-vs-buy", response_model=RentVsBuyResponse)
def create_rent_vs_buy(request_body: RentVsBuyRequest, request: Request):
    """
    Compare total cost of ownership against renting over the time horizon.

    break_even_years is an estimate from a year-by-year projection and is null
    when buying never catches up within the search window.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        results = calculate_rent_vs_buy(request_body.to_domain())

        duration = time.time() - start_time
        outcome = "buy" if results.comparison.buying_is_better else "rent"
        record_calculation(CALCULATOR, outcome, duration)
        log_calculation(
            request_id,
            CALCULATOR,
            outcome,
            duration * 1000,
            time_horizon_years=request_body.time_horizon_years,
            cost_difference_cents=results.comparison.cost_difference,
        )

        return RentVsBuyResponse.model_validate(asdict(results))

    except DomainException as e:
        logging.warning(f"Invalid rent vs buy input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
