"""GET /v1/rates - Normalized contractual and overdue rate timeline"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from interest_gateway.api.dependencies import get_rate_service, get_request_id
from interest_gateway.api.v1.schemas import RatePeriodSchema, RatesResponse
from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.infrastructure.sources.selector import RateService

router = APIRouter()


@router.get("/rates", response_model=RatesResponse)
async def get_rates(request: Request, rate_service: RateService = Depends(get_rate_service)):
    """
    Retrieve the rate timeline, oldest period first.

    Adjacent periods with identical rates are already merged.
    """
    request_id = get_request_id(request)

    try:
        periods = await rate_service.get_periods()
    except AcquisitionError as e:
        logging.error(f"Rate acquisition failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Rate data unavailable")

    return RatesResponse(
        periods=[
            RatePeriodSchema(start=p.start, end=p.end, contractual=p.contractual, overdue=p.overdue)
            for p in periods
        ]
    )
