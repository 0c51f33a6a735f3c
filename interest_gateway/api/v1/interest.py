"""POST /v1/interest - Interest calculation endpoints"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import Response

from interest_gateway.api.dependencies import get_rate_service, get_request_id
from interest_gateway.api.v1.schemas import (
    InterestRequest,
    InterestResponse,
    InterestSliceSchema,
    YearlyTotalSchema,
)
from interest_gateway.domain.exceptions import AcquisitionError, InvalidRangeError
from interest_gateway.domain.interest import calculate_interest
from interest_gateway.domain.models import InterestBreakdown
from interest_gateway.export import default_csv_name, render_csv
from interest_gateway.infrastructure.observability.logging import log_calculation
from interest_gateway.infrastructure.observability.metrics import record_calculation
from interest_gateway.infrastructure.sources.selector import RateService

router = APIRouter()

NO_OVERLAP_MESSAGE = "No overlapping periods with the selected date range."


async def _calculate(
    request_body: InterestRequest,
    request: Request,
    rate_service: RateService,
) -> InterestBreakdown:
    """
    Acquire rates and run the calculation.

    Flow:
    1. Fetch and normalize the rate table
    2. Compute slices, yearly totals and total
    3. Record metrics and a structured log line
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        periods = await rate_service.get_periods()
        breakdown = calculate_interest(
            periods,
            request_body.date_from,
            request_body.date_to,
            request_body.amount,
            request_body.rate_type,
            request_body.day_count,
        )

    except AcquisitionError as e:
        logging.error(f"Rate acquisition failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Rate data unavailable")

    except InvalidRangeError as e:
        logging.warning(f"Invalid range: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    duration_ms = (time.time() - start_time) * 1000
    record_calculation(breakdown.rate_type.value, breakdown.day_count.value, len(breakdown.slices))
    log_calculation(
        request_id,
        breakdown.rate_type.value,
        breakdown.day_count.value,
        len(breakdown.slices),
        breakdown.total,
        duration_ms,
    )
    return breakdown


@router.post("/interest", response_model=InterestResponse)
async def calculate(
    request_body: InterestRequest,
    request: Request,
    rate_service: RateService = Depends(get_rate_service),
):
    """
    Calculate interest over the requested range.

    Returns:
        Detailed breakdown, yearly summary and total. An empty breakdown
        with a message means no rate period overlaps the range.
    """
    breakdown = await _calculate(request_body, request, rate_service)

    return InterestResponse(
        amount=breakdown.amount,
        rate_type=breakdown.rate_type,
        day_count=breakdown.day_count,
        slices=[
            InterestSliceSchema(
                date_from=s.date_from,
                date_to=s.date_to,
                days=s.days,
                annual_rate_percent=s.annual_rate_percent,
                interest=s.interest,
            )
            for s in breakdown.slices
        ],
        yearly_totals=[
            YearlyTotalSchema(year=year, interest=amount)
            for year, amount in breakdown.yearly_totals.items()
        ],
        total_interest=breakdown.total,
        message=None if breakdown.slices else NO_OVERLAP_MESSAGE,
    )


@router.post("/interest/csv")
async def export_csv(
    request_body: InterestRequest,
    request: Request,
    rate_service: RateService = Depends(get_rate_service),
):
    """Same calculation, returned as a CSV attachment"""
    breakdown = await _calculate(request_body, request, rate_service)

    return Response(
        content=render_csv(breakdown),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{default_csv_name()}"'},
    )
