"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from interest_gateway.domain.models import DayCount, RateType


class RatePeriodSchema(BaseModel):
    """One period of the normalized rate timeline"""

    start: date
    end: date
    contractual: Decimal
    overdue: Decimal


class RatesResponse(BaseModel):
    """Response for GET /v1/rates"""

    periods: List[RatePeriodSchema]


class InterestRequest(BaseModel):
    """Request body for POST /v1/interest"""

    amount: Decimal = Field(..., ge=0, description="Principal amount in euro")
    date_from: date = Field(..., description="First interest-bearing day (inclusive)")
    date_to: date = Field(..., description="Last interest-bearing day (inclusive)")
    rate_type: RateType = RateType.CONTRACTUAL
    day_count: DayCount = DayCount.CALENDAR_YEAR


class InterestSliceSchema(BaseModel):
    """Single line of the detailed breakdown"""

    date_from: date
    date_to: date
    days: int
    annual_rate_percent: Decimal
    interest: Decimal


class YearlyTotalSchema(BaseModel):
    year: int
    interest: Decimal


class InterestResponse(BaseModel):
    """Response for POST /v1/interest"""

    amount: Decimal
    rate_type: RateType
    day_count: DayCount
    slices: List[InterestSliceSchema]
    yearly_totals: List[YearlyTotalSchema]
    total_interest: Decimal
    message: Optional[str] = None
