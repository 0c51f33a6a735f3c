"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import List
from fastapi.testclient import TestClient
from interest_gateway.api.main import create_app
from interest_gateway.api.dependencies import get_rate_service
from interest_gateway.domain.exceptions import AcquisitionError
from interest_gateway.domain.models import RatePeriod


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeRateService:
    """Stands in for RateService without touching any source"""

    def __init__(self, periods: List[RatePeriod] | None = None, error: Exception | None = None):
        self.periods = periods or []
        self.error = error
        self.calls = 0

    async def get_periods(self) -> List[RatePeriod]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.periods)


@pytest.fixture
def sample_periods() -> List[RatePeriod]:
    """Normalized timeline matching the saved English rate page"""
    return [
        RatePeriod(date(2022, 1, 1), date(2022, 12, 31), Decimal("5.00"), Decimal("7.00")),
        RatePeriod(date(2023, 1, 1), date(2023, 2, 28), Decimal("6.50"), Decimal("8.50")),
        RatePeriod(date(2023, 3, 1), date(2023, 12, 31), Decimal("7.25"), Decimal("9.25")),
        RatePeriod(date(2024, 1, 1), date(2024, 12, 31), Decimal("8.00"), Decimal("10.00")),
    ]


@pytest.fixture
def rates_html_path() -> Path:
    return FIXTURES_DIR / "bog_rates_en.html"


@pytest.fixture
def greek_rates_html_path() -> Path:
    return FIXTURES_DIR / "bog_rates_el.html"


@pytest.fixture
def rate_service(sample_periods: List[RatePeriod]) -> FakeRateService:
    return FakeRateService(periods=sample_periods)


@pytest.fixture
def failing_rate_service() -> FakeRateService:
    return FakeRateService(error=AcquisitionError("all sources failed"))


@pytest.fixture
def client(rate_service: FakeRateService) -> TestClient:
    """Create FastAPI test client with a fixed rate timeline"""
    app = create_app()
    app.dependency_overrides[get_rate_service] = lambda: rate_service
    return TestClient(app)


@pytest.fixture
def unavailable_client(failing_rate_service: FakeRateService) -> TestClient:
    """FastAPI test client whose rate acquisition always fails"""
    app = create_app()
    app.dependency_overrides[get_rate_service] = lambda: failing_rate_service
    return TestClient(app)
