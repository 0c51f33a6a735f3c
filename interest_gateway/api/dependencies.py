"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from interest_gateway.infrastructure.sources.selector import RateService, build_selector


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_rate_service() -> RateService:
    """Provide rate service backed by the configured source chain"""
    return RateService(build_selector())
