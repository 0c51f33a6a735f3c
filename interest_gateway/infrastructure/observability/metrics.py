"""Prometheus metrics for monitoring calculations and rate table acquisition"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "interest_calculation_total",
    "Total interest calculations performed",
    ["rate_type", "day_count", "outcome"],  # outcome: computed | empty
)

# Acquisition metrics
acquisition_counter = Counter(
    "rate_acquisition_total",
    "Rate table acquisition attempts per strategy",
    ["source", "outcome"],  # outcome: success | empty | failure
)

fetch_latency_histogram = Histogram(
    "rate_fetch_latency_seconds",
    "Rate page response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

fetch_failure_counter = Counter(
    "rate_fetch_failures_total",
    "Failed rate page requests",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(rate_type: str, day_count: str, slice_count: int) -> None:
    """Record one calculation, separating empty results from computed ones"""
    outcome = "computed" if slice_count else "empty"
    calculation_counter.labels(rate_type=rate_type, day_count=day_count, outcome=outcome).inc()


def record_acquisition(source: str, outcome: str) -> None:
    acquisition_counter.labels(source=source, outcome=outcome).inc()
