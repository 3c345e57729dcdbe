"""Prometheus metrics for monitoring risk distribution, validation failures and advisor performance"""

from prometheus_client import Counter, Histogram

# Computation metrics
metrics_computed_counter = Counter(
    "student_finance_metrics_total",
    "Financial metric computations by risk level",
    ["risk_level"],  # Low | Medium | High
)

validation_failure_counter = Counter(
    "student_finance_validation_failures_total",
    "Profiles rejected before computation",
    ["kind"],  # invalid_profile | undefined_ratio
)

# Advisor metrics
advisor_latency_histogram = Histogram(
    "advisor_latency_seconds",
    "Recommendation service response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

advisor_failure_counter = Counter(
    "advisor_failures_total",
    "Failed recommendation service calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_computation(risk_level: str) -> None:
    """Record one successful computation under its risk bucket"""
    metrics_computed_counter.labels(risk_level=risk_level).inc()


def record_validation_failure(kind: str) -> None:
    """Record a rejected profile by failure kind"""
    validation_failure_counter.labels(kind=kind).inc()
