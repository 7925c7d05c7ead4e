"""Prometheus metrics for record activity, simulations and request latency"""

from prometheus_client import Counter, Histogram

records_created_counter = Counter(
    "finance_records_created_total",
    "Records created through the API",
    ["entity"],  # expense | income | fixed_expense | credit_card | ...
)

simulation_counter = Counter(
    "finance_simulations_total",
    "Investment simulations saved",
    ["interest_type"],  # SIMPLE | COMPOUND
)

projected_amount_histogram = Histogram(
    "finance_simulation_projected_amount",
    "Projected final amount of saved simulations",
    buckets=[1_000, 10_000, 50_000, 100_000, 500_000, 1_000_000, 10_000_000],
)

auth_failure_counter = Counter(
    "finance_auth_failures_total",
    "Rejected logins and identity checks",
    ["reason"],  # bad_credentials | missing_identity | unknown_user
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_created(entity: str) -> None:
    records_created_counter.labels(entity=entity).inc()


def record_simulation(interest_type: str, projected_amount: float) -> None:
    """Record simulation metrics for monitoring projection sizes"""
    simulation_counter.labels(interest_type=interest_type).inc()
    projected_amount_histogram.observe(projected_amount)
