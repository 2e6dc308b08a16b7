"""Prometheus metrics for projection volume, simulation risk and request latency"""

from prometheus_client import Counter, Histogram

# Projection metrics
projection_counter = Counter(
    "forecast_projection_total",
    "Obligation projections served",
)

projected_obligations_histogram = Histogram(
    "forecast_projected_obligations",
    "Obligations per projected month",
    buckets=[0, 1, 2, 5, 10, 20, 50],
)

skipped_records_counter = Counter(
    "forecast_skipped_records_total",
    "Malformed obligation-source records skipped",
    ["source"],  # loan | fixed | subscription
)

# Simulation metrics
simulation_counter = Counter(
    "forecast_simulation_total",
    "Cash-flow simulations served",
    ["risk_level"],  # LOW | MEDIUM | HIGH
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_projection(obligations_per_month: list[int]) -> None:
    """Record one projection and the size of each month it produced"""
    projection_counter.inc()
    for count in obligations_per_month:
        projected_obligations_histogram.observe(count)


def record_simulation(risk_level: str) -> None:
    simulation_counter.labels(risk_level=risk_level).inc()
