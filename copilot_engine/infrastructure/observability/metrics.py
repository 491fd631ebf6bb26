"""Prometheus metrics for calculator usage, outcomes and latency"""

from prometheus_client import Counter, Histogram

# Calculation metrics
calculation_counter = Counter(
    "copilot_calculation_total",
    "Total calculations served",
    ["calculator", "outcome"],
)

calculation_duration_histogram = Histogram(
    "copilot_calculation_duration_seconds",
    "Time spent inside a calculator",
    ["calculator"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0],
)

non_convergent_counter = Counter(
    "copilot_non_convergent_total",
    "Results where a payment never pays off its balance",
    ["calculator"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_calculation(calculator: str, outcome: str, duration_seconds: float, converges: bool = True) -> None:
    """Record a finished calculation for monitoring usage and recommendation mix"""
    calculation_counter.labels(calculator=calculator, outcome=outcome).inc()
    calculation_duration_histogram.labels(calculator=calculator).observe(duration_seconds)

    if not converges:
        non_convergent_counter.labels(calculator=calculator).inc()
