"""
Prometheus metrics for payment processing.
"""
from prometheus_client import Counter, Histogram

payment_requests_total = Counter(
    "payment_requests_total",
    "Total number of payment requests",
)

payment_process_seconds = Histogram(
    "payment_process_seconds",
    "Payment validation and authorization time in seconds",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

payment_store_seconds = Histogram(
    "payment_store_seconds",
    "Payment store time in seconds",
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)
