"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Write pipeline metrics
write_attempts = Counter(
    'devevent_writes_total',
    'Event and booking write attempts',
    ['entity', 'operation', 'outcome']  # event/booking, create/update, success/invalid/dangling_reference/conflict/error
)

validation_failures = Counter(
    'devevent_validation_failures_total',
    'Writes rejected by validation or normalization',
    ['entity']
)

# Store metrics
store_latency = Histogram(
    'store_operation_latency_seconds',
    'Document store call latency',
    ['operation'],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_write(entity: str, operation: str, outcome: str):
    """Record a write attempt. Outcome: success, invalid, dangling_reference, conflict, error"""
    write_attempts.labels(entity=entity, operation=operation, outcome=outcome).inc()
    if outcome == "invalid":
        validation_failures.labels(entity=entity).inc()
