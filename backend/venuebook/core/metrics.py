"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_requests = Counter(
    'booking_requests_total',
    'Booking creation attempts',
    ['result']  # created, rejected
)

booking_transitions = Counter(
    'booking_transitions_total',
    'Booking status transitions',
    ['status', 'result']  # confirmed/rejected, applied/refused
)

# Catalog metrics
event_mutations = Counter(
    'event_mutations_total',
    'Event catalog writes',
    ['operation']  # create, update, delete
)

# Live subscription metrics
live_subscriptions = Gauge(
    'live_subscriptions_open',
    'Number of open live queries'
)

live_refresh_failures = Counter(
    'live_refresh_failures_total',
    'Live query refreshes that failed and were retried'
)

change_feed_errors = Counter(
    'change_feed_errors_total',
    'Change feed publish/listen errors',
    ['operation']  # publish, listen
)


def metrics_endpoint() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_request(created: bool):
    result = "created" if created else "rejected"
    booking_requests.labels(result=result).inc()


def record_transition(status: str, applied: bool):
    result = "applied" if applied else "refused"
    booking_transitions.labels(status=status, result=result).inc()


def record_event_mutation(operation: str):
    """Operation: create, update, delete"""
    event_mutations.labels(operation=operation).inc()
