"""
Prometheus Metrics for the chatroom backend.

DATA FLOW:
    This file                  presentation/api/metrics.py         Scraper
    ─────────                  ────────────────────────────         ───────
    Define metrics ──────────► /metrics endpoint ──────────────►   Prometheus ──► Grafana

METRIC TYPES:
    - Gauge: Value goes up/down (live WebSocket subscribers)
    - Counter: Value only goes up (saved messages, broadcasts, errors)
    - Histogram: Distribution (request latency percentiles)
"""

from prometheus_client import (
    Gauge,
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5],
)

MESSAGES_SAVED_TOTAL = Counter(
    "chatroom_messages_saved_total",
    "Total number of chat messages persisted",
)

BROADCAST_EVENTS_TOTAL = Counter(
    "chatroom_broadcast_events_total",
    "Total number of events published to subscribers",
    ["event"],
)

SUBSCRIBERS = Gauge(
    "chatroom_subscribers",
    "Number of WebSocket subscribers currently connected to this process",
)

ERRORS_TOTAL = Counter(
    "chatroom_errors_total",
    "Total number of errors by type",
    ["error_type"],
)


# =============================================================================
# LABEL CONSTANTS (avoid hardcoding strings throughout codebase)
# =============================================================================
class MetricsErrorType:
    """Error type labels for chatroom_errors_total metric."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    BROADCAST_FAILED = "broadcast_failed"
    UNHANDLED = "unhandled"


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    """Call to record request latency. Integration point: fastapi_app.py metrics middleware"""
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def increment_messages_saved():
    """Integration point: application/services/message_service.py"""
    MESSAGES_SAVED_TOTAL.inc()


def increment_broadcast_event(event: str):
    """Integration point: infrastructure/broadcast/*"""
    BROADCAST_EVENTS_TOTAL.labels(event=event).inc()


def set_subscribers(count: int):
    """Integration point: infrastructure/broadcast/websocket_broadcaster.py"""
    SUBSCRIBERS.set(count)


def increment_error(error_type: str):
    """
    Call to record an error occurrence.

    Integration points:
        - application/services/*: one label per ServiceError kind
        - infrastructure/broadcast/*: broadcast_failed
        - fastapi_app.py global handler: unhandled

    Args:
        error_type: One of the MetricsErrorType labels
    """
    ERRORS_TOTAL.labels(error_type=error_type).inc()


# =============================================================================
# HELPER FOR /metrics ENDPOINT
# =============================================================================
def get_metrics_content():
    """
    Generate Prometheus metrics output.

    Called by: presentation/api/metrics.py

    Returns:
        Tuple of (content_bytes, content_type_string)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


__all__ = [
    "observe_request_latency",
    "increment_messages_saved",
    "increment_broadcast_event",
    "set_subscribers",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
]
