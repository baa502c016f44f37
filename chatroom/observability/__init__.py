"""Observability package for the chatroom backend."""

from chatroom.observability.metrics import (
    observe_request_latency,
    increment_messages_saved,
    increment_broadcast_event,
    set_subscribers,
    increment_error,
    get_metrics_content,
    MetricsErrorType,
)

__all__ = [
    "observe_request_latency",
    "increment_messages_saved",
    "increment_broadcast_event",
    "set_subscribers",
    "increment_error",
    "get_metrics_content",
    "MetricsErrorType",
]
