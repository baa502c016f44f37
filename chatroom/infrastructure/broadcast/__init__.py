"""
Broadcast Layer - Broadcaster port implementations.

- WebSocketBroadcaster: in-process hub of connected /ws subscribers
- RedisBroadcaster: publishes to a Redis channel; relay_events feeds that
  channel back into each worker's hub
"""

from chatroom.infrastructure.broadcast.websocket_broadcaster import WebSocketBroadcaster
from chatroom.infrastructure.broadcast.redis_broadcaster import RedisBroadcaster, relay_events

__all__ = [
    "RedisBroadcaster",
    "WebSocketBroadcaster",
    "relay_events",
]
