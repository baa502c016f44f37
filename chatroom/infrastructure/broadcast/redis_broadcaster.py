"""
Redis Broadcaster - pub/sub fan-out across worker processes.

publish() writes the frame as JSON to one Redis channel. Every worker runs
relay_events(), which reads that channel and hands each frame to its local
WebSocketBroadcaster, so a message saved on one worker reaches subscribers
connected to any worker.
"""

import asyncio
import json
import logging
from contextlib import suppress
from typing import Any
from redis.asyncio import Redis
from redis.exceptions import RedisError
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.infrastructure.broadcast.websocket_broadcaster import WebSocketBroadcaster
from chatroom.observability.metrics import (
    MetricsErrorType,
    increment_broadcast_event,
    increment_error,
)

logger = logging.getLogger(__name__)

RELAY_RETRY_SECONDS = 1.0


class RedisBroadcaster(Broadcaster):
    _redis: Redis
    _channel: str

    def __init__(self, redis: Redis, channel: str):
        self._redis = redis
        self._channel = channel

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        frame = json.dumps({"event": event, "data": payload})
        try:
            receivers = await self._redis.publish(self._channel, frame)
        except RedisError as e:
            logger.error(f"[BROADCAST] Redis publish of {event!r} failed: {e}")
            increment_error(MetricsErrorType.BROADCAST_FAILED)
            return
        increment_broadcast_event(event)
        logger.debug(f"[BROADCAST] Published {event!r} to {receivers} worker(s)")


async def relay_events(
    redis: Redis,
    channel: str,
    hub: WebSocketBroadcaster,
    retry_delay: float = RELAY_RETRY_SECONDS,
) -> None:
    """
    Forward frames from `channel` to local subscribers until cancelled.

    A lost Redis connection is logged, counted and followed by a fresh
    subscription after `retry_delay` seconds. Frames published while
    disconnected are not replayed.
    """
    while True:
        pubsub = redis.pubsub()
        try:
            await pubsub.subscribe(channel)
            logger.info(f"[BROADCAST] Relaying Redis channel {channel!r} to local subscribers")
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                try:
                    frame = json.loads(message["data"])
                except (TypeError, ValueError):
                    logger.warning(f"[BROADCAST] Ignoring malformed frame on {channel!r}")
                    continue
                await hub.send_frame(frame)
            return
        except RedisError as e:
            logger.error(
                f"[BROADCAST] Relay of {channel!r} lost its connection, "
                f"resubscribing in {retry_delay}s: {e}"
            )
            increment_error(MetricsErrorType.BROADCAST_FAILED)
        finally:
            with suppress(RedisError):
                await pubsub.unsubscribe(channel)
            with suppress(RedisError):
                await pubsub.aclose()
        await asyncio.sleep(retry_delay)
