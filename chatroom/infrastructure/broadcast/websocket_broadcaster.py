"""
WebSocket Broadcaster - in-process fan-out hub.

Every connected /ws client receives {"event": <name>, "data": <payload>}.
A subscriber whose send fails is dropped; the others still receive the frame.
"""

import asyncio
import logging
from typing import Any
from fastapi import WebSocket
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.observability.metrics import (
    MetricsErrorType,
    increment_broadcast_event,
    increment_error,
    set_subscribers,
)

logger = logging.getLogger(__name__)


class WebSocketBroadcaster(Broadcaster):
    _subscribers: set[WebSocket]

    def __init__(self):
        self._subscribers = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._subscribers.add(websocket)
        set_subscribers(self.subscriber_count)
        logger.info(f"[BROADCAST] Subscriber connected ({self.subscriber_count} total)")

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._subscribers:
            self._subscribers.discard(websocket)
            set_subscribers(self.subscriber_count)
            logger.info(f"[BROADCAST] Subscriber left ({self.subscriber_count} total)")

    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        await self.send_frame({"event": event, "data": payload})
        increment_broadcast_event(event)

    async def send_frame(self, frame: dict[str, Any]) -> None:
        """Deliver an already-built frame to every local subscriber."""
        targets = list(self._subscribers)
        if not targets:
            return
        results = await asyncio.gather(
            *(websocket.send_json(frame) for websocket in targets),
            return_exceptions=True,
        )
        for websocket, result in zip(targets, results):
            if isinstance(result, Exception):
                logger.warning(f"[BROADCAST] Dropping subscriber after failed send: {result!r}")
                increment_error(MetricsErrorType.BROADCAST_FAILED)
                self.disconnect(websocket)
