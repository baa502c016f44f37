"""
Event Stream Router - WebSocket subscription to broadcast events.

Clients connect to /ws and receive frames such as
    {"event": "messageUpdate", "data": {"msg": {...}}}
Inbound frames are ignored. There is no replay of events missed while
disconnected.
"""

from logging import getLogger
from fastapi import APIRouter, WebSocket
from chatroom.infrastructure.broadcast.websocket_broadcaster import WebSocketBroadcaster

logger = getLogger(__name__)

router = APIRouter(tags=["events"])


@router.websocket("/ws")
async def subscribe(websocket: WebSocket):
    # The hub is app-scoped; resolve it from the root container
    hub = await websocket.app.state.dishka_container.get(WebSocketBroadcaster)
    await hub.connect(websocket)
    try:
        while True:
            frame = await websocket.receive()
            if frame["type"] == "websocket.disconnect":
                logger.debug("[EVENTS] Client disconnected")
                break
    finally:
        hub.disconnect(websocket)
