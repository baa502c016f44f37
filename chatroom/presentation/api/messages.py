"""
Messages API Router - add and list chat messages.

Flow:
  POST /addMessage → body check → Message.create → MessageService.save_message
                                                         ↓
  200 saved message  ←  Broadcaster.publish("messageUpdate", {"msg": ...})
"""

from logging import getLogger
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from dishka.integrations.fastapi import FromDishka, inject
from chatroom.application.common.results import ServiceError
from chatroom.application.dto.message import AddMessageRequest, MessageDTO
from chatroom.application.services.message_service import MessageService
from chatroom.config.settings import Config
from chatroom.domain.entities.message import Message
from chatroom.domain.exceptions import DomainValidationError
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.presentation.api.body import read_body

logger = getLogger(__name__)

INVALID_BODY = "Invalid message body"
INVALID_CONTENT = "Invalid message content"


# ==================== ROUTER ====================

router = APIRouter(tags=["messages"])


# ==================== ENDPOINTS ====================


@router.post("/addMessage")
@inject
async def add_message(
    request: Request,
    message_service: FromDishka[MessageService],
    broadcaster: FromDishka[Broadcaster],
):
    """
    Save a message and announce it to live subscribers.

    Request: {"messageToAdd": {"from": "alice", "text": "hi"}}
    Response: {"id": "uuid", "from": "alice", "text": "hi", "sentAt": "ISO"}

    The server stamps sentAt; a client-supplied value is ignored.
    """
    body = await read_body(request, AddMessageRequest)
    if body is None:
        return PlainTextResponse(INVALID_BODY, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        message = Message.create(
            sender=body.messageToAdd.sender, text=body.messageToAdd.text
        )
    except DomainValidationError as e:
        logger.info(f"[MESSAGES] Rejected content: {e.message}")
        return PlainTextResponse(INVALID_CONTENT, status_code=status.HTTP_400_BAD_REQUEST)

    result = await message_service.save_message(message)
    if isinstance(result, ServiceError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=result.to_dict()
        )

    saved = MessageDTO.from_entity(result).to_wire()
    await broadcaster.publish(Config.MESSAGE_UPDATE_EVENT, {"msg": saved})
    return JSONResponse(status_code=status.HTTP_200_OK, content=saved)


@router.get("/getMessages")
@inject
async def get_messages(message_service: FromDishka[MessageService]):
    """All messages, oldest first. A backend failure yields 200 []."""
    result = await message_service.list_messages()
    if isinstance(result, ServiceError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=result.to_dict()
        )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[MessageDTO.from_entity(message).to_wire() for message in result],
    )
