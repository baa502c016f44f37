"""
Message service - persist and list chat messages.

save_message reports failure as a ServiceError. list_messages degrades to an
empty list instead, so a flaky backend shows an empty room rather than an error
page.
"""

import logging
from chatroom.application.common.results import ErrorKind, ServiceError, ServiceResult
from chatroom.domain.entities.message import Message
from chatroom.domain.ports.repositories import MessageRepository
from chatroom.observability.metrics import increment_error, increment_messages_saved

logger = logging.getLogger(__name__)

SAVE_FAILED = "Failed to save message"


class MessageService:
    _message_repository: MessageRepository

    def __init__(self, message_repository: MessageRepository):
        self._message_repository = message_repository

    async def save_message(self, message: Message) -> ServiceResult[Message]:
        try:
            saved = await self._message_repository.save(message)
        except Exception as e:
            logger.error(f"[MESSAGES] Save failed for sender={message.sender!r}: {e}")
            increment_error(ErrorKind.PERSISTENCE.value)
            return ServiceError(SAVE_FAILED, ErrorKind.PERSISTENCE)

        increment_messages_saved()
        logger.info(f"[MESSAGES] Saved message {saved.id} from {saved.sender!r}")
        return saved

    async def list_messages(self) -> list[Message]:
        """All messages, oldest first. Returns [] if the backend fails."""
        try:
            return await self._message_repository.list_by_sent_at()
        except Exception as e:
            logger.error(f"[MESSAGES] Listing failed, returning empty list: {e}")
            increment_error(ErrorKind.PERSISTENCE.value)
            return []
