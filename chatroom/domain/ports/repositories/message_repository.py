"""
Message Repository Port - Interface for message persistence.
Implementations: chatroom/infrastructure/persistence/
"""

from abc import ABC, abstractmethod

from chatroom.domain.entities.message import Message


class MessageRepository(ABC):
    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Insert a message and return it with its backend-assigned id."""
        ...

    @abstractmethod
    async def list_by_sent_at(self) -> list[Message]:
        """All messages, oldest first; equal timestamps keep insertion order."""
        ...
