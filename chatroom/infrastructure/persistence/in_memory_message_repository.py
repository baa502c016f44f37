"""
In-memory Message Repository.

Process-local store, the default backend and the one the tests run against.
Messages are frozen dataclasses, so handing out stored instances is safe.
"""

from chatroom.domain.entities.message import Message
from chatroom.domain.ports.repositories import MessageRepository
from chatroom.domain.value_objects.message_id import MessageId


class InMemoryMessageRepository(MessageRepository):
    _messages: list[Message]

    def __init__(self):
        self._messages = []

    async def save(self, message: Message) -> Message:
        stored = message.with_id(MessageId.generate())
        self._messages.append(stored)
        return stored

    async def list_by_sent_at(self) -> list[Message]:
        # sorted() is stable: equal timestamps stay in insertion order
        return sorted(self._messages, key=lambda m: m.sent_at)

    def __len__(self) -> int:
        return len(self._messages)
