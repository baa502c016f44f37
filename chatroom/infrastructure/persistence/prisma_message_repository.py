"""
Prisma Message Repository Implementation.

- Implements MessageRepository port from domain layer
- Maps between Prisma models and domain entities
- The `from` wire field is stored in the `sender` column (mapped to "from")
- `seq` is an autoincrement column used to keep insertion order among equal
  timestamps
"""

from prisma import Prisma
from prisma.errors import PrismaError
from chatroom.domain.entities.message import Message
from chatroom.domain.exceptions.persistence_error import PersistenceError
from chatroom.domain.ports.repositories import MessageRepository
from chatroom.domain.value_objects.message_id import MessageId


class PrismaMessageRepository(MessageRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record) -> Message:
        """Map Prisma record to domain entity."""
        return Message(
            id=MessageId(record.id),
            sender=record.sender,
            text=record.text,
            sent_at=record.sent_at,
        )

    async def save(self, message: Message) -> Message:
        try:
            record = await self._prisma.message.create(
                data={
                    "id": MessageId.generate().value,
                    "sender": message.sender,
                    "text": message.text,
                    "sent_at": message.sent_at,
                }
            )
        except PrismaError as e:
            raise PersistenceError(f"Could not insert message: {e}") from e
        return self._to_entity(record)

    async def list_by_sent_at(self) -> list[Message]:
        try:
            records = await self._prisma.message.find_many(
                order=[{"sent_at": "asc"}, {"seq": "asc"}],
            )
        except PrismaError as e:
            raise PersistenceError(f"Could not list messages: {e}") from e
        return [self._to_entity(record) for record in records]
