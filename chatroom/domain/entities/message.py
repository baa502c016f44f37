"""
Message Entity - A single message in the global chat stream.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional
from chatroom.domain.exceptions.validation_error import DomainValidationError
from chatroom.domain.value_objects.message_id import MessageId


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


@dataclass(frozen=True)
class Message:
    sender: str
    text: str
    sent_at: datetime
    id: Optional[MessageId] = None  # assigned by the persistence backend

    def __post_init__(self):
        if _is_blank(self.sender):
            raise DomainValidationError("Message sender cannot be empty")
        if _is_blank(self.text):
            raise DomainValidationError("Message text cannot be empty")
        if not isinstance(self.sent_at, datetime):
            raise DomainValidationError("Message sent_at must be a datetime")

    @classmethod
    def create(cls, sender: str, text: str) -> Message:
        """Factory method to create an unsaved Message stamped with the current time."""
        return cls(sender=sender, text=text, sent_at=datetime.now(timezone.utc))

    def with_id(self, message_id: MessageId) -> Message:
        return replace(self, id=message_id)
