"""Message DTOs for API request/response."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from chatroom.domain.entities.message import Message


class MessageToAdd(BaseModel):
    """Client-supplied message. `sentAt` is accepted but the server stamps its own time."""

    sender: StrictStr = Field(..., alias="from")
    text: StrictStr
    sent_at: Optional[datetime] = Field(None, alias="sentAt")

    @field_validator("sender", "text")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty or whitespace")
        return value

    @field_validator("sent_at", mode="before")
    @classmethod
    def reject_null_sent_at(cls, value: Any) -> Any:
        # Only runs when the key is present; an absent sentAt keeps the default
        if value is None:
            raise ValueError("sentAt must not be null")
        return value


class AddMessageRequest(BaseModel):
    messageToAdd: MessageToAdd


class MessageDTO(BaseModel):
    """DTO for a stored message as returned to clients and subscribers."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    sender: str = Field(..., alias="from")
    text: str
    sent_at: datetime = Field(..., alias="sentAt")

    @classmethod
    def from_entity(cls, message: Message) -> "MessageDTO":
        return cls(
            id=str(message.id),
            sender=message.sender,
            text=message.text,
            sent_at=message.sent_at,
        )

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with wire field names: {id, from, text, sentAt}"""
        return self.model_dump(mode="json", by_alias=True)
