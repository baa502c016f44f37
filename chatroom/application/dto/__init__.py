"""Data Transfer Objects for API request/response."""

from chatroom.application.dto.message import AddMessageRequest, MessageDTO, MessageToAdd
from chatroom.application.dto.user import CredentialsRequest, SafeUserDTO

__all__ = [
    "AddMessageRequest",
    "CredentialsRequest",
    "MessageDTO",
    "MessageToAdd",
    "SafeUserDTO",
]
