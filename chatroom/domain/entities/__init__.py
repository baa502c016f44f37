"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier (message id, username)
- Validates its own invariants on construction
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from chatroom.domain.entities.message import Message
from chatroom.domain.entities.user import SafeUser, User, UserCredentials

__all__ = [
    "Message",
    "SafeUser",
    "User",
    "UserCredentials",
]
