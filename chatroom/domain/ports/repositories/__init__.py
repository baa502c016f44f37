"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Defines methods the services need
- Does NOT specify implementation (in-memory, Prisma, ...)
- Raises PersistenceError subclasses when the backend fails

Infrastructure layer provides implementations.
"""

from chatroom.domain.ports.repositories.message_repository import MessageRepository
from chatroom.domain.ports.repositories.user_repository import UserRepository

__all__ = [
    "MessageRepository",
    "UserRepository",
]
