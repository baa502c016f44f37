"""
Persistence Layer - Repository implementations.

The in-memory repositories are importable everywhere. The Prisma repositories
need a generated client (`prisma generate`), so they are imported directly from
their modules by the DI container only when PERSISTENCE_BACKEND=prisma.
"""

from chatroom.infrastructure.persistence.in_memory_message_repository import (
    InMemoryMessageRepository,
)
from chatroom.infrastructure.persistence.in_memory_user_repository import (
    InMemoryUserRepository,
)

__all__ = [
    "InMemoryMessageRepository",
    "InMemoryUserRepository",
]
