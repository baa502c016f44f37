"""
User Repository Port - Interface for user persistence.
Implementations: chatroom/infrastructure/persistence/

update_by_username and delete_by_username find and mutate in one backend
step, so concurrent calls for the same username serialize at the backend.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional
from chatroom.domain.entities.user import User


class UserRepository(ABC):
    @abstractmethod
    async def save(self, user: User) -> User: ...

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def get_by_credentials(
        self, username: str, password: str
    ) -> Optional[User]: ...

    @abstractmethod
    async def update_by_username(
        self, username: str, updates: Mapping[str, Any]
    ) -> Optional[User]: ...

    @abstractmethod
    async def delete_by_username(self, username: str) -> Optional[User]: ...
