"""
In-memory User Repository.

Each method runs to completion without awaiting, so a find followed by a
mutation cannot interleave with another request on the same event loop.
"""

from typing import Any, Mapping, Optional
from chatroom.domain.entities.user import User
from chatroom.domain.exceptions.persistence_error import DuplicateKeyError
from chatroom.domain.ports.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    _users: dict[str, User]

    def __init__(self):
        self._users = {}

    async def save(self, user: User) -> User:
        if user.username in self._users:
            raise DuplicateKeyError("username", user.username)
        self._users[user.username] = user
        return user

    async def get_by_username(self, username: str) -> Optional[User]:
        return self._users.get(username)

    async def get_by_credentials(self, username: str, password: str) -> Optional[User]:
        user = self._users.get(username)
        if user is None or user.password != password:
            return None
        return user

    async def update_by_username(
        self, username: str, updates: Mapping[str, Any]
    ) -> Optional[User]:
        current = self._users.get(username)
        if current is None:
            return None
        updated = current.apply(updates)
        if updated.username != username:
            if updated.username in self._users:
                raise DuplicateKeyError("username", updated.username)
            del self._users[username]
        self._users[updated.username] = updated
        return updated

    async def delete_by_username(self, username: str) -> Optional[User]:
        return self._users.pop(username, None)

    def __len__(self) -> int:
        return len(self._users)
