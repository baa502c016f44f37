"""
Prisma User Repository Implementation.

`update` and `delete` on a unique key are single statements and return None
when no row matches, which gives the find-and-mutate semantics the port needs.
"""

from typing import Any, Mapping, Optional
from prisma import Prisma
from prisma.errors import PrismaError, UniqueViolationError
from chatroom.domain.entities.user import UPDATABLE_FIELDS, User
from chatroom.domain.exceptions.persistence_error import DuplicateKeyError, PersistenceError
from chatroom.domain.ports.repositories import UserRepository


class PrismaUserRepository(UserRepository):
    _prisma: Prisma

    def __init__(self, prisma: Prisma):
        self._prisma = prisma

    def _to_entity(self, record) -> User:
        """Map Prisma record to domain entity."""
        return User(
            username=record.username,
            password=record.password,
            date_joined=record.date_joined,
        )

    async def save(self, user: User) -> User:
        try:
            record = await self._prisma.user.create(
                data={
                    "username": user.username,
                    "password": user.password,
                    "date_joined": user.date_joined,
                }
            )
        except UniqueViolationError as e:
            raise DuplicateKeyError("username", user.username) from e
        except PrismaError as e:
            raise PersistenceError(f"Could not insert user: {e}") from e
        return self._to_entity(record)

    async def get_by_username(self, username: str) -> Optional[User]:
        try:
            record = await self._prisma.user.find_unique(where={"username": username})
        except PrismaError as e:
            raise PersistenceError(f"Could not fetch user: {e}") from e
        return self._to_entity(record) if record else None

    async def get_by_credentials(self, username: str, password: str) -> Optional[User]:
        try:
            record = await self._prisma.user.find_first(
                where={"username": username, "password": password}
            )
        except PrismaError as e:
            raise PersistenceError(f"Could not fetch user: {e}") from e
        return self._to_entity(record) if record else None

    async def update_by_username(
        self, username: str, updates: Mapping[str, Any]
    ) -> Optional[User]:
        data = {field: value for field, value in updates.items() if field in UPDATABLE_FIELDS}
        if len(data) != len(updates):
            raise PersistenceError("Refusing to update non-updatable user fields")
        try:
            record = await self._prisma.user.update(where={"username": username}, data=data)
        except UniqueViolationError as e:
            raise DuplicateKeyError("username", str(data.get("username"))) from e
        except PrismaError as e:
            raise PersistenceError(f"Could not update user: {e}") from e
        return self._to_entity(record) if record else None

    async def delete_by_username(self, username: str) -> Optional[User]:
        try:
            record = await self._prisma.user.delete(where={"username": username})
        except PrismaError as e:
            raise PersistenceError(f"Could not delete user: {e}") from e
        return self._to_entity(record) if record else None
