"""
User service - account lifecycle over the UserRepository port.

Every operation returns either the SafeUser projection or a ServiceError.
Mutations are single repository calls (find-and-update / find-and-delete), never
a read followed by a write.
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional
from chatroom.application.common.results import ErrorKind, ServiceError, ServiceResult
from chatroom.domain.entities.user import UPDATABLE_FIELDS, SafeUser, User, UserCredentials
from chatroom.domain.exceptions import DomainValidationError
from chatroom.domain.ports.repositories import UserRepository
from chatroom.observability.metrics import increment_error

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
SAVE_FAILED = "Failed to save user"
FETCH_FAILED = "Error fetching user"
INVALID_CREDENTIALS = "Invalid username or password"
LOGIN_FAILED = "Login failed"
DELETE_FAILED = "Failed to delete user"
UPDATE_FAILED = "Failed to update user"
RESET_FAILED = "Failed to reset password"


def _fail(message: str, kind: ErrorKind) -> ServiceError:
    increment_error(kind.value)
    return ServiceError(message, kind)


def _valid_updates(updates: Any) -> bool:
    if not isinstance(updates, Mapping) or not updates:
        return False
    for field, value in updates.items():
        if field not in UPDATABLE_FIELDS:
            return False
        if not isinstance(value, str) or not value:
            return False
    return True


class UserService:
    _user_repository: UserRepository

    def __init__(self, user_repository: UserRepository):
        self._user_repository = user_repository

    # ==================== Create / Read ====================

    async def save_user(self, user: User) -> ServiceResult[SafeUser]:
        try:
            saved = await self._user_repository.save(user)
        except Exception as e:
            logger.error(f"[USERS] Save failed for {user.username!r}: {e}")
            return _fail(SAVE_FAILED, ErrorKind.PERSISTENCE)
        logger.info(f"[USERS] Created user {saved.username!r}")
        return saved.to_safe()

    async def register_user(
        self, username: str, password: str, date_joined: datetime
    ) -> ServiceResult[SafeUser]:
        """Build the User record and save it; a record the entity rejects is a failed save."""
        try:
            user = User(username=username, password=password, date_joined=date_joined)
        except DomainValidationError as e:
            logger.warning(f"[USERS] Rejected signup for {username!r}: {e.message}")
            return _fail(SAVE_FAILED, ErrorKind.VALIDATION)
        return await self.save_user(user)

    async def get_user_by_username(self, username: str) -> ServiceResult[SafeUser]:
        try:
            user = await self._user_repository.get_by_username(username)
        except Exception as e:
            logger.error(f"[USERS] Lookup failed for {username!r}: {e}")
            return _fail(FETCH_FAILED, ErrorKind.PERSISTENCE)
        if user is None:
            return _fail(USER_NOT_FOUND, ErrorKind.NOT_FOUND)
        return user.to_safe()

    async def login_user(self, credentials: UserCredentials) -> ServiceResult[SafeUser]:
        """Unknown username and wrong password produce the same error."""
        try:
            user = await self._user_repository.get_by_credentials(
                credentials.username, credentials.password
            )
        except Exception as e:
            logger.error(f"[USERS] Login lookup failed for {credentials.username!r}: {e}")
            return _fail(LOGIN_FAILED, ErrorKind.PERSISTENCE)
        if user is None:
            logger.info(f"[USERS] Rejected login for {credentials.username!r}")
            return _fail(INVALID_CREDENTIALS, ErrorKind.AUTHENTICATION)
        return user.to_safe()

    # ==================== Mutations ====================

    async def delete_user_by_username(self, username: str) -> ServiceResult[SafeUser]:
        try:
            deleted = await self._user_repository.delete_by_username(username)
        except Exception as e:
            logger.error(f"[USERS] Delete failed for {username!r}: {e}")
            return _fail(DELETE_FAILED, ErrorKind.PERSISTENCE)
        if deleted is None:
            return _fail(USER_NOT_FOUND, ErrorKind.NOT_FOUND)
        logger.info(f"[USERS] Deleted user {username!r}")
        return deleted.to_safe()

    async def update_user(
        self, username: str, updates: Mapping[str, Any]
    ) -> ServiceResult[SafeUser]:
        """Apply a partial update limited to username and password."""
        if not _valid_updates(updates):
            logger.warning(f"[USERS] Rejected update for {username!r}")
            return _fail(UPDATE_FAILED, ErrorKind.VALIDATION)
        return await self._update(username, updates, UPDATE_FAILED)

    async def reset_password(self, username: str, new_password: str) -> ServiceResult[SafeUser]:
        if not isinstance(new_password, str) or not new_password:
            return _fail(RESET_FAILED, ErrorKind.VALIDATION)
        return await self._update(username, {"password": new_password}, RESET_FAILED)

    async def _update(
        self, username: str, updates: Mapping[str, Any], failure: str
    ) -> ServiceResult[SafeUser]:
        try:
            updated: Optional[User] = await self._user_repository.update_by_username(
                username, updates
            )
        except Exception as e:
            logger.error(f"[USERS] Update failed for {username!r}: {e}")
            return _fail(failure, ErrorKind.PERSISTENCE)
        if updated is None:
            return _fail(USER_NOT_FOUND, ErrorKind.NOT_FOUND)
        logger.info(f"[USERS] Updated {sorted(updates)} for {username!r}")
        return updated.to_safe()
