"""
User Entity - A chat account keyed by username.

Passwords are stored and compared as given. Only SafeUser ever leaves the
service layer.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Mapping
from chatroom.domain.exceptions.validation_error import DomainValidationError

UPDATABLE_FIELDS = frozenset({"username", "password"})


@dataclass(frozen=True)
class SafeUser:
    """The only user projection allowed out of the service layer."""

    username: str
    date_joined: datetime


@dataclass(frozen=True)
class UserCredentials:
    username: str
    password: str


@dataclass(frozen=True)
class User:
    username: str
    password: str
    date_joined: datetime

    def __post_init__(self):
        if not isinstance(self.username, str) or not self.username:
            raise DomainValidationError("Username cannot be empty")
        if not isinstance(self.password, str) or not self.password:
            raise DomainValidationError("Password cannot be empty")
        if not isinstance(self.date_joined, datetime):
            raise DomainValidationError("date_joined must be a datetime")

    def to_safe(self) -> SafeUser:
        return SafeUser(username=self.username, date_joined=self.date_joined)

    def apply(self, updates: Mapping[str, Any]) -> User:
        """Return a copy with `updates` applied; raises on unknown or immutable fields."""
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise DomainValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )
        return replace(self, **dict(updates))
