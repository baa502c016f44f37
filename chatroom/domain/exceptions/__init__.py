"""
DOMAIN EXCEPTIONS - Business rule violations and backend failures

Raised by entities and repositories. Services turn them into tagged
ServiceError results; the presentation layer maps those to HTTP status codes.
"""

from chatroom.domain.exceptions.validation_error import DomainValidationError
from chatroom.domain.exceptions.persistence_error import (
    PersistenceError,
    DuplicateKeyError,
)

__all__ = [
    "DomainValidationError",
    "PersistenceError",
    "DuplicateKeyError",
]
