"""
PersistenceError - Raised by repositories when the storage backend fails.
Maps to: HTTP 500 Internal Server Error
"""


class PersistenceError(Exception):
    """Exception raised when a storage operation fails."""

    def __init__(self, message: str = "Storage operation failed."):
        super().__init__(message)


class DuplicateKeyError(PersistenceError):
    """Raised when an insert collides with an existing unique key."""

    def __init__(self, key: str, value: str):
        super().__init__(f"Duplicate {key}: {value}")
        self.key = key
        self.value = value
