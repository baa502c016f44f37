"""
Service results.

Services never raise for expected failures. They return either the value or a
ServiceError carrying a short human-readable message. Controllers decide the
HTTP status; `kind` only feeds logs and metrics and never reaches the client.

Usage:
    result = await service.save_message(message)
    if isinstance(result, ServiceError):
        return JSONResponse(status_code=500, content=result.to_dict())
"""

from dataclasses import dataclass
from enum import Enum
from typing import TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"


@dataclass(frozen=True)
class ServiceError:
    error: str
    kind: ErrorKind = ErrorKind.PERSISTENCE

    def to_dict(self) -> dict[str, str]:
        """Wire shape: {"error": "<message>"}"""
        return {"error": self.error}


ServiceResult = Union[T, ServiceError]
