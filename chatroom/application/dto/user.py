"""User DTOs for API request/response."""

from datetime import datetime
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, StrictStr
from chatroom.domain.entities.user import SafeUser


class CredentialsRequest(BaseModel):
    """
    Body of /signup, /login and /resetPassword.

    Only the types are checked here. Empty values go on to the service, where
    they fail like any other bad credential or rejected record.
    """

    username: StrictStr
    password: StrictStr


class SafeUserDTO(BaseModel):
    """The safe projection. There is no password field to leak."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    date_joined: datetime = Field(..., alias="dateJoined")

    @classmethod
    def from_entity(cls, user: SafeUser) -> "SafeUserDTO":
        return cls(username=user.username, date_joined=user.date_joined)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
