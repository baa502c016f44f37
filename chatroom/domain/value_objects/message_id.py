"""
MessageId Value Object - identity a persistence backend assigns on insert.

Stored and sent on the wire in canonical UUID text form, so ids minted by the
in-memory store and by Postgres look the same to clients.
"""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class MessageId:
    value: str

    def __post_init__(self):
        try:
            canonical = str(UUID(str(self.value)))
        except ValueError:
            raise ValueError(f"Invalid message id: {self.value!r}") from None
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "value", canonical)

    @classmethod
    def generate(cls) -> "MessageId":
        return cls(str(uuid4()))

    def __str__(self) -> str:
        return self.value
