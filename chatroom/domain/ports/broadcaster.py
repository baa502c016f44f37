"""
Broadcaster Port - Fire-and-forget publish of named events to live subscribers.
Implementations: chatroom/infrastructure/broadcast/
"""

from abc import ABC, abstractmethod
from typing import Any


class Broadcaster(ABC):
    @abstractmethod
    async def publish(self, event: str, payload: dict[str, Any]) -> None:
        """
        Publish `payload` under `event` to every current subscriber.

        Best effort: no acknowledgment, no replay. Implementations log delivery
        failures and never raise them to the caller.
        """
        ...
