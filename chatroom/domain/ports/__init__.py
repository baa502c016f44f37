"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the core needs,
without specifying HOW it's done.

- repositories/   → Message and user persistence
- broadcaster.py  → Real-time fan-out of saved messages
"""

from chatroom.domain.ports.broadcaster import Broadcaster

__all__ = [
    "Broadcaster",
]
