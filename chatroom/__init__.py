"""
Chatroom backend.

A small FastAPI service that persists short chat messages, republishes every
saved message to live WebSocket subscribers, and manages username-keyed
user accounts.
"""

__version__ = "1.0.0"
