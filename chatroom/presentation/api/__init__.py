"""
API Routers - FastAPI endpoint definitions.
"""

from chatroom.presentation.api.messages import router as messages_router
from chatroom.presentation.api.users import router as users_router
from chatroom.presentation.api.events import router as events_router
from chatroom.presentation.api.metrics import router as metrics_router

__all__ = [
    "messages_router",
    "users_router",
    "events_router",
    "metrics_router",
]
