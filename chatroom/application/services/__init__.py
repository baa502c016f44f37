from chatroom.application.services.message_service import MessageService
from chatroom.application.services.user_service import UserService

__all__ = ["MessageService", "UserService"]
