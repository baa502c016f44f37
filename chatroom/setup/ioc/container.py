"""
Dishka DI Container Setup.

Providers:
- repository_provider(settings) → MessageRepository, UserRepository
  (in-memory by default, Prisma when PERSISTENCE_BACKEND=prisma)
- BroadcastProvider → WebSocketBroadcaster hub and the Broadcaster port
  (the hub itself, or Redis pub/sub when BROADCAST_BACKEND=redis)
- ServiceProvider → MessageService, UserService

Dishka concepts:
- Scope.APP = created ONCE, shared across all requests (stores, hub, clients)
- Scope.REQUEST = new instance per HTTP request (services)
- Async generator providers run their cleanup when the container closes

Flow:
  Container → provides → InMemoryMessageRepository → to → MessageService
                                    ↓
                            uses MessageRepository interface
"""

import asyncio
import logging
from typing import AsyncIterable, Optional
from dishka import AsyncContainer, Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider
from chatroom.application.services.message_service import MessageService
from chatroom.application.services.user_service import UserService
from chatroom.config.settings import Config, get_config
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.domain.ports.repositories import MessageRepository, UserRepository
from chatroom.infrastructure.broadcast import (
    RedisBroadcaster,
    WebSocketBroadcaster,
    relay_events,
)
from chatroom.infrastructure.persistence import (
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from chatroom.infrastructure.redis_client import close_redis_client, create_redis_client

logger = logging.getLogger(__name__)


class InMemoryRepositoryProvider(Provider):
    """Process-local stores. Contents live as long as the container."""

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        return InMemoryMessageRepository()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return InMemoryUserRepository()


class BroadcastProvider(Provider):
    def __init__(self, settings: type[Config] = Config):
        super().__init__()
        self._settings = settings

    # ==================== BROADCAST ====================

    @provide(scope=Scope.APP)
    def get_hub(self) -> WebSocketBroadcaster:
        """Local subscribers of this process; /ws registers here."""
        return WebSocketBroadcaster()

    @provide(scope=Scope.APP)
    async def get_broadcaster(self, hub: WebSocketBroadcaster) -> AsyncIterable[Broadcaster]:
        """
        Provide the Broadcaster port.

        - websocket: publish straight into the local hub
        - redis: publish to the Redis channel and relay that channel into the
          local hub, so every worker's subscribers see every message
        """
        if self._settings.BROADCAST_BACKEND != "redis":
            yield hub
            return

        client = await create_redis_client(self._settings.REDIS_URL)
        channel = self._settings.REDIS_CHANNEL
        relay = asyncio.create_task(relay_events(client, channel, hub))
        try:
            yield RedisBroadcaster(client, channel)
        finally:
            relay.cancel()
            try:
                await relay
            except asyncio.CancelledError:
                logger.debug("[BROADCAST] Relay stopped")
            except Exception as e:
                logger.error(f"[BROADCAST] Relay task had failed: {e!r}")
            finally:
                await close_redis_client(client)


class ServiceProvider(Provider):
    # ==================== SERVICES ====================

    @provide(scope=Scope.REQUEST)
    def get_message_service(self, message_repository: MessageRepository) -> MessageService:
        return MessageService(message_repository)

    @provide(scope=Scope.REQUEST)
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        return UserService(user_repository)


def repository_provider(settings: type[Config] = Config) -> Provider:
    """Pick the persistence provider for PERSISTENCE_BACKEND."""
    if settings.PERSISTENCE_BACKEND == "prisma":
        # Needs a generated Prisma client, so only imported when selected
        from chatroom.setup.ioc.prisma_provider import PrismaRepositoryProvider

        return PrismaRepositoryProvider()
    if settings.PERSISTENCE_BACKEND != "memory":
        raise ValueError(f"Unknown PERSISTENCE_BACKEND: {settings.PERSISTENCE_BACKEND!r}")
    return InMemoryRepositoryProvider()


def create_container(settings: Optional[type[Config]] = None) -> AsyncContainer:
    """
    Create and configure the DI container.

    - make_async_container() creates the container with all providers
    - Call this ONCE at app startup
    """
    settings = settings or get_config()
    logger.info(
        f"[DI] persistence={settings.PERSISTENCE_BACKEND} broadcast={settings.BROADCAST_BACKEND}"
    )
    return make_async_container(
        repository_provider(settings),
        BroadcastProvider(settings),
        ServiceProvider(),
        FastapiProvider(),
    )
