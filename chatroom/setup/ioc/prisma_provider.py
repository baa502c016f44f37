"""
Prisma-backed repositories for PERSISTENCE_BACKEND=prisma.

Run `prisma generate` (schema.prisma at the repo root) before selecting this
backend.
"""

import logging
from typing import AsyncIterable
from dishka import Provider, Scope, provide
from prisma import Prisma
from chatroom.domain.ports.repositories import MessageRepository, UserRepository
from chatroom.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)
from chatroom.infrastructure.persistence.prisma_user_repository import PrismaUserRepository

logger = logging.getLogger(__name__)


class PrismaRepositoryProvider(Provider):
    # ==================== DATABASE ====================

    @provide(scope=Scope.APP)
    async def get_prisma(self) -> AsyncIterable[Prisma]:
        """
        Provide Prisma client (singleton, app-scoped).

        - connect() on first use, disconnect() when the container closes
        """
        prisma = Prisma()
        await prisma.connect()
        logger.info("[Prisma] Connected")
        yield prisma
        await prisma.disconnect()
        logger.info("[Prisma] Disconnected")

    # ==================== REPOSITORIES ====================

    @provide(scope=Scope.APP)
    def get_message_repository(self, prisma: Prisma) -> MessageRepository:
        return PrismaMessageRepository(prisma)

    @provide(scope=Scope.APP)
    def get_user_repository(self, prisma: Prisma) -> UserRepository:
        return PrismaUserRepository(prisma)
