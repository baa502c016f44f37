"""
Async Redis Client Factory.

Creates the Redis client used by the pub/sub broadcaster.
Uses redis.asyncio so publishing and relaying share the app's event loop.
"""

import logging
import redis.asyncio as redis
from redis.asyncio import Redis
from chatroom.config.settings import Config

logger = logging.getLogger(__name__)


async def create_redis_client(url: str | None = None) -> Redis:
    """
    Create async Redis client with connection pool.

    Args:
        url: Redis URL, defaults to Config.REDIS_URL

    Raises:
        redis.ConnectionError: If Redis is not reachable
    """
    url = url or Config.REDIS_URL
    client = redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5.0,
    )

    # Test connection
    await client.ping()
    logger.info(f"[Redis] Connected to {url}")

    return client


async def close_redis_client(client: Redis) -> None:
    """Close Redis client connection. Called on container shutdown."""
    if client:
        await client.aclose()
        logger.info("[Redis] Connection closed")
