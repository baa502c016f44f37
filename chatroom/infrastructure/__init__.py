"""
INFRASTRUCTURE LAYER - Implementations of the domain ports

- persistence/ → in-memory and Prisma (PostgreSQL) repositories
- broadcast/   → WebSocket hub and Redis pub/sub broadcasters
- redis_client.py → async Redis client factory
"""
