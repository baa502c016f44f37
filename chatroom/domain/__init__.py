"""
DOMAIN LAYER - Messages, users and the ports the core needs

This layer contains:
- Entities: Message, User and the SafeUser projection
- Value Objects: MessageId
- Ports: Repository and broadcaster interfaces that infrastructure implements
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations (no database, no HTTP, no sockets)
3. Only depends on Python stdlib
"""
