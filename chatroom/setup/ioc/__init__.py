from chatroom.setup.ioc.container import (
    BroadcastProvider,
    InMemoryRepositoryProvider,
    ServiceProvider,
    create_container,
    repository_provider,
)

__all__ = [
    "BroadcastProvider",
    "InMemoryRepositoryProvider",
    "ServiceProvider",
    "create_container",
    "repository_provider",
]
