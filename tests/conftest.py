import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient
from chatroom.config.settings import TestingConfig
from chatroom.domain.exceptions import PersistenceError
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.domain.ports.repositories import MessageRepository, UserRepository
from chatroom.fastapi_app import create_fastapi_app
from chatroom.infrastructure.broadcast import WebSocketBroadcaster
from chatroom.infrastructure.persistence import (
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from chatroom.setup.ioc import ServiceProvider


class RecordingBroadcaster(Broadcaster):
    """Keeps every published event instead of sending it anywhere."""

    def __init__(self):
        self.events = []

    async def publish(self, event, payload):
        self.events.append((event, payload))


class FlakyMessageRepository(InMemoryMessageRepository):
    """In-memory store that records calls and fails on demand."""

    def __init__(self):
        super().__init__()
        self.fail = False
        self.calls = []

    def _enter(self, name):
        self.calls.append(name)
        if self.fail:
            raise PersistenceError("backend unavailable")

    async def save(self, message):
        self._enter("save")
        return await super().save(message)

    async def list_by_sent_at(self):
        self._enter("list_by_sent_at")
        return await super().list_by_sent_at()


class FlakyUserRepository(InMemoryUserRepository):
    def __init__(self):
        super().__init__()
        self.fail = False
        self.calls = []

    def _enter(self, name):
        self.calls.append(name)
        if self.fail:
            raise PersistenceError("backend unavailable")

    async def save(self, user):
        self._enter("save")
        return await super().save(user)

    async def get_by_username(self, username):
        self._enter("get_by_username")
        return await super().get_by_username(username)

    async def get_by_credentials(self, username, password):
        self._enter("get_by_credentials")
        return await super().get_by_credentials(username, password)

    async def update_by_username(self, username, updates):
        self._enter("update_by_username")
        return await super().update_by_username(username, updates)

    async def delete_by_username(self, username):
        self._enter("delete_by_username")
        return await super().delete_by_username(username)


class FakeInfrastructureProvider(Provider):
    """Hands the container the exact instances the test holds."""

    def __init__(self, message_repository, user_repository, broadcaster, hub):
        super().__init__()
        self._message_repository = message_repository
        self._user_repository = user_repository
        self._broadcaster = broadcaster
        self._hub = hub

    @provide(scope=Scope.APP)
    def get_message_repository(self) -> MessageRepository:
        return self._message_repository

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        return self._user_repository

    @provide(scope=Scope.APP)
    def get_broadcaster(self) -> Broadcaster:
        return self._broadcaster

    @provide(scope=Scope.APP)
    def get_hub(self) -> WebSocketBroadcaster:
        return self._hub


@pytest.fixture()
def message_repository():
    return FlakyMessageRepository()


@pytest.fixture()
def user_repository():
    return FlakyUserRepository()


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def infrastructure(message_repository, user_repository, broadcaster):
    return FakeInfrastructureProvider(
        message_repository, user_repository, broadcaster, WebSocketBroadcaster()
    )


@pytest.fixture()
def app(infrastructure):
    """Create a FastAPI app wired to in-memory fakes for each test."""
    container = make_async_container(ServiceProvider(), infrastructure, FastapiProvider())
    return create_fastapi_app(container=container, settings=TestingConfig)


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    return TestClient(app)
