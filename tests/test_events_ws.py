"""
Tests for the broadcast channel: /ws subscription and the broadcasters.

Run with: pytest tests/test_events_ws.py -v
"""

import asyncio
import json
from dishka import make_async_container
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError
from chatroom.config.settings import TestingConfig
from chatroom.domain.ports.broadcaster import Broadcaster
from chatroom.fastapi_app import create_fastapi_app
from chatroom.infrastructure.broadcast import (
    RedisBroadcaster,
    WebSocketBroadcaster,
    relay_events,
)
from chatroom.setup.ioc import BroadcastProvider, InMemoryRepositoryProvider, ServiceProvider
import chatroom.setup.ioc.container as container_module


class FakeSocket:
    def __init__(self, broken=False):
        self.broken = broken
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, frame):
        if self.broken:
            raise RuntimeError("socket closed")
        self.sent.append(frame)


class FakePubSub:
    """Replays `messages`; an Exception in the list is raised at that point."""

    def __init__(self, messages, broken_teardown=False):
        self._messages = messages
        self._broken_teardown = broken_teardown
        self.channels = []
        self.closed = False

    async def subscribe(self, channel):
        self.channels.append(channel)

    async def unsubscribe(self, channel):
        if self._broken_teardown:
            raise RedisConnectionError("connection lost")
        self.channels.remove(channel)

    async def aclose(self):
        if self._broken_teardown:
            raise RedisConnectionError("connection lost")
        self.closed = True

    async def listen(self):
        for message in self._messages:
            if isinstance(message, Exception):
                raise message
            yield message


class FakeRedis:
    def __init__(self, pubsubs=(), fail=False):
        self._pubsubs = list(pubsubs)
        self.fail = fail
        self.published = []
        self.closed = False

    async def publish(self, channel, data):
        if self.fail:
            raise RedisConnectionError("redis down")
        self.published.append((channel, data))
        return 1

    def pubsub(self):
        return self._pubsubs.pop(0)

    async def aclose(self):
        self.closed = True



class TestWebSocketEndpoint:
    def test_subscriber_receives_message_update(self):
        """Test that a /ws client receives the message saved through /addMessage."""
        container = make_async_container(
            InMemoryRepositoryProvider(),
            BroadcastProvider(TestingConfig),
            ServiceProvider(),
            FastapiProvider(),
        )
        app = create_fastapi_app(container=container, settings=TestingConfig)

        with TestClient(app) as client:
            with client.websocket_connect("/ws") as websocket:
                response = client.post(
                    "/addMessage", json={"messageToAdd": {"from": "alice", "text": "hi"}}
                )
                frame = websocket.receive_json()

        assert response.status_code == 200
        assert frame == {"event": "messageUpdate", "data": {"msg": response.json()}}


class TestWebSocketBroadcaster:
    def test_publish_reaches_every_subscriber(self):
        hub = WebSocketBroadcaster()
        first, second = FakeSocket(), FakeSocket()

        async def scenario():
            await hub.connect(first)
            await hub.connect(second)
            await hub.publish("messageUpdate", {"msg": {"text": "hi"}})

        asyncio.run(scenario())

        expected = {"event": "messageUpdate", "data": {"msg": {"text": "hi"}}}
        assert first.accepted and second.accepted
        assert first.sent == [expected]
        assert second.sent == [expected]

    def test_failed_subscriber_is_dropped(self):
        """Test that one broken socket neither raises nor blocks the others."""
        hub = WebSocketBroadcaster()
        healthy, broken = FakeSocket(), FakeSocket(broken=True)

        async def scenario():
            await hub.connect(healthy)
            await hub.connect(broken)
            await hub.publish("messageUpdate", {"msg": 1})
            await hub.publish("messageUpdate", {"msg": 2})

        asyncio.run(scenario())

        assert hub.subscriber_count == 1
        assert [frame["data"]["msg"] for frame in healthy.sent] == [1, 2]

    def test_publish_without_subscribers_is_a_no_op(self):
        hub = WebSocketBroadcaster()
        asyncio.run(hub.publish("messageUpdate", {"msg": 1}))
        assert hub.subscriber_count == 0

    def test_disconnect_unknown_socket_is_ignored(self):
        hub = WebSocketBroadcaster()
        hub.disconnect(FakeSocket())
        assert hub.subscriber_count == 0


class TestRedisBroadcaster:
    def test_publishes_json_frame_to_channel(self):
        redis = FakeRedis()
        broadcaster = RedisBroadcaster(redis, "chatroom:events")

        asyncio.run(broadcaster.publish("messageUpdate", {"msg": {"text": "hi"}}))

        channel, data = redis.published[0]
        assert channel == "chatroom:events"
        assert json.loads(data) == {"event": "messageUpdate", "data": {"msg": {"text": "hi"}}}

    def test_redis_failure_is_not_raised(self):
        broadcaster = RedisBroadcaster(FakeRedis(fail=True), "chatroom:events")
        asyncio.run(broadcaster.publish("messageUpdate", {"msg": {}}))

    def test_relay_forwards_frames_to_local_hub(self):
        """Test that relayed frames reach local sockets and noise is skipped."""
        frame = {"event": "messageUpdate", "data": {"msg": {"text": "hi"}}}
        pubsub = FakePubSub(
            [
                {"type": "subscribe", "data": 1},
                {"type": "message", "data": "{not json"},
                {"type": "message", "data": json.dumps(frame)},
            ]
        )
        hub = WebSocketBroadcaster()
        socket = FakeSocket()

        async def scenario():
            await hub.connect(socket)
            await relay_events(FakeRedis([pubsub]), "chatroom:events", hub)

        asyncio.run(scenario())

        assert socket.sent == [frame]
        assert pubsub.channels == []
        assert pubsub.closed

    def test_relay_resubscribes_after_connection_loss(self):
        """Test that a dropped connection is torn down quietly and the relay carries on."""
        frame = {"event": "messageUpdate", "data": {"msg": {"text": "after"}}}
        dropped = FakePubSub(
            [{"type": "subscribe", "data": 1}, RedisConnectionError("connection lost")],
            broken_teardown=True,
        )
        fresh = FakePubSub([{"type": "message", "data": json.dumps(frame)}])
        hub = WebSocketBroadcaster()
        socket = FakeSocket()

        async def scenario():
            await hub.connect(socket)
            await relay_events(
                FakeRedis([dropped, fresh]), "chatroom:events", hub, retry_delay=0
            )

        asyncio.run(scenario())

        assert socket.sent == [frame]
        assert fresh.closed


class RedisTestingConfig(TestingConfig):
    BROADCAST_BACKEND = "redis"


class TestRedisBroadcastProvider:
    def test_failed_relay_does_not_block_shutdown(self, monkeypatch):
        """Test that closing the container still closes Redis when the relay has died."""
        client = FakeRedis()

        async def fake_create_redis_client(url=None):
            return client

        async def failing_relay(redis, channel, hub):
            raise RuntimeError("relay crashed")

        monkeypatch.setattr(container_module, "create_redis_client", fake_create_redis_client)
        monkeypatch.setattr(container_module, "relay_events", failing_relay)

        async def scenario():
            container = make_async_container(BroadcastProvider(RedisTestingConfig))
            broadcaster = await container.get(Broadcaster)
            await asyncio.sleep(0)
            await container.close()
            return broadcaster

        broadcaster = asyncio.run(scenario())

        assert isinstance(broadcaster, RedisBroadcaster)
        assert client.closed
