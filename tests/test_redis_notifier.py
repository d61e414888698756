"""
Tests for Redis invalidation fan-out, using a stand-in client.
"""

import asyncio
import json
from unittest.mock import AsyncMock, Mock

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

from catalog_api.repositories import InvalidationNotifier, RedisInvalidationNotifier
from catalog_api.services import StatsCache


@pytest.fixture
def redis_client():
    client = AsyncMock()
    client.publish.return_value = 1
    client.ping.return_value = True
    return client


@pytest_asyncio.fixture
async def warm_cache(memory_source):
    cache = StatsCache.create(source=memory_source)
    await cache.get()
    return cache


@pytest.mark.asyncio
async def test_satisfies_protocol(redis_client, warm_cache):
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test")
    assert isinstance(notifier, InvalidationNotifier)


@pytest.mark.asyncio
async def test_publish_invalidates_locally_and_broadcasts(redis_client, warm_cache):
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test", instance_id="a")

    await notifier.publish("item 4 created")

    assert warm_cache.state == "empty"
    channel, message = redis_client.publish.await_args.args
    assert channel == "test"
    assert json.loads(message) == {"origin": "a", "reason": "item 4 created"}


@pytest.mark.asyncio
async def test_publish_survives_redis_failure(redis_client, warm_cache):
    redis_client.publish.side_effect = RedisConnectionError("down")
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test")

    await notifier.publish("item 4 created")

    assert warm_cache.state == "empty"


@pytest.mark.asyncio
async def test_message_from_other_worker_invalidates(redis_client, warm_cache):
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test", instance_id="a")

    handled = notifier.handle_message(json.dumps({"origin": "b", "reason": "item 9 created"}).encode())

    assert handled is True
    assert warm_cache.state == "empty"


@pytest.mark.asyncio
@pytest.mark.parametrize("data", ['{"origin": "a", "reason": "own"}', "not json", "[1, 2]", None])
async def test_ignored_messages(redis_client, warm_cache, data):
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test", instance_id="a")

    assert notifier.handle_message(data) is False
    assert warm_cache.state == "valid"


@pytest.mark.asyncio
async def test_is_available(redis_client, warm_cache):
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test")
    assert await notifier.is_available() is True

    redis_client.ping.side_effect = RedisConnectionError("down")
    assert await notifier.is_available() is False


class FakePubSub:
    """Subscription that delivers the given messages, then stays open."""

    def __init__(self, messages):
        self._messages = messages
        self.subscribe = AsyncMock()
        self.unsubscribe = AsyncMock()
        self.aclose = AsyncMock()

    async def listen(self):
        for message in self._messages:
            yield message
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_listen_invalidates_and_cleans_up(redis_client, warm_cache):
    pubsub = FakePubSub(
        [
            {"type": "subscribe", "data": 1},
            {"type": "message", "data": json.dumps({"origin": "b", "reason": "item 9 created"})},
        ]
    )
    redis_client.pubsub = Mock(return_value=pubsub)
    notifier = RedisInvalidationNotifier(client=redis_client, cache=warm_cache, channel="test", instance_id="a")

    task = asyncio.create_task(notifier.listen())
    for _ in range(100):
        if warm_cache.state == "empty":
            break
        await asyncio.sleep(0.01)

    assert warm_cache.state == "empty"
    assert warm_cache.metrics.invalidations == 1

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    pubsub.subscribe.assert_awaited_once_with("test")
    pubsub.unsubscribe.assert_awaited_once_with("test")
    pubsub.aclose.assert_awaited_once()
