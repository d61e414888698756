"""Redis pub/sub implementation of InvalidationNotifier.

Used when several worker processes serve the same data file. The worker
that writes invalidates its own cache immediately and publishes a message;
every other worker's ``listen()`` loop invalidates its cache on receipt.

Delivery is best-effort. A lost message only delays invalidation until the
next stats read, which compares source versions anyway.
"""

import json
import logging
import uuid
from typing import TYPE_CHECKING

import redis.asyncio as redis
from redis.exceptions import RedisError

from catalog_api.config import settings

if TYPE_CHECKING:
    from catalog_api.services import StatsCache

logger = logging.getLogger(__name__)


class RedisInvalidationNotifier:
    """Fan out cache invalidations over a Redis channel.

    This class satisfies the InvalidationNotifier protocol through
    structural typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        client: redis.Redis,
        cache: "StatsCache",
        channel: str | None = None,
        instance_id: str | None = None,
    ) -> None:
        """Initialize the notifier.

        Args:
            client: asyncio Redis client.
            cache: Local stats cache to invalidate.
            channel: Pub/sub channel name. Defaults to settings.
            instance_id: Identifies this process in published messages.
        """
        self._client = client
        self._cache = cache
        self._channel = channel or settings.invalidation_channel
        self._instance_id = instance_id or uuid.uuid4().hex

    async def publish(self, reason: str) -> None:
        """Invalidate locally, then tell the other workers.

        Redis failures are logged, not raised.
        """
        self._cache.invalidate()
        message = json.dumps({"origin": self._instance_id, "reason": reason})
        try:
            await self._client.publish(self._channel, message)
        except RedisError as e:
            logger.warning("Failed to publish invalidation on %s: %s", self._channel, e)

    async def listen(self) -> None:
        """Invalidate the local cache for every message from other workers.

        Runs until cancelled.
        """
        pubsub = self._client.pubsub()
        await pubsub.subscribe(self._channel)
        logger.info("Listening for stats invalidations on %s", self._channel)
        try:
            async for message in pubsub.listen():
                if message.get("type") == "message":
                    self.handle_message(message.get("data"))
        finally:
            await pubsub.unsubscribe(self._channel)
            await pubsub.aclose()

    def handle_message(self, data: str | bytes | None) -> bool:
        """Apply one pub/sub payload.

        Args:
            data: Raw message payload

        Returns:
            True if the local cache was invalidated
        """
        if isinstance(data, bytes):
            data = data.decode()
        try:
            payload = json.loads(data or "")
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed invalidation message: %r", data)
            return False

        if not isinstance(payload, dict) or payload.get("origin") == self._instance_id:
            return False

        logger.debug("Remote invalidation from %s: %s", payload.get("origin"), payload.get("reason"))
        self._cache.invalidate()
        return True

    async def is_available(self) -> bool:
        """Check if Redis is reachable."""
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()

