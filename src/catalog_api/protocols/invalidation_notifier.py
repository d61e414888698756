"""Invalidation notifier protocol.

Defines a best-effort channel used to tell stats caches that the
collection changed. Caches stay correct without it because every read
compares source versions; notifications only drop stale entries early.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class InvalidationNotifier(Protocol):
    """Protocol for cache invalidation channels."""

    async def publish(self, reason: str) -> None:
        """Announce that the collection changed.

        Args:
            reason: Short human-readable cause, used for logging
        """
        ...
