"""
Valkey (Redis-compatible) backend for invoice storage.

Lets a shop keep its invoice slot and number counter in a Valkey instance
instead of a local file. Connection problems surface as redis exceptions;
nothing is retried or defaulted.
"""

import logging

import redis

from clients.base import JsonValueMixin

logger = logging.getLogger(__name__)


class ValkeyClient(JsonValueMixin):
    """
    KeyValueStorage over redis-py.

    Usage:
        storage = ValkeyClient("redis://localhost:6379/0")
        storage.set_json("aakash_furniture_invoices", [])
        storage.incr("aakash_furniture_invoices:seq")
    """

    def __init__(self, url: str):
        """
        Connect and ping once.

        Args:
            url: redis:// or rediss:// URL, database index in the path

        Raises:
            redis.ConnectionError: Server unreachable
        """
        self._client = redis.from_url(url, decode_responses=True)
        self._client.ping()
        logger.info("ValkeyClient connected")

    def ping(self) -> bool:
        self._client.ping()
        return True

    def get(self, key: str) -> str | None:
        """Stored string, or None for a missing key."""
        return self._client.get(key)

    def set(self, key: str, value: str) -> None:
        # No TTL: invoices are kept until deleted
        self._client.set(key, value)

    def delete(self, key: str) -> bool:
        """True if the key was there."""
        return self._client.delete(key) > 0

    def exists(self, key: str) -> bool:
        return self._client.exists(key) > 0

    def incr(self, key: str) -> int:
        """Atomic +1; a missing key counts from 0."""
        return self._client.incr(key)

    def close(self) -> None:
        self._client.close()
        logger.info("ValkeyClient closed")
